"""Directory walking shared by the namespace pre-walk and the aggregator.

The walk is depth-first and top-down. Sibling directories are visited in
sorted name order so that every "first seen" decision downstream is
reproducible across platforms.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from .dialects import DialectConfig

logger = get_logger(__name__)

# Record key of the analysis root itself.
ROOT_KEY = "/"


@dataclass
class SourceDirectory:
    """A directory holding at least one analyzable file."""

    key: str
    path: Path
    files: list[Path] = field(default_factory=list)


def directory_key(root: Path, directory: Path) -> str:
    """Key of ``directory`` relative to ``root``, with "/" separators."""
    relative = directory.relative_to(root).as_posix()
    return ROOT_KEY if relative in ("", ".") else relative


def iter_source_directories(
    root: Path,
    dialect: DialectConfig,
    settings: Optional[Settings] = None,
) -> Iterator[SourceDirectory]:
    """Yield every directory under ``root`` (inclusive) holding source files.

    Directories without source files are not yielded but are still
    descended into.
    """
    settings = settings or DEFAULT_SETTINGS
    stack: list[Path] = [root]
    seen: set[Path] = set()

    while stack:
        current = stack.pop()
        # Followed symlinks can point back up the tree
        resolved = current.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)

        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.debug(f"Skipping unlistable directory {current}: {e}")
            continue

        files = [p for p in entries if _is_source_file(p, dialect)]
        if files:
            yield SourceDirectory(key=directory_key(root, current), path=current, files=files)

        subdirs = [p for p in entries if _should_descend(p, settings)]
        # Reversed so the smallest name is popped first
        stack.extend(reversed(subdirs))


def read_source(path: Path) -> str:
    """Read a source file as text.

    Raises:
        FileAccessError: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(path, str(e))


def _is_source_file(path: Path, dialect: DialectConfig) -> bool:
    if path.name.startswith(".") or not path.is_file():
        return False
    return path.suffix.lower() in dialect.extensions


def _should_descend(path: Path, settings: Settings) -> bool:
    if not path.is_dir():
        return False
    if path.is_symlink() and not settings.follow_symlinks:
        return False
    if path.name.startswith(".") and not settings.allow_hidden_dirs:
        return False
    return path.name not in settings.exclude_dirs
