"""Namespace-to-directory resolution.

Build configuration (autoload rules) is not available, so the directory that
"owns" a namespace is guessed, from most to least specific:

1. exact lookup in the namespace map,
2. the closest ancestor namespace present in the map,
3. the namespace read as a path, under the root or a conventional source root,
4. otherwise unresolved.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from ..config import DEFAULT_SETTINGS, Settings
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..scanning.dialects import DialectConfig
from ..scanning.scrubber import scrub
from ..scanning.symbols import extract_namespace
from ..scanning.walker import iter_source_directories, read_source

logger = get_logger(__name__)

NamespaceMap = Mapping[str, str]


def namespace_prefixes(namespace: str, separator: str) -> list[str]:
    """All prefixes of ``namespace``, shortest first, the full name last."""
    segments = [s for s in namespace.split(separator) if s]
    return [separator.join(segments[:i]) for i in range(1, len(segments) + 1)]


def build_namespace_map(
    root: Path,
    dialect: DialectConfig,
    settings: Optional[Settings] = None,
) -> NamespaceMap:
    """Map every declared namespace, and each of its prefixes, to a directory key.

    The first directory to claim an identifier keeps it. Later claims are
    ignored, which makes ambiguous namespaces resolve to the first directory
    met in walk order.

    Returns:
        Read-only mapping of namespace identifier -> directory key
    """
    sep = dialect.namespace_separator
    mapping: dict[str, str] = {}

    for directory in iter_source_directories(root, dialect, settings or DEFAULT_SETTINGS):
        for path in directory.files:
            try:
                text = read_source(path)
            except FileAccessError as e:
                logger.debug(f"Namespace pre-walk skipped {path}: {e.reason}")
                continue

            namespace = extract_namespace(scrub(text, dialect), dialect)
            if not namespace:
                continue

            prefixes = namespace_prefixes(namespace, sep)
            if not prefixes:
                continue
            owner = mapping.get(prefixes[-1])
            if owner is not None and owner != directory.key:
                logger.debug(
                    f"Namespace {prefixes[-1]} claimed by {directory.key}, keeping {owner}"
                )
            for prefix in prefixes:
                mapping.setdefault(prefix, directory.key)

    logger.debug(f"Namespace map: {len(mapping)} identifiers")
    return MappingProxyType(mapping)


class NamespaceResolver:
    """Resolves namespace-like identifiers to directory keys."""

    def __init__(self, namespace_map: NamespaceMap, root: Path, dialect: DialectConfig):
        self.namespace_map = namespace_map
        self.root = root
        self.dialect = dialect

    def resolve(self, identifier: str) -> Optional[str]:
        """Return the directory key owning ``identifier``, or None."""
        sep = self.dialect.namespace_separator
        segments = [s for s in identifier.strip().split(sep) if s]
        if not segments:
            return None

        # i == len(segments) is the exact lookup, then progressively shorter ancestors
        for i in range(len(segments), 0, -1):
            owner = self.namespace_map.get(sep.join(segments[:i]))
            if owner is not None:
                return owner

        guessed = self._guess_directory(segments)
        if guessed is None:
            logger.debug(f"Unresolved reference: {identifier}")
        return guessed

    def _guess_directory(self, segments: list[str]) -> Optional[str]:
        """Read the identifier as a path and look for its parent directory."""
        path = "/".join(segments)
        candidates = [path] + [f"{root}/{path}" for root in self.dialect.conventional_roots]

        for candidate in candidates:
            parent = posixpath.dirname(candidate)
            if not parent:
                # The analysis root itself is never a relation target
                continue
            if (self.root / parent).is_dir():
                return parent

        return None
