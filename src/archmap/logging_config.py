"""
Logging configuration for archmap.

Every module logs through ``get_logger(__name__)``; the CLI installs the
handlers once per command from the resolved Settings:

    quiet    ERROR and above
    normal   WARNING and above (community detection hitting its pass bound)
    verbose  DEBUG (per-directory progress, skipped files, unresolved references)

Terminal records go to stderr through rich so that ``--format json`` output
on stdout stays pipeable.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidPathError

ROOT_LOGGER = "archmap"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route archmap records to the terminal and, optionally, a log file.

    Args:
        verbosity: One of "quiet", "normal", "verbose" (Settings.verbosity)
        log_file: Append records to this file as well; the file always
            receives DEBUG records, whatever the terminal level

    Returns:
        The root archmap logger

    Raises:
        InvalidPathError: If ``log_file`` cannot be opened
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    verbose = level == logging.DEBUG

    terminal = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        # Paths and namespaces contain "[" and "\"
        markup=False,
        show_path=verbose,
    )
    terminal.setLevel(level)
    handlers: list[logging.Handler] = [terminal]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise InvalidPathError(Path(log_file), f"cannot open log file: {e}")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    # Repeated CLI invocations in one process replace the previous handlers
    logging.basicConfig(format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if log_file else level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the archmap namespace ("scanning.walker" -> "archmap.scanning.walker")."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
