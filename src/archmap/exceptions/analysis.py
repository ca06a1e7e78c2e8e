"""Analysis-related exceptions: file access, dialects, persisted data."""

from pathlib import Path
from typing import List

from .base import ArchmapError


class AnalysisError(ArchmapError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class UnsupportedDialectError(AnalysisError):
    """Raised when a dialect name has no registered configuration."""

    def __init__(self, dialect: str, supported_dialects: List[str]):
        super().__init__(
            f"Unsupported dialect: {dialect}",
            details={"dialect": dialect, "supported": ", ".join(supported_dialects)},
        )
        self.dialect = dialect
        self.supported_dialects = supported_dialects


class InvalidAnalysisError(AnalysisError):
    """Raised when persisted analysis data does not have the expected shape."""

    def __init__(self, reason: str, key: str = ""):
        details = {"reason": reason}
        if key:
            details["key"] = key
        super().__init__("Invalid analysis data", details=details)
        self.reason = reason
        self.key = key
