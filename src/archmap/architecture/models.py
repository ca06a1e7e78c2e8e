"""Per-directory analysis records.

A DirectoryRecord is created the first time a directory turns out to hold
source files, grows while its files are processed, and gets its coupling
block filled in only once the whole tree has been walked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InvalidAnalysisError
from ..scanning.symbols import FileSymbols


@dataclass
class CouplingMetrics:
    """Martin coupling metrics for one directory."""

    efferent_coupling: int = 0  # Ce: distinct directories this one depends on
    afferent_coupling: int = 0  # Ca: distinct directories depending on this one
    instability: float = 0.0  # Ce / (Ca + Ce), 0.0 when isolated


@dataclass
class DirectoryRecord:
    """Metrics and outgoing relations of one directory."""

    path: str
    classes: int = 0
    interfaces: int = 0
    abstracts: int = 0
    total: int = 0
    file_count: int = 0
    loc_total: int = 0
    ccn_total: int = 0
    relations: set[str] = field(default_factory=set)
    metrics: CouplingMetrics = field(default_factory=CouplingMetrics)

    def add_file(self, symbols: FileSymbols) -> None:
        """Accumulate one file's counts."""
        self.file_count += 1
        self.loc_total += symbols.loc
        self.ccn_total += symbols.ccn
        self.classes += symbols.classes
        self.interfaces += symbols.interfaces
        self.abstracts += symbols.abstracts

    def finalize(self) -> None:
        """Derive fields that depend on every file of the directory."""
        self.total = self.classes + self.interfaces + self.abstracts

    def to_dict(self) -> dict[str, Any]:
        return {
            "classes": self.classes,
            "interfaces": self.interfaces,
            "abstracts": self.abstracts,
            "total": self.total,
            "file_count": self.file_count,
            "relations": sorted(self.relations),
            "metrics": {
                "efferent_coupling": self.metrics.efferent_coupling,
                "afferent_coupling": self.metrics.afferent_coupling,
                "instability": self.metrics.instability,
                "loc_total": self.loc_total,
                "ccn_total": self.ccn_total,
            },
        }

    @classmethod
    def from_dict(cls, path: str, data: dict[str, Any]) -> DirectoryRecord:
        try:
            metrics = data.get("metrics", {})
            return cls(
                path=path,
                classes=int(data.get("classes", 0)),
                interfaces=int(data.get("interfaces", 0)),
                abstracts=int(data.get("abstracts", 0)),
                total=int(data.get("total", 0)),
                file_count=int(data.get("file_count", 0)),
                loc_total=int(metrics.get("loc_total", 0)),
                ccn_total=int(metrics.get("ccn_total", 0)),
                relations=set(data.get("relations", [])),
                metrics=CouplingMetrics(
                    efferent_coupling=int(metrics.get("efferent_coupling", 0)),
                    afferent_coupling=int(metrics.get("afferent_coupling", 0)),
                    instability=float(metrics.get("instability", 0.0)),
                ),
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidAnalysisError(str(e), key=path)
