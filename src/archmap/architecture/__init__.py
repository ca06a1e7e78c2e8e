"""Architecture extraction: namespace resolution, directory records, coupling."""

from .aggregator import DirectoryAggregator
from .analyzer import TreeAnalyzer, analyze_tree
from .metrics import compute_coupling_metrics, compute_instability
from .models import CouplingMetrics, DirectoryRecord
from .resolver import NamespaceResolver, build_namespace_map

__all__ = [
    "CouplingMetrics",
    "DirectoryAggregator",
    "DirectoryRecord",
    "NamespaceResolver",
    "TreeAnalyzer",
    "analyze_tree",
    "build_namespace_map",
    "compute_coupling_metrics",
    "compute_instability",
]
