"""
archmap - Implicit Module Structure Recovery

Extracts per-directory metrics and cross-directory dependencies from a
source tree, computes Martin coupling metrics, and clusters directories
into communities by greedy modularity optimization.
"""

__version__ = "0.1.0"

from .api import analyze_tree, detect
from .architecture.models import CouplingMetrics, DirectoryRecord
from .config import Settings, load_settings
from .graph.models import CommunityResult, DirectoryGraph

__all__ = [
    "analyze_tree",  # Extraction stage
    "detect",  # Community detection stage
    "CommunityResult",
    "CouplingMetrics",
    "DirectoryGraph",
    "DirectoryRecord",
    "Settings",
    "load_settings",
]
