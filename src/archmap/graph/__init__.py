"""Directory graph construction and community detection."""

from .algorithms import detect_communities, modularity_gain, total_edges
from .builder import build_directory_graph
from .models import CommunityResult, DirectoryGraph

__all__ = [
    "CommunityResult",
    "DirectoryGraph",
    "build_directory_graph",
    "detect_communities",
    "modularity_gain",
    "total_edges",
]
