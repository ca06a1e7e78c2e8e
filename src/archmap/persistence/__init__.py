"""JSON persistence for analysis records and community results."""

from .serialization import (
    analysis_filename,
    dumps_communities,
    dumps_records,
    find_latest_analysis,
    loads_records,
    read_analysis,
    records_from_dict,
    records_to_dict,
    write_analysis,
    write_communities,
)

__all__ = [
    "analysis_filename",
    "dumps_communities",
    "dumps_records",
    "find_latest_analysis",
    "loads_records",
    "read_analysis",
    "records_from_dict",
    "records_to_dict",
    "write_analysis",
    "write_communities",
]
