"""JSON persistence of analysis records and community results."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..architecture.models import DirectoryRecord
from ..exceptions import FileAccessError, InvalidAnalysisError
from ..graph.models import CommunityResult

ANALYSIS_GLOB = "analysis_*.json"


def records_to_dict(records: Dict[str, DirectoryRecord]) -> Dict[str, Any]:
    """Plain nested dict of the records, keyed by directory key."""
    return {key: record.to_dict() for key, record in records.items()}


def records_from_dict(data: Any) -> Dict[str, DirectoryRecord]:
    """Rebuild records from ``records_to_dict`` output.

    Raises:
        InvalidAnalysisError: If ``data`` is not a mapping of directory records
    """
    if not isinstance(data, dict):
        raise InvalidAnalysisError(f"expected an object, got {type(data).__name__}")

    records: Dict[str, DirectoryRecord] = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            raise InvalidAnalysisError("directory entry is not an object", key=key)
        records[key] = DirectoryRecord.from_dict(key, value)
    return records


def dumps_records(records: Dict[str, DirectoryRecord]) -> str:
    return _dumps(records_to_dict(records))


def loads_records(text: str) -> Dict[str, DirectoryRecord]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidAnalysisError(f"not valid JSON: {e}")
    return records_from_dict(data)


def write_analysis(records: Dict[str, DirectoryRecord], path: Path) -> Path:
    _write_text(path, dumps_records(records))
    return path


def read_analysis(path: Path) -> Dict[str, DirectoryRecord]:
    """Load records from an analysis JSON file.

    Raises:
        FileAccessError: If the file cannot be read
        InvalidAnalysisError: If the content is not an analysis
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, str(e))
    return loads_records(text)


def dumps_communities(result: CommunityResult) -> str:
    return _dumps(result.to_dict())


def write_communities(result: CommunityResult, path: Path) -> Path:
    _write_text(path, dumps_communities(result))
    return path


def analysis_filename(
    source: Union[str, Path],
    root_dir: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> str:
    """Default analysis file name: analysis_<project>[_root_<dir>]_<timestamp>.json."""
    name = Path(str(source).rstrip("/\\")).name.removesuffix(".git") or "local_project"
    suffix = f"_root_{root_dir.strip('/').replace('/', '_')}" if root_dir else ""
    stamp = (timestamp or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")
    return f"analysis_{name}{suffix}_{stamp}.json"


def find_latest_analysis(directory: Path) -> Optional[Path]:
    """Most recently modified analysis file in ``directory``, if any."""
    candidates = [p for p in directory.glob(ANALYSIS_GLOB) if p.is_file()]
    if not candidates:
        return None
    return max(candidates, key=lambda p: p.stat().st_mtime)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, str(e))
