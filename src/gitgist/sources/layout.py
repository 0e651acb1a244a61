"""On-disk layout of stored analyses shared by the folder and archive sources.

The analysis stage writes one ``<name>_analysis.json`` per source file,
mirroring the repository tree, plus an ``index.json`` whose ``files`` list
records the order in which files were analyzed.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional

from gitgist.models import AnalysisFormatError, FileAnalysis

ANALYSIS_SUFFIX = "_analysis.json"
INDEX_FILE = "index.json"


def is_analysis_file(name: str) -> bool:
    return name.endswith(ANALYSIS_SUFFIX)


def decode_json(raw: bytes, origin: str) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise AnalysisFormatError(f"{origin}: not valid JSON ({e})") from e


def decode_analysis(raw: bytes, origin: str) -> FileAnalysis:
    """Decode one stored analysis, naming its origin in any error."""
    data = decode_json(raw, origin)
    try:
        return FileAnalysis.from_dict(data)
    except AnalysisFormatError as e:
        raise AnalysisFormatError(f"{origin}: {e}") from e


def index_order(raw_index: Optional[bytes], origin: str) -> list[str]:
    """Return the analyzed-file order recorded in index.json, if any."""
    if raw_index is None:
        return []
    data = decode_json(raw_index, origin)
    files = data.get("files") if isinstance(data, dict) else None
    if not isinstance(files, list):
        return []
    return [f for f in files if isinstance(f, str)]


def recorded_repository(source: Path) -> Optional[str]:
    """Repository name the analysis stage recorded for source, if any.

    Read from index.json in an analysis folder, or from the top-level
    ``repository`` key of a single analysis-result JSON file.
    """
    if source.is_dir():
        record = source / INDEX_FILE
    elif source.suffix.lower() == ".json" and source.is_file():
        record = source
    else:
        return None
    if not record.is_file():
        return None

    data = decode_json(record.read_bytes(), record.name)
    repository = data.get("repository") if isinstance(data, dict) else None
    return repository if isinstance(repository, str) and repository else None


def in_analysis_order(analyses: Iterable[FileAnalysis], order: list[str]) -> list[FileAnalysis]:
    """Sort analyses by their position in order; unlisted files go last, by path."""
    position = {path: i for i, path in enumerate(order)}
    return sorted(
        analyses,
        key=lambda a: (position.get(a.file, len(position)), a.file),
    )
