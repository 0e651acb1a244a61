"""Loaders for stored file analyses."""

from pathlib import Path
from typing import Iterable, Optional

from gitgist.protocols import AnalysisSource
from gitgist.sources.archive_source import ArchiveSource
from gitgist.sources.folder_source import FolderSource
from gitgist.sources.json_source import JsonFileSource


def default_sources() -> list[AnalysisSource]:
    """Sources tried by get_source, most specific first."""
    return [ArchiveSource(), JsonFileSource(), FolderSource()]


def get_source(
    source: Path | str, sources: Optional[Iterable[AnalysisSource]] = None
) -> Optional[AnalysisSource]:
    """Find a source that can load the given path.

    Args:
        source: Path to stored analyses (folder, zip or JSON file)
        sources: Candidates to try; defaults to default_sources()

    Returns:
        An AnalysisSource that can handle the path, or None
    """
    source_path = Path(source)
    for candidate in sources if sources is not None else default_sources():
        if candidate.can_handle(source_path):
            return candidate
    return None


__all__ = [
    "ArchiveSource",
    "FolderSource",
    "JsonFileSource",
    "default_sources",
    "get_source",
]
