"""Source for analyses stored as a folder of JSON files."""

import logging
import os
from pathlib import Path
from typing import Iterator

from gitgist.models import FileAnalysis
from gitgist.sources.layout import (
    INDEX_FILE,
    decode_analysis,
    in_analysis_order,
    index_order,
    is_analysis_file,
)

logger = logging.getLogger(__name__)


class FolderSource:
    """Source for an analysis output directory."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def load(self, source: Path) -> Iterator[FileAnalysis]:
        """Yield analyses from a folder recursively.

        Args:
            source: Path to the analysis folder

        Yields:
            FileAnalysis objects in analysis order
        """
        analyses = []
        for root, dirs, files in os.walk(source):
            # Deterministic traversal regardless of filesystem ordering
            dirs.sort()
            for filename in sorted(files):
                if not is_analysis_file(filename):
                    continue
                full_path = Path(root) / filename
                rel_path = full_path.relative_to(source)
                analyses.append(decode_analysis(full_path.read_bytes(), str(rel_path)))

        index_path = source / INDEX_FILE
        raw_index = index_path.read_bytes() if index_path.is_file() else None
        ordered = in_analysis_order(analyses, index_order(raw_index, INDEX_FILE))

        logger.debug(f"Loaded {len(ordered)} analyses from {source}")
        yield from ordered
