"""Source for analyses packed into a ZIP archive."""

import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterator

from gitgist.models import FileAnalysis
from gitgist.sources.layout import (
    INDEX_FILE,
    decode_analysis,
    in_analysis_order,
    index_order,
    is_analysis_file,
)


class ArchiveSource:
    """Source for ZIP archives of an analysis output directory.

    The archive may hold the layout at its root or under a single
    top-level folder; the shallowest index.json wins.
    """

    source_type = "zip"

    def can_handle(self, source: Path) -> bool:
        """Check if this is a zip file."""
        return source.suffix.lower() == ".zip" and source.is_file()

    def load(self, source: Path) -> Iterator[FileAnalysis]:
        """Yield analyses from a ZIP archive.

        Args:
            source: Path to the ZIP file

        Yields:
            FileAnalysis objects in analysis order
        """
        analyses = []
        index_name = None

        with zipfile.ZipFile(source, "r") as zf:
            for info in sorted(zf.infolist(), key=lambda i: i.filename):
                if info.is_dir():
                    continue

                name = PurePosixPath(info.filename)
                if name.name == INDEX_FILE:
                    if index_name is None or len(name.parts) < len(PurePosixPath(index_name).parts):
                        index_name = info.filename
                elif is_analysis_file(name.name):
                    analyses.append(decode_analysis(zf.read(info), info.filename))

            raw_index = zf.read(index_name) if index_name else None

        yield from in_analysis_order(analyses, index_order(raw_index, index_name or INDEX_FILE))
