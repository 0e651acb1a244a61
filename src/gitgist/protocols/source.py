"""Protocol for analysis sources."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from gitgist.models import FileAnalysis


@runtime_checkable
class AnalysisSource(Protocol):
    """Protocol for loaders of stored file analyses.

    Implementations handle different storage layouts (folder, zip, single file).
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'folder', 'zip')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this source can load the given path."""
        ...

    def load(self, source: Path) -> Iterator[FileAnalysis]:
        """Yield file analyses in the order they were produced."""
        ...
