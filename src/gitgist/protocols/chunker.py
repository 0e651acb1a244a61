"""Protocol for chunking strategies."""

from typing import Protocol, runtime_checkable

from gitgist.models import Chunk, FileAnalysis


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for turning one file's syntax summary into chunks.

    Implementations must be pure: identical input yields identical output,
    and every chunk's file equals the analysis file.
    """

    def chunk(self, analysis: FileAnalysis) -> list[Chunk]:
        """Build the chunks for a single file."""
        ...
