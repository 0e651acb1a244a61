"""gitgist - syntax-summary chunks for semantic code search."""

from gitgist.chunkers import (
    RepositoryChunkAggregator,
    SyntaxChunker,
    build_chunks,
    chunk_all,
    merge_small_chunks,
    split_large_chunks,
)
from gitgist.models import Chunk, ChunkOptions, ChunkType, FileAnalysis, SyntaxSummary

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "ChunkOptions",
    "ChunkType",
    "FileAnalysis",
    "RepositoryChunkAggregator",
    "SyntaxChunker",
    "SyntaxSummary",
    "build_chunks",
    "chunk_all",
    "merge_small_chunks",
    "split_large_chunks",
]
