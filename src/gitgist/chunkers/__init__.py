"""Chunk construction for syntax summaries."""

from gitgist.chunkers.repository import (
    AggregationProgress,
    DuplicateChunkIdError,
    RepositoryChunkAggregator,
    chunk_all,
)
from gitgist.chunkers.size_policy import (
    apply_size_policy,
    merge_small_chunks,
    split_large_chunks,
)
from gitgist.chunkers.syntax_chunker import SyntaxChunker, build_chunks

__all__ = [
    "AggregationProgress",
    "DuplicateChunkIdError",
    "RepositoryChunkAggregator",
    "SyntaxChunker",
    "apply_size_policy",
    "build_chunks",
    "chunk_all",
    "merge_small_chunks",
    "split_large_chunks",
]
