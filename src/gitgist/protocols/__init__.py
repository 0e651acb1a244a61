"""Protocol definitions for pluggable collaborators."""

from gitgist.protocols.chunker import ChunkingStrategy
from gitgist.protocols.embedder import EmbeddingProvider
from gitgist.protocols.source import AnalysisSource
from gitgist.protocols.vector_store import VectorMatch, VectorStore

__all__ = [
    "AnalysisSource",
    "ChunkingStrategy",
    "EmbeddingProvider",
    "VectorMatch",
    "VectorStore",
]
