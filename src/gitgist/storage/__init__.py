"""Persistent storage for chunk vectors."""

from gitgist.storage.store import ChunkStore

__all__ = ["ChunkStore"]
