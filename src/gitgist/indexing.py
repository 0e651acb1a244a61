"""Embed chunks and write them to a vector store."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from gitgist.models import Chunk
from gitgist.protocols import EmbeddingProvider, VectorStore

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    """Outcome of an indexing run."""

    total_chunks: int = 0
    embedded_chunks: int = 0
    failed_chunks: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class ChunkIndexer:
    """Embeds chunks batch by batch and upserts them into a store.

    A failing batch is recorded in the report and the run moves on to
    the next one.
    """

    DEFAULT_BATCH_SIZE = 50

    def __init__(
        self,
        embedder: EmbeddingProvider,
        store: VectorStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.embedder = embedder
        self.store = store
        self.batch_size = batch_size

    def index(self, chunks: Sequence[Chunk], repository: str = "") -> IndexReport:
        """Embed and store every chunk.

        Args:
            chunks: Chunks to index, typically one repository's aggregation
            repository: Repository name recorded in each chunk's metadata

        Returns:
            Counts of embedded and failed chunks with error messages
        """
        report = IndexReport(total_chunks=len(chunks))

        for start in range(0, len(chunks), self.batch_size):
            batch = chunks[start : start + self.batch_size]
            self._index_batch(batch, repository, report)
            logger.info(
                f"  Indexed {min(start + len(batch), len(chunks))}/{len(chunks)} chunks"
            )

        if report.errors:
            logger.warning(f"{report.failed_chunks} chunks failed to index")
            for i, error in enumerate(report.errors, 1):
                logger.warning(f"  {i}. {error}")
        return report

    def _index_batch(self, batch: Sequence[Chunk], repository: str, report: IndexReport) -> None:
        try:
            vectors = self.embedder.embed([c.text for c in batch])
        except Exception as e:
            report.failed_chunks += len(batch)
            report.errors.append(
                f"Failed to embed batch {batch[0].id}..{batch[-1].id}: {e}"
            )
            return

        if len(vectors) != len(batch):
            report.failed_chunks += len(batch)
            report.errors.append(
                f"Embedder returned {len(vectors)} vectors for {len(batch)} chunks"
            )
            return

        for chunk, vector in zip(batch, vectors):
            try:
                self.store.upsert(chunk.id, vector, chunk.metadata(repository))
            except Exception as e:
                report.failed_chunks += 1
                report.errors.append(f"Failed to store chunk {chunk.id}: {e}")
            else:
                report.embedded_chunks += 1
