"""Repository-level chunk aggregation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from gitgist.chunkers.syntax_chunker import SyntaxChunker
from gitgist.models import Chunk, ChunkOptions, FileAnalysis
from gitgist.protocols import ChunkingStrategy
from gitgist.reporting import chunk_type_histogram

logger = logging.getLogger(__name__)


class DuplicateChunkIdError(ValueError):
    """Raised when two chunks in one aggregation run share an id."""

    def __init__(self, chunk_id: str, first_file: str, second_file: str):
        self.chunk_id = chunk_id
        self.first_file = first_file
        self.second_file = second_file
        super().__init__(
            f"Duplicate chunk id {chunk_id!r} (from {first_file} and {second_file})"
        )


@dataclass(frozen=True)
class AggregationProgress:
    """Progress snapshot reported after each file."""

    total_files: int
    processed_files: int
    current_file: str


ProgressCallback = Callable[[AggregationProgress], None]


class RepositoryChunkAggregator:
    """Chunks every file of a repository into one ordered sequence.

    Files are chunked independently, so they can be spread over a thread
    pool; results are always concatenated in input order.
    """

    def __init__(
        self,
        chunker: Optional[ChunkingStrategy] = None,
        options: Optional[ChunkOptions] = None,
        workers: int = 1,
        progress: Optional[ProgressCallback] = None,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        # Size statistics are reported against the bounds the chunker applies
        if options is None:
            options = getattr(chunker, "options", None) or ChunkOptions()
        self.options = options
        self.chunker = chunker or SyntaxChunker(self.options)
        self.workers = workers
        self.progress = progress

    def aggregate(self, analyses: Iterable[FileAnalysis]) -> list[Chunk]:
        """Chunk all analyses and concatenate the results in file order.

        Args:
            analyses: File analyses in the order they were produced

        Returns:
            All chunks of the repository

        Raises:
            DuplicateChunkIdError: If two chunks end up with the same id
        """
        analyses = list(analyses)
        if not analyses:
            logger.info("No file analyses to chunk")
            return []

        per_file = self._chunk_files(analyses)

        chunks: list[Chunk] = []
        owners: dict[str, str] = {}
        for analysis, file_chunks in zip(analyses, per_file):
            for chunk in file_chunks:
                if chunk.id in owners:
                    raise DuplicateChunkIdError(chunk.id, owners[chunk.id], analysis.file)
                owners[chunk.id] = analysis.file
            chunks.extend(file_chunks)

        self._log_statistics(len(analyses), chunks)
        return chunks

    def _chunk_files(self, analyses: list[FileAnalysis]) -> list[list[Chunk]]:
        total = len(analyses)

        def run(indexed: tuple[int, FileAnalysis]) -> list[Chunk]:
            idx, analysis = indexed
            counts = ", ".join(f"{name}={n}" for name, n in analysis.ast_summary.counts().items())
            logger.debug(f"File {idx + 1}/{total}: {analysis.file} ({counts})")
            return self.chunker.chunk(analysis)

        results: list[list[Chunk]] = []
        if self.workers == 1:
            mapped = map(run, enumerate(analyses))
            executor = None
        else:
            executor = ThreadPoolExecutor(max_workers=self.workers)
            mapped = executor.map(run, enumerate(analyses))

        try:
            # executor.map yields in submission order
            for processed, file_chunks in enumerate(mapped, 1):
                results.append(file_chunks)
                if self.progress is not None:
                    self.progress(
                        AggregationProgress(
                            total_files=total,
                            processed_files=processed,
                            current_file=analyses[processed - 1].file,
                        )
                    )
        finally:
            if executor is not None:
                executor.shutdown(cancel_futures=True)

        return results

    def _log_statistics(self, file_count: int, chunks: list[Chunk]) -> None:
        histogram = chunk_type_histogram(chunks)
        logger.info(f"Chunked {file_count} files into {len(chunks)} chunks")
        for chunk_type, count in histogram.items():
            if count:
                logger.info(f"  {chunk_type.value.upper()}: {count}")

        undersized = sum(1 for c in chunks if len(c.text) < self.options.min_size)
        oversized = sum(1 for c in chunks if len(c.text) > self.options.max_size)
        if undersized:
            logger.info(f"  {undersized} chunks below {self.options.min_size} chars")
        if oversized:
            logger.warning(f"  {oversized} chunks above {self.options.max_size} chars")


def chunk_all(
    analyses: Iterable[FileAnalysis], options: Optional[ChunkOptions] = None
) -> list[Chunk]:
    """Chunk every analysis with the default strategy."""
    return RepositoryChunkAggregator(options=options).aggregate(analyses)
