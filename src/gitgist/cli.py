"""CLI entry point for gitgist."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from gitgist.chunkers import RepositoryChunkAggregator
from gitgist.models import Chunk, ChunkOptions, ChunkType, FileAnalysis
from gitgist.reporting import summarize_analyses
from gitgist.sources import get_source
from gitgist.sources.layout import recorded_repository

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def load_analyses(source: str) -> list[FileAnalysis]:
    """Load stored analyses from a folder, zip or JSON file.

    Exits with status 1 if nothing can read the source.
    """
    source_path = Path(source)
    loader = get_source(source_path)
    if loader is None:
        logger.error(f"Cannot read analyses from: {source}")
        logger.error("Supported inputs: analysis folders, .zip archives, .json files")
        sys.exit(1)

    analyses = list(loader.load(source_path))
    logger.info(f"Loaded {len(analyses)} file analyses from {source} ({loader.source_type})")
    return analyses


def aggregate_source(source: str, options: ChunkOptions, workers: int = 1) -> list[Chunk]:
    """Load analyses and aggregate them into repository chunks."""
    analyses = load_analyses(source)
    aggregator = RepositoryChunkAggregator(options=options, workers=workers)
    return aggregator.aggregate(analyses)


def chunk(source: str, output: str | None, options: ChunkOptions, workers: int = 1) -> None:
    """Write the chunks of a repository as JSON.

    Args:
        source: Path to stored analyses
        output: Output JSON path, or None for stdout
        options: Chunk size configuration
        workers: Files chunked concurrently
    """
    chunks = aggregate_source(source, options, workers)
    payload = json.dumps([c.to_dict() for c in chunks], indent=2)

    if output is None:
        print(payload)
    else:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(chunks)} chunks -> {output}")


def summary(source: str) -> None:
    """Print per-category totals for a repository's analyses."""
    analyses = load_analyses(source)
    print(json.dumps(summarize_analyses(analyses).to_dict(), indent=2))


def index(
    source: str,
    output: str,
    options: ChunkOptions,
    repository: str | None = None,
    model: str | None = None,
    batch_size: int = 50,
    workers: int = 1,
) -> None:
    """Chunk a repository and write its embeddings to a chunk store.

    Args:
        source: Path to stored analyses
        output: Path of the chunk store to create or update
        options: Chunk size configuration
        repository: Name recorded with every chunk (defaults to the name in
            the analysis index, then the source name)
        model: sentence-transformers model name
        batch_size: Chunks embedded per batch
        workers: Files chunked concurrently
    """
    # Import here to avoid loading the model stack unless needed
    from gitgist.embedders import SentenceTransformerEmbedder
    from gitgist.indexing import ChunkIndexer
    from gitgist.storage import ChunkStore

    repository = repository or recorded_repository(Path(source)) or Path(source).stem
    chunks = aggregate_source(source, options, workers)

    embedder = SentenceTransformerEmbedder(model)
    store = ChunkStore(output)
    store.initialize()

    store.set_metadata("source", str(Path(source).absolute()))
    store.set_metadata("repository", repository)
    store.set_metadata("created_at", datetime.now().isoformat())
    store.set_metadata("embedding_model", embedder.model_name)
    store.set_metadata("max_size", str(options.max_size))

    logger.info(f"Indexing {len(chunks)} chunks -> {output}")
    report = ChunkIndexer(embedder, store, batch_size=batch_size).index(chunks, repository)

    logger.info("")
    logger.info(
        f"Indexed {report.embedded_chunks}/{report.total_chunks} chunks "
        f"({report.failed_chunks} failed) -> {output}"
    )
    if report.embedded_chunks == 0 and report.total_chunks > 0:
        sys.exit(1)


def search(
    store_path: str,
    query: str,
    top_k: int = 10,
    chunk_type: str | None = None,
    file: str | None = None,
    repository: str | None = None,
    model: str | None = None,
) -> None:
    """Semantic search over an indexed chunk store."""
    path = Path(store_path)
    if not path.exists():
        logger.error(f"Chunk store not found: {store_path}")
        sys.exit(1)

    from gitgist.embedders import SentenceTransformerEmbedder
    from gitgist.storage import ChunkStore

    store = ChunkStore(path)
    embedder = SentenceTransformerEmbedder(model or store.get_metadata("embedding_model"))

    filters = {}
    if chunk_type:
        filters["type"] = chunk_type
    if file:
        filters["file"] = file
    if repository:
        filters["repository"] = repository

    matches = store.query(embedder.embed([query])[0], top_k=top_k, filter=filters or None)
    if not matches:
        print(f"No results found for: {query}")
        return

    for i, match in enumerate(matches, 1):
        text = match.metadata["content"][:200].replace("\n", " ")
        if len(match.metadata["content"]) > 200:
            text += "..."
        print(f"{i}. [{match.score:.3f}] {match.id} ({match.metadata['type']})")
        print(f"   {text}")
        print("")


def info(store_path: str) -> None:
    """Show information about a chunk store."""
    path = Path(store_path)
    if not path.exists():
        logger.error(f"Chunk store not found: {store_path}")
        sys.exit(1)

    from gitgist.storage import ChunkStore

    store = ChunkStore(path)

    metadata = {}
    for key in ["source", "repository", "created_at", "embedding_model", "max_size"]:
        value = store.get_metadata(key)
        if value:
            metadata[key] = value

    files = store.list_files()

    print(f"Chunk store: {path.name}")
    print(f"  Size: {path.stat().st_size / 1024:.1f} KB")
    print("")
    print("Metadata:")
    for key, value in metadata.items():
        print(f"  {key}: {value}")
    print("")
    print("Contents:")
    print(f"  Files: {len(files)}")
    print(f"  Chunks: {store.count()}")


def _add_chunk_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-size",
        type=int,
        default=ChunkOptions.DEFAULT_MAX_SIZE,
        help=f"Maximum characters per chunk (default: {ChunkOptions.DEFAULT_MAX_SIZE})",
    )
    parser.add_argument(
        "--min-size",
        type=int,
        default=ChunkOptions.DEFAULT_MIN_SIZE,
        help=f"Advisory minimum characters per chunk (default: {ChunkOptions.DEFAULT_MIN_SIZE})",
    )
    parser.add_argument(
        "--no-combine",
        action="store_true",
        help="Do not merge adjacent small chunks",
    )
    parser.add_argument(
        "--no-split",
        action="store_true",
        help="Do not split oversized chunks",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Files chunked concurrently (default: 1)",
    )


def _chunk_options(args: argparse.Namespace) -> ChunkOptions:
    return ChunkOptions(
        max_size=args.max_size,
        min_size=args.min_size,
        combine=not args.no_combine,
        split=not args.no_split,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitgist",
        description="gitgist - syntax-summary chunks for semantic code search",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-file details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # chunk command
    chunk_parser = subparsers.add_parser(
        "chunk",
        help="Turn stored analyses into chunks (JSON)",
    )
    chunk_parser.add_argument("source", help="Analysis folder, .zip or .json path")
    chunk_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON path (default: stdout)",
    )
    _add_chunk_options(chunk_parser)

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Show per-category totals for stored analyses",
    )
    summary_parser.add_argument("source", help="Analysis folder, .zip or .json path")

    # index command
    index_parser = subparsers.add_parser(
        "index",
        help="Chunk, embed and store a repository's analyses",
    )
    index_parser.add_argument("source", help="Analysis folder, .zip or .json path")
    index_parser.add_argument(
        "-o",
        "--output",
        default="chunks.gitgist",
        help="Chunk store path (default: chunks.gitgist)",
    )
    index_parser.add_argument("--repository", default=None, help="Repository name")
    index_parser.add_argument("--model", default=None, help="sentence-transformers model")
    index_parser.add_argument(
        "--batch-size",
        type=int,
        default=50,
        help="Chunks embedded per batch (default: 50)",
    )
    _add_chunk_options(index_parser)

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Semantic search over a chunk store",
    )
    search_parser.add_argument("store", help="Path to chunk store")
    search_parser.add_argument("query", help="Natural language query")
    search_parser.add_argument("--top-k", type=int, default=10, help="Results to show")
    search_parser.add_argument(
        "--type",
        dest="chunk_type",
        choices=[t.value for t in ChunkType],
        default=None,
        help="Only return chunks of this type",
    )
    search_parser.add_argument("--file", default=None, help="Only return chunks of this file")
    search_parser.add_argument(
        "--repository",
        default=None,
        help="Only return chunks indexed under this repository",
    )
    search_parser.add_argument("--model", default=None, help="sentence-transformers model")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about a chunk store",
    )
    info_parser.add_argument("store", help="Path to chunk store")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger("gitgist").setLevel(logging.DEBUG)

    try:
        if args.command == "chunk":
            chunk(args.source, args.output, _chunk_options(args), args.workers)
        elif args.command == "summary":
            summary(args.source)
        elif args.command == "index":
            index(
                args.source,
                args.output,
                _chunk_options(args),
                repository=args.repository,
                model=args.model,
                batch_size=args.batch_size,
                workers=args.workers,
            )
        elif args.command == "search":
            search(
                args.store,
                args.query,
                top_k=args.top_k,
                chunk_type=args.chunk_type,
                file=args.file,
                repository=args.repository,
                model=args.model,
            )
        elif args.command == "info":
            info(args.store)
    except ValueError as e:
        # Malformed analyses, id collisions and invalid options
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
