"""Syntax-summary chunking strategy."""

from typing import Optional

from gitgist.chunkers.size_policy import apply_size_policy
from gitgist.models import (
    Chunk,
    ChunkOptions,
    ChunkType,
    ExportInfo,
    FileAnalysis,
    FunctionInfo,
    ImportInfo,
)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def function_text(fn: FunctionInfo) -> str:
    """Render a function entry as chunk text."""
    return "\n".join(
        [
            f"Function: {fn.name}",
            f"Params: {', '.join(fn.params)}",
            f"Calls: {', '.join(fn.calls)}",
            f"Async: {_flag(fn.is_async)}",
            f"Exported: {_flag(fn.is_exported)}",
        ]
    )


def import_line(imp: ImportInfo) -> str:
    if not imp.imports:
        # Side-effect import, e.g. `import "./styles.css"`
        return f"from {imp.source}"
    return f"from {imp.source}: {', '.join(imp.imports)}"


def export_line(exp: ExportInfo) -> str:
    suffix = " (default)" if exp.is_default else ""
    return f"{exp.type.value}: {exp.name}{suffix}"


class _IdAllocator:
    """Hands out per-file chunk ids, suffixing repeats with @2, @3, ..."""

    def __init__(self, file: str):
        self.file = file
        self._seen: dict[str, int] = {}

    def __call__(self, key: str) -> str:
        base = f"{self.file}::{key}"
        count = self._seen.get(base, 0) + 1
        self._seen[base] = count
        return base if count == 1 else f"{base}@{count}"


def build_chunks(analysis: FileAnalysis) -> list[Chunk]:
    """Convert one file's syntax summary into raw, unsized chunks.

    Categories are emitted in a fixed order: functions, imports, exports,
    classes, variables. A single summary chunk is emitted only when the
    file produced nothing else.

    Args:
        analysis: The file to chunk

    Returns:
        Chunks in emission order
    """
    file = analysis.file
    summary = analysis.ast_summary
    new_id = _IdAllocator(file)
    chunks: list[Chunk] = []

    for fn in summary.functions:
        chunks.append(
            Chunk(
                id=new_id(fn.name),
                text=function_text(fn),
                type=ChunkType.FUNCTION,
                file=file,
                name=fn.name,
            )
        )

    if summary.imports:
        lines = "\n".join(import_line(imp) for imp in summary.imports)
        chunks.append(
            Chunk(id=new_id("imports"), text=f"Imports:\n{lines}", type=ChunkType.IMPORT, file=file)
        )

    if summary.exports:
        lines = "\n".join(export_line(exp) for exp in summary.exports)
        chunks.append(
            Chunk(id=new_id("exports"), text=f"Exports:\n{lines}", type=ChunkType.EXPORT, file=file)
        )

    for class_name in summary.classes:
        chunks.append(
            Chunk(
                id=new_id(class_name),
                text=f"Class: {class_name}",
                type=ChunkType.CLASS,
                file=file,
                name=class_name,
            )
        )

    if summary.variables:
        chunks.append(
            Chunk(
                id=new_id("variables"),
                text=f"Variables: {', '.join(summary.variables)}",
                type=ChunkType.VARIABLE,
                file=file,
            )
        )

    if not chunks:
        chunks.append(summary_chunk(analysis))

    return chunks


def summary_chunk(analysis: FileAnalysis) -> Chunk:
    """Fallback chunk describing a file with no extractable elements."""
    counts = analysis.ast_summary.counts()
    text = "\n".join(
        [
            f"File: {analysis.file}",
            f"Functions: {counts['functions']}",
            f"Imports: {counts['imports']}",
            f"Exports: {counts['exports']}",
            f"Classes: {counts['classes']}",
        ]
    )
    return Chunk(
        id=f"{analysis.file}::summary",
        text=text,
        type=ChunkType.SUMMARY,
        file=analysis.file,
    )


class SyntaxChunker:
    """Default chunking: one chunk per element, then merge and split to size.

    - Functions and classes each get their own chunk
    - Imports, exports and variables are grouped into one chunk per file
    - Adjacent small chunks are merged up to max_size when combine is set
    - Chunks still over max_size are split on line boundaries when split is set
    """

    def __init__(self, options: Optional[ChunkOptions] = None):
        self.options = options or ChunkOptions()

    def chunk(self, analysis: FileAnalysis) -> list[Chunk]:
        """Build and size the chunks for a single file."""
        return apply_size_policy(build_chunks(analysis), self.options)
