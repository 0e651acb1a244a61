"""Summary statistics over analyses and chunks."""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterable

from gitgist.models import Chunk, ChunkType, FileAnalysis


@dataclass
class RepositorySummary:
    """Totals across every analyzed file of a repository."""

    total_files: int = 0
    total_functions: int = 0
    total_imports: int = 0
    total_exports: int = 0
    total_classes: int = 0
    total_variables: int = 0
    files_by_extension: dict[str, int] = field(default_factory=dict)
    most_used_imports: dict[str, int] = field(default_factory=dict)
    functions_by_file: dict[str, int] = field(default_factory=dict)
    files: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "totalFunctions": self.total_functions,
            "totalImports": self.total_imports,
            "totalExports": self.total_exports,
            "totalClasses": self.total_classes,
            "totalVariables": self.total_variables,
            "filesByExtension": self.files_by_extension,
            "mostUsedImports": self.most_used_imports,
            "functionsByFile": self.functions_by_file,
            "files": self.files,
        }


def summarize_analyses(analyses: Iterable[FileAnalysis]) -> RepositorySummary:
    """Aggregate per-category counts over a repository's analyses.

    Import sources are ordered by usage count, most used first; ties keep
    first-seen order.
    """
    summary = RepositorySummary()
    extensions: Counter[str] = Counter()
    import_sources: Counter[str] = Counter()

    for analysis in analyses:
        counts = analysis.ast_summary.counts()
        summary.total_files += 1
        summary.total_functions += counts["functions"]
        summary.total_imports += counts["imports"]
        summary.total_exports += counts["exports"]
        summary.total_classes += counts["classes"]
        summary.total_variables += counts["variables"]

        extensions[PurePosixPath(analysis.file).suffix] += 1
        import_sources.update(imp.source for imp in analysis.ast_summary.imports)
        summary.functions_by_file[analysis.file] = counts["functions"]
        summary.files.append({"file": analysis.file, **counts})

    summary.files_by_extension = dict(extensions)
    summary.most_used_imports = dict(import_sources.most_common())
    return summary


def chunk_type_histogram(chunks: Iterable[Chunk]) -> dict[ChunkType, int]:
    """Count chunks per type, listing every type in declaration order."""
    counts = Counter(chunk.type for chunk in chunks)
    return {chunk_type: counts.get(chunk_type, 0) for chunk_type in ChunkType}
