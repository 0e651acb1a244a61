"""Data models for gitgist."""

from gitgist.models.chunk import Chunk, ChunkOptions, ChunkType
from gitgist.models.summary import (
    AnalysisFormatError,
    ExportInfo,
    ExportType,
    FileAnalysis,
    FunctionInfo,
    ImportInfo,
    SyntaxSummary,
)

__all__ = [
    "AnalysisFormatError",
    "Chunk",
    "ChunkOptions",
    "ChunkType",
    "ExportInfo",
    "ExportType",
    "FileAnalysis",
    "FunctionInfo",
    "ImportInfo",
    "SyntaxSummary",
]
