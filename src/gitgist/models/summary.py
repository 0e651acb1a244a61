"""Per-file syntax summaries produced by the external analysis stage."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class AnalysisFormatError(ValueError):
    """Raised when a serialized file analysis does not have the expected shape."""


class ExportType(str, Enum):
    """Declared kind of an exported binding."""

    FUNCTION = "function"
    VARIABLE = "variable"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"


@dataclass(frozen=True)
class FunctionInfo:
    """A function or function-valued variable found in a file."""

    name: str
    params: tuple[str, ...] = ()
    calls: tuple[str, ...] = ()
    is_async: bool = False
    is_exported: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FunctionInfo":
        return cls(
            name=data["name"],
            params=tuple(data.get("params") or ()),
            calls=tuple(data.get("calls") or ()),
            is_async=bool(data.get("isAsync", False)),
            is_exported=bool(data.get("isExported", False)),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "params": list(self.params),
            "calls": list(self.calls),
            "isAsync": self.is_async,
            "isExported": self.is_exported,
        }


@dataclass(frozen=True)
class ImportInfo:
    """One import statement: its module source and the bindings it introduces."""

    source: str
    imports: tuple[str, ...] = ()
    is_default: bool = False
    is_namespace: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ImportInfo":
        return cls(
            source=data["source"],
            imports=tuple(data.get("imports") or ()),
            is_default=bool(data.get("isDefault", False)),
            is_namespace=bool(data.get("isNamespace", False)),
        )

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "imports": list(self.imports),
            "isDefault": self.is_default,
            "isNamespace": self.is_namespace,
        }


@dataclass(frozen=True)
class ExportInfo:
    """An exported name and its declared kind."""

    name: str
    type: ExportType
    is_default: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExportInfo":
        try:
            export_type = ExportType(data["type"])
        except ValueError:
            raise AnalysisFormatError(f"Unknown export type: {data['type']!r}") from None
        return cls(
            name=data["name"],
            type=export_type,
            is_default=bool(data.get("isDefault", False)),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type.value, "isDefault": self.is_default}


@dataclass(frozen=True)
class SyntaxSummary:
    """Inventory of the syntactic elements of one source file.

    Every category is always present; an empty tuple means the parser
    found nothing of that kind.
    """

    functions: tuple[FunctionInfo, ...] = ()
    imports: tuple[ImportInfo, ...] = ()
    exports: tuple[ExportInfo, ...] = ()
    classes: tuple[str, ...] = ()
    variables: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.functions or self.imports or self.exports or self.classes or self.variables
        )

    def counts(self) -> dict[str, int]:
        """Return the number of elements in each category."""
        return {
            "functions": len(self.functions),
            "imports": len(self.imports),
            "exports": len(self.exports),
            "classes": len(self.classes),
            "variables": len(self.variables),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SyntaxSummary":
        return cls(
            functions=tuple(FunctionInfo.from_dict(f) for f in data.get("functions") or ()),
            imports=tuple(ImportInfo.from_dict(i) for i in data.get("imports") or ()),
            exports=tuple(ExportInfo.from_dict(e) for e in data.get("exports") or ()),
            classes=tuple(data.get("classes") or ()),
            variables=tuple(data.get("variables") or ()),
        )

    def to_dict(self) -> dict:
        return {
            "functions": [f.to_dict() for f in self.functions],
            "imports": [i.to_dict() for i in self.imports],
            "exports": [e.to_dict() for e in self.exports],
            "classes": list(self.classes),
            "variables": list(self.variables),
        }


@dataclass(frozen=True)
class FileAnalysis:
    """The syntax summary of a single file, keyed by its repository path."""

    file: str
    ast_summary: SyntaxSummary = SyntaxSummary()

    @classmethod
    def from_dict(cls, data: Any) -> "FileAnalysis":
        """Build an analysis from its JSON representation.

        Args:
            data: Decoded JSON object with ``file`` and ``ast_summary`` keys

        Raises:
            AnalysisFormatError: If the payload is not a file analysis
        """
        if not isinstance(data, Mapping):
            raise AnalysisFormatError(f"Expected an object, got {type(data).__name__}")
        file = data.get("file")
        if not isinstance(file, str) or not file:
            raise AnalysisFormatError("File analysis is missing its 'file' path")

        summary = data.get("ast_summary") or {}
        if not isinstance(summary, Mapping):
            raise AnalysisFormatError(f"{file}: 'ast_summary' must be an object")

        try:
            return cls(file=file, ast_summary=SyntaxSummary.from_dict(summary))
        except (KeyError, TypeError) as e:
            raise AnalysisFormatError(f"{file}: malformed ast_summary ({e})") from e

    def to_dict(self) -> dict:
        return {"file": self.file, "ast_summary": self.ast_summary.to_dict()}
