"""Chunks handed to the embedding and indexing stages."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class ChunkType(str, Enum):
    """Syntactic category a chunk was built from."""

    FUNCTION = "function"
    IMPORT = "import"
    EXPORT = "export"
    CLASS = "class"
    VARIABLE = "variable"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Chunk:
    """A labeled unit of text derived from one file's syntax summary."""

    id: str
    text: str
    type: ChunkType
    file: str
    name: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"id": self.id, "text": self.text, "type": self.type.value, "file": self.file}
        if self.name is not None:
            data["name"] = self.name
        return data

    def metadata(self, repository: str = "") -> dict[str, str]:
        """Metadata stored next to the chunk's vector."""
        return {
            "content": self.text,
            "file": self.file,
            "type": self.type.value,
            "name": self.name or "",
            "repository": repository,
            "chunk_type": "ast",
        }


@dataclass(frozen=True)
class ChunkOptions:
    """Size configuration for chunk construction.

    max_size is a hard ceiling for merged chunks and the target for split
    parts. min_size is advisory: it is reported, never enforced.
    """

    DEFAULT_MAX_SIZE = 1200
    DEFAULT_MIN_SIZE = 300

    max_size: int = DEFAULT_MAX_SIZE
    min_size: int = DEFAULT_MIN_SIZE
    combine: bool = True
    split: bool = True

    def __post_init__(self) -> None:
        if self.max_size <= 0:
            raise ValueError("max_size must be greater than zero")
        if self.min_size < 0:
            raise ValueError("min_size must be non-negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChunkOptions":
        """Build options from a mapping using either snake_case or camelCase keys."""
        max_size = data.get(
            "max_size",
            data.get("maxCharactersPerChunk", data.get("maxSize", cls.DEFAULT_MAX_SIZE)),
        )
        min_size = data.get("min_size", data.get("minCharactersPerChunk", cls.DEFAULT_MIN_SIZE))
        return cls(
            max_size=int(max_size),
            min_size=int(min_size),
            combine=bool(data.get("combine", True)),
            split=bool(data.get("split", True)),
        )
