"""Protocol for vector stores."""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol, runtime_checkable

import numpy as np


@dataclass
class VectorMatch:
    """A single ranked query result."""

    id: str
    score: float
    metadata: dict[str, str] = field(default_factory=dict)


@runtime_checkable
class VectorStore(Protocol):
    """Protocol for stores that keep chunk vectors with metadata.

    Dimensionality, distance metric and on-disk format are properties of
    the implementation.
    """

    def upsert(self, chunk_id: str, vector: np.ndarray, metadata: Mapping[str, str]) -> None:
        """Insert or replace the vector stored under chunk_id."""
        ...

    def query(
        self,
        vector: np.ndarray,
        top_k: int = 10,
        filter: Optional[Mapping[str, str]] = None,
    ) -> list[VectorMatch]:
        """Return the top_k closest vectors whose metadata matches filter."""
        ...
