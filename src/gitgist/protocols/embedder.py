"""Protocol for embedding providers."""

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Maps chunk text to fixed-length vectors.

    The indexer only relies on row order: row i of the result is the
    vector for texts[i].
    """

    @property
    def dimension(self) -> int:
        """Length of every vector produced."""
        ...

    @property
    def model_name(self) -> str:
        """Identifier recorded alongside an index built with this provider."""
        ...

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        """Embed a batch of texts into an array of shape (len(texts), dimension)."""
        ...
