"""SentenceTransformer-based embedding provider."""

import logging
from typing import Sequence

import numpy as np
from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """Embedding provider using the sentence-transformers library.

    Uses all-MiniLM-L6-v2 by default, producing 384-dimensional vectors
    that work well for short code-summary chunks.
    """

    DEFAULT_MODEL = "all-MiniLM-L6-v2"

    def __init__(self, model_name: str | None = None, batch_size: int = 32):
        """Initialize the embedder.

        The model is not loaded until the first embedding is requested.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to all-MiniLM-L6-v2.
            batch_size: Texts encoded per forward pass
        """
        self._model_name = model_name or self.DEFAULT_MODEL
        self._batch_size = batch_size
        self._model: SentenceTransformer | None = None

    @property
    def model(self) -> SentenceTransformer:
        """Lazy-load the model on first access."""
        if self._model is None:
            logger.info(f"Loading embedding model {self._model_name}...")
            self._model = SentenceTransformer(self._model_name)
        return self._model

    @property
    def dimension(self) -> int:
        return self.model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        return self._model_name

    def embed(self, texts: Sequence[str]) -> np.ndarray:
        """Generate normalized embeddings for a batch of chunk texts.

        Args:
            texts: Chunk texts to embed

        Returns:
            float32 array of shape (len(texts), dimension); an empty batch
            returns shape (0, 0) without loading the model
        """
        if not texts:
            return np.empty((0, 0), dtype=np.float32)

        embeddings = self.model.encode(
            list(texts),
            batch_size=self._batch_size,
            convert_to_numpy=True,
            normalize_embeddings=True,  # cosine similarity becomes a dot product
        )
        return embeddings.astype(np.float32)
