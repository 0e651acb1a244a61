"""Embedding providers for chunk text."""

from gitgist.embedders.sentence_transformer import SentenceTransformerEmbedder

__all__ = ["SentenceTransformerEmbedder"]
