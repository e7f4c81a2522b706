"""
Embedder
========
Converts text into fixed-dimension dense vectors.

Two backends share the same interface:
- HashEmbedder: deterministic placeholder derived from character codes and
  positions. Works offline; vectors carry no semantic meaning.
- OpenAIEmbedder: wraps the OpenAI embeddings API.
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np
from openai import OpenAI

from voicerag.config.settings import Settings
from voicerag.utils.logging import SimpleLogger


class Embedder:
    """High-level embedding interface."""

    dimension: int

    def embed(self, texts: List[str]) -> List[List[float]]:
        """
        Generate embeddings for a list of texts.
        Returns: list of embedding vectors (one per text)
        """
        raise NotImplementedError

    def embed_one(self, text: str) -> List[float]:
        return self.embed([text])[0]


class HashEmbedder(Embedder):
    """
    Component i of the vector for characters c_0..c_n-1 is
    0.5 * sin(sum_j ord(c_j) * (i + j + 1)).
    """

    def __init__(self, dimension: int = 1536) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self.dimension = dimension
        self._steps = np.arange(1, dimension + 1, dtype=np.float64)

    def embed(self, texts: List[str]) -> List[List[float]]:
        return [self._embed_text(t) for t in texts]

    def _embed_text(self, text: str) -> List[float]:
        codes = np.fromiter((ord(ch) for ch in text), dtype=np.float64, count=len(text))
        positions = np.arange(len(text), dtype=np.float64)
        # sum_j c_j * (i + j + 1) == (i + 1) * sum(c) + sum(c * j)
        hashes = self._steps * codes.sum() + float(np.dot(codes, positions))
        return (np.sin(hashes) * 0.5).tolist()


class OpenAIEmbedder(Embedder):
    """Embeddings from the OpenAI API. Errors propagate; no retry."""

    def __init__(
        self,
        model: Optional[str] = None,
        dimension: Optional[int] = None,
        api_key: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        self.model = model or Settings.get("VOICERAG_EMBEDDING_MODEL")
        self.dimension = dimension or Settings.get_int("VOICERAG_EMBEDDING_DIM")
        if client is not None:
            self.client = client
            return

        key = api_key or Settings.get("OPENAI_API_KEY")
        if not key:
            raise ValueError("OPENAI_API_KEY not found in environment or .env file")
        self.client = OpenAI(api_key=key)

    def embed(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        # OpenAI API allows batch embedding calls
        response = self.client.embeddings.create(
            model=self.model,
            input=texts,
            dimensions=self.dimension,
        )
        return [item.embedding for item in response.data]


def build_embedder() -> Embedder:
    """Pick the embedding backend named by VOICERAG_EMBEDDING_BACKEND."""
    backend = str(Settings.get("VOICERAG_EMBEDDING_BACKEND")).strip().lower()
    dimension = Settings.get_int("VOICERAG_EMBEDDING_DIM")
    if backend == "openai":
        SimpleLogger.info(f"Embedder: using OpenAI embeddings (dim={dimension})")
        return OpenAIEmbedder(dimension=dimension)
    if backend != "hash":
        raise ValueError(f"unknown embedding backend: {backend!r}")
    SimpleLogger.info(f"Embedder: using deterministic hash embeddings (dim={dimension})")
    return HashEmbedder(dimension=dimension)
