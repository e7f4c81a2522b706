# -*- coding: utf-8 -*-
"""
RetrievalService
================
Public facade over the knowledge index.

Ingest:  content --(Chunker)--> chunks --(Embedder)--> vectors --> VectorIndex
Query:   text --(Embedder)--> vector --(VectorIndex.query)--> List[RetrievalResult]

Notes
-----
* The service owns its VectorIndex; nothing else writes to it.
* Chunks are keyed by (document_id, chunk_index). Ingesting a document that
  is already indexed replaces its old chunks, and the new ones go to the end
  of the insertion order.
* Scores keep full precision here; rounding belongs to presentation.
"""
from __future__ import annotations

from typing import List, Optional

from voicerag.config.settings import Settings
from voicerag.ingestion.chunker import Chunker
from voicerag.ingestion.embedder import Embedder, build_embedder
from voicerag.ingestion.vector_index import VectorIndex
from voicerag.retrieval.chunk import Chunk, DocumentId
from voicerag.retrieval.retrieval_result import RetrievalResult
from voicerag.utils.logging import SimpleLogger


class RetrievalService:
    """
    Parameters
    ----------
    embedder : Optional[Embedder]
        Embedding capability. If None, one is built from configuration.
    index : Optional[VectorIndex]
        Index instance to own. If None, a fresh empty index is created.
    chunker : Optional[Chunker]
        Text splitter. If None, a default Chunker() is used.
    chunk_size : Optional[int]
        Target characters per chunk. Defaults to VOICERAG_CHUNK_SIZE (500).
    """

    def __init__(
        self,
        embedder: Optional[Embedder] = None,
        index: Optional[VectorIndex] = None,
        chunker: Optional[Chunker] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        self._emb = embedder or build_embedder()
        self._index = index if index is not None else VectorIndex()
        self._chunker = chunker or Chunker()
        self._chunk_size = chunk_size if chunk_size is not None else Settings.get_int("VOICERAG_CHUNK_SIZE")

    @property
    def index(self) -> VectorIndex:
        return self._index

    # ---- public API ----
    def ingest(self, document_id: DocumentId, document_name: str, content: str) -> int:
        """
        Chunk, embed and store one document. Returns the number of chunks stored.
        Embedding errors propagate and leave the index unchanged.
        """
        texts = self._chunker.split(content or "", chunk_size=self._chunk_size)
        vectors = self._emb.embed(texts) if texts else []
        if len(vectors) != len(texts):
            raise ValueError("embedder returned a different number of vectors than chunks")

        chunks = [
            Chunk(
                document_id=document_id,
                document_name=document_name,
                chunk_index=i,
                content=text,
                embedding=tuple(float(x) for x in vec),
            )
            for i, (text, vec) in enumerate(zip(texts, vectors))
        ]

        replaced = self._index.replace_document(document_id, chunks)

        if replaced:
            SimpleLogger.info(
                f"RetrievalService: re-ingested document {document_id!r} "
                f"({replaced} old chunks replaced by {len(chunks)})"
            )
        else:
            SimpleLogger.info(
                f"RetrievalService: ingested document {document_id!r} "
                f"'{document_name}' as {len(chunks)} chunks"
            )
        return len(chunks)

    def query(self, text: str, top_k: int = 3) -> List[RetrievalResult]:
        """
        Top-k chunks for a query text, best first.
        Returns [] on an empty index (not an error).
        """
        if len(self._index) == 0 or top_k <= 0:
            return []

        q = self._emb.embed_one(text)
        hits = self._index.query(q, k=top_k)
        SimpleLogger.debug(f"RetrievalService: query returned {len(hits)} hits (k={top_k})")
        return [
            RetrievalResult(
                document_id=chunk.document_id,
                document_name=chunk.document_name,
                content=chunk.content,
                score=score,
            )
            for chunk, score in hits
        ]

    def remove_document(self, document_id: DocumentId) -> int:
        removed = self._index.remove_document(document_id)
        SimpleLogger.info(f"RetrievalService: removed {removed} chunks of document {document_id!r}")
        return removed

    def clear(self) -> None:
        self._index.clear()
