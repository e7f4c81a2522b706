# -*- coding: utf-8 -*-
"""
VectorIndex
===========
Flat, in-memory, exact-cosine store of Chunk records (NumPy only).

- No persistence: the index starts empty and is rebuilt by re-ingesting
  documents from the document store.
- Insertion order is the tie-break order for equal scores.
- Records whose embedding length differs from the query score exactly 0.
- A single RLock guards appends, deletes and reads, so worker threads can
  share one instance.
"""
from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from voicerag.retrieval.chunk import Chunk, DocumentId


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """dot(a, b) / (|a| * |b|); 0.0 on length mismatch or a zero-norm vector."""
    if len(a) != len(b):
        return 0.0
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


class VectorIndex:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._chunks: List[Chunk] = []
        # dimension -> (row positions, L2-normalised matrix); rebuilt lazily after writes
        self._by_dim: Dict[int, Tuple[np.ndarray, np.ndarray]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)

    def add(self, chunks: Iterable[Chunk]) -> None:
        new = list(chunks)
        if not new:
            return
        with self._lock:
            self._chunks.extend(new)
            self._by_dim.clear()

    def replace_document(self, document_id: DocumentId, chunks: Iterable[Chunk]) -> int:
        """
        Drop the old chunks of one document and append the new ones, in one step.
        Returns how many old chunks were dropped.
        """
        new = list(chunks)
        with self._lock:
            removed = self.remove_document(document_id)
            self._chunks.extend(new)
            self._by_dim.clear()
            return removed

    def remove_document(self, document_id: DocumentId) -> int:
        """Drop every chunk of one document. Returns how many were removed."""
        with self._lock:
            kept = [c for c in self._chunks if c.document_id != document_id]
            removed = len(self._chunks) - len(kept)
            if removed:
                self._chunks = kept
                self._by_dim.clear()
            return removed

    def clear(self) -> None:
        with self._lock:
            self._chunks = []
            self._by_dim.clear()

    def chunks(self) -> List[Chunk]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._chunks)

    def query(self, vector: Sequence[float], k: int = 3) -> List[Tuple[Chunk, float]]:
        """Brute-force top-k by cosine similarity, stable on ties."""
        with self._lock:
            if not self._chunks or k <= 0:
                return []
            q = np.asarray(vector, dtype=np.float64)
            if q.ndim != 1:
                raise ValueError("query vector must be 1D")

            sims = np.zeros(len(self._chunks), dtype=np.float64)
            qn = float(np.linalg.norm(q))
            if qn > 0.0:
                rows, A = self._matrix_for(q.shape[0])
                if rows.size:
                    sims[rows] = (A @ q) / qn

            order = np.argsort(-sims, kind="stable")[:k]
            return [(self._chunks[i], float(sims[i])) for i in order.tolist()]

    def _matrix_for(self, dim: int) -> Tuple[np.ndarray, np.ndarray]:
        cached = self._by_dim.get(dim)
        if cached is not None:
            return cached

        rows = [i for i, c in enumerate(self._chunks) if len(c.embedding) == dim]
        if rows:
            A = np.asarray([self._chunks[i].embedding for i in rows], dtype=np.float64)
            norms = np.linalg.norm(A, axis=1)
            # zero-norm rows stay all-zero and score 0
            safe = np.where(norms > 0.0, norms, 1.0)
            A = A / safe[:, None]
        else:
            A = np.zeros((0, dim), dtype=np.float64)
        entry = (np.asarray(rows, dtype=np.intp), A)
        self._by_dim[dim] = entry
        return entry
