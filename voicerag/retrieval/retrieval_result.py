# -*- coding: utf-8 -*-
"""
RetrievalResult
===============
Pure data container for one similarity hit.

- `score`: cosine similarity at full precision (rounding is for display only)
"""
from __future__ import annotations
from dataclasses import dataclass

from voicerag.retrieval.chunk import DocumentId


@dataclass(frozen=True, slots=True)
class RetrievalResult:
    document_id: DocumentId
    document_name: str
    content: str
    score: float
