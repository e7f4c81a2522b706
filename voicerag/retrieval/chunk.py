# -*- coding: utf-8 -*-
"""
Chunk — one indexed span of a document, with its embedding.

document_name is copied at ingestion time; the index never joins back to
the document store.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

DocumentId = Union[int, str]


@dataclass(frozen=True, slots=True)
class Chunk:
    document_id: DocumentId
    document_name: str
    chunk_index: int          # zero-based position within the source document
    content: str
    embedding: Tuple[float, ...]

    @property
    def key(self) -> Tuple[DocumentId, int]:
        return (self.document_id, self.chunk_index)
