# -*- coding: utf-8 -*-
"""
ingestion_manager.py

Purpose:
    Rebuild the in-memory knowledge index at process start:
      list documents (DocumentStore) -> RetrievalService.ingest for each

Notes:
    • The index has no save step; this replay is how knowledge survives a restart.
    • A document that fails to ingest is logged and counted; the run continues
      so one bad file cannot keep the service from starting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from voicerag.ingestion.document_store import DocumentStore
from voicerag.retrieval.chunk import DocumentId
from voicerag.retrieval.retriever import RetrievalService
from voicerag.utils.logging import SimpleLogger


@dataclass(frozen=True)
class IngestionStats:
    """Aggregate numbers for quick reporting / testing."""
    documents_seen: int
    documents_ingested: int
    chunks_added: int
    failed: List[DocumentId] = field(default_factory=list)


class IngestionManager:
    """
    Typical usage:
        mgr = IngestionManager(retrieval)
        stats = mgr.reingest(DirectoryDocumentStore(Path("data/docs")))
    """

    def __init__(self, retrieval: RetrievalService) -> None:
        self.retrieval = retrieval

    def reingest(self, store: DocumentStore) -> IngestionStats:
        docs = store.list_documents()
        ingested = 0
        chunks = 0
        failed: List[DocumentId] = []

        for doc in docs:
            try:
                chunks += self.retrieval.ingest(doc.document_id, doc.name, doc.content)
                ingested += 1
            except Exception as exc:
                SimpleLogger.error(f"IngestionManager: document {doc.document_id!r} failed: {exc!r}")
                failed.append(doc.document_id)

        SimpleLogger.info(
            f"IngestionManager: re-ingested {ingested}/{len(docs)} documents, {chunks} chunks"
        )
        return IngestionStats(
            documents_seen=len(docs),
            documents_ingested=ingested,
            chunks_added=chunks,
            failed=failed,
        )
