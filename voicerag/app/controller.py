# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from voicerag.config.settings import Settings
from voicerag.ingestion.document_parser import parse_upload
from voicerag.ingestion.document_store import DocumentStore, InMemoryDocumentStore, StoredDocument
from voicerag.ingestion.ingestion_manager import IngestionManager, IngestionStats
from voicerag.memory.conversation_memory import ConversationMemory, ConversationRecord
from voicerag.orchestration.llm_client import LLMClient
from voicerag.orchestration.reasoning_pipeline import ReasoningPipeline
from voicerag.retrieval.chunk import DocumentId
from voicerag.retrieval.retriever import RetrievalService
from voicerag.utils.errors import IngestionError, ProcessingError, ReadOnlyStoreError
from voicerag.utils.logging import SimpleLogger


class AppController:
    def __init__(
        self,
        retrieval: Optional[RetrievalService] = None,
        llm_client: Optional[LLMClient] = None,
        memory: Optional[ConversationMemory] = None,
        document_store: Optional[DocumentStore] = None,
        *,
        wake_word: Optional[str] = None,
        opening_message: Optional[str] = None,
    ) -> None:
        """
        Central app controller.

        - Owns one RetrievalService (and through it, one VectorIndex).
        - Creates a shared LLMClient and ConversationMemory unless given.
        - Wires the ReasoningPipeline used by the chat entry point.
        """
        self.retrieval = retrieval or RetrievalService()
        self.llm_client = llm_client or LLMClient()
        self.memory = memory if memory is not None else ConversationMemory()
        self.document_store = document_store if document_store is not None else InMemoryDocumentStore()
        self.pipeline = ReasoningPipeline(self.llm_client, self.retrieval, self.memory)

        self.wake_word = wake_word or Settings.get("VOICERAG_WAKE_WORD")
        self.opening_message = opening_message or Settings.get("VOICERAG_OPENING_MESSAGE")

    # ---- startup ----
    def bootstrap(self, store: Optional[DocumentStore] = None) -> IngestionStats:
        """Rebuild the knowledge index from the durable document store."""
        return IngestionManager(self.retrieval).reingest(store or self.document_store)

    # ---- documents ----
    def ingest_document(self, document_id: DocumentId, document_name: str, text: str) -> int:
        try:
            return self.retrieval.ingest(document_id, document_name, text)
        except Exception as exc:
            SimpleLogger.error(f"AppController: ingestion of {document_id!r} failed: {exc!r}")
            raise IngestionError("Failed to ingest document") from exc

    def upload_document(self, file_name: str, file_content: str, file_type: str) -> Dict[str, Any]:
        """
        Parse an uploaded file, save it to the document store, then index it.
        PDF/DOCX uploads raise UnsupportedDocumentError and read-only stores
        raise ReadOnlyStoreError, both unchanged.
        """
        content = parse_upload(file_content, file_type)
        try:
            doc = self.document_store.add(file_name, content, file_type)
        except ReadOnlyStoreError:
            raise
        except Exception as exc:
            SimpleLogger.error(f"AppController: saving '{file_name}' failed: {exc!r}")
            raise IngestionError("Failed to upload document") from exc

        self.ingest_document(doc.document_id, file_name, content)
        return {
            "success": True,
            "document_id": doc.document_id,
            "file_name": file_name,
            "token_count": doc.token_count,
        }

    def remove_document(self, document_id: DocumentId) -> int:
        """
        Delete a document from the store, then drop its chunks from the index,
        so a later bootstrap() does not bring it back.
        """
        self.document_store.remove(document_id)
        return self.retrieval.remove_document(document_id)

    def list_documents(self) -> List[StoredDocument]:
        return self.document_store.list_documents()

    def get_document(self, document_id: DocumentId) -> Optional[StoredDocument]:
        return self.document_store.get(document_id)

    # ---- chat ----
    def check_wake_word(self, text: str) -> Tuple[bool, Optional[str]]:
        is_wake_word = bool(self.wake_word) and self.wake_word in (text or "")
        return is_wake_word, (self.opening_message if is_wake_word else None)

    def run_reasoning_pipeline(self, user_text: str, include_knowledge: bool = False) -> Dict[str, Any]:
        """
        Run the full pipeline. Any fatal failure becomes one opaque
        ProcessingError; no partial answer or trace is returned.
        """
        try:
            result = self.pipeline.run(user_text, include_knowledge)
        except Exception as exc:
            SimpleLogger.error(f"AppController: chat error: {exc!r}")
            raise ProcessingError("Chat processing failed") from exc
        return result.to_dict()

    def chat(self, user_text: str, include_knowledge: bool = False) -> Dict[str, Any]:
        """Wake phrase short-circuits to the opening message; otherwise run the pipeline."""
        is_wake_word, opening = self.check_wake_word(user_text)
        if is_wake_word:
            SimpleLogger.info("AppController: wake word detected")
            return {"answer": opening, "steps": [], "is_wake_word": True}
        response = self.run_reasoning_pipeline(user_text, include_knowledge)
        response["is_wake_word"] = False
        return response

    def history(self, limit: int = 50) -> List[ConversationRecord]:
        return self.memory.get_recent(limit)
