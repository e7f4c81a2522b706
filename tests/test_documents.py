"""
Tests for upload parsing, document stores and startup re-ingestion.
"""
import base64

import pytest

from voicerag.ingestion.document_parser import estimate_token_count, parse_upload
from voicerag.ingestion.document_store import DirectoryDocumentStore, InMemoryDocumentStore
from voicerag.ingestion.embedder import HashEmbedder
from voicerag.ingestion.ingestion_manager import IngestionManager
from voicerag.retrieval.retriever import RetrievalService
from voicerag.utils.errors import ReadOnlyStoreError, UnsupportedDocumentError


class TestParseUpload:
    def test_plain_text(self):
        raw = base64.b64encode("今天天气很好。".encode("utf-8")).decode()
        assert parse_upload(raw, "text/plain") == "今天天气很好。"

    def test_unknown_type_decoded_as_text(self):
        raw = base64.b64encode(b"csv,data").decode()
        assert parse_upload(raw, "text/csv") == "csv,data"

    @pytest.mark.parametrize("file_type", [
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ])
    def test_binary_formats_rejected(self, file_type):
        with pytest.raises(UnsupportedDocumentError):
            parse_upload("AAAA", file_type)

    def test_invalid_base64(self):
        with pytest.raises(UnsupportedDocumentError, match="Invalid base64 content"):
            parse_upload("abc", "text/plain")


class TestTokenEstimate:
    def test_mixed_text(self):
        # 4 CJK chars -> 2 tokens, 8 other chars -> 2 tokens
        assert estimate_token_count("天气很好abcdefgh") == 4

    def test_rounds_up(self):
        assert estimate_token_count("a") == 1
        assert estimate_token_count("") == 0


class TestStores:
    def test_in_memory_ids(self):
        store = InMemoryDocumentStore()
        a = store.add("a.txt", "A.")
        b = store.add("b.txt", "B.")
        assert (a.document_id, b.document_id) == (1, 2)
        assert store.get(2) == b
        assert store.get(3) is None
        assert [d.name for d in store.list_documents()] == ["a.txt", "b.txt"]

    def test_in_memory_remove(self):
        store = InMemoryDocumentStore()
        doc = store.add("a.txt", "A.")
        assert store.remove(doc.document_id) is True
        assert store.remove(doc.document_id) is False
        assert store.list_documents() == []

    def test_directory_store(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "a.txt").write_text("Hello.", encoding="utf-8")
        (tmp_path / "sub" / "b.md").write_bytes("caf\xe9.".encode("latin-1"))

        store = DirectoryDocumentStore(tmp_path)
        docs = store.list_documents()
        assert [d.document_id for d in docs] == ["a.txt", "sub/b.md"]
        assert docs[1].content == "café."
        assert store.get("a.txt").content == "Hello."
        assert store.get("missing.txt") is None
        with pytest.raises(ReadOnlyStoreError):
            store.add("c.txt", "C.")
        with pytest.raises(ReadOnlyStoreError):
            store.remove("a.txt")

    def test_directory_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DirectoryDocumentStore(tmp_path / "nope")


class TestIngestionManager:
    def test_reingest_counts_and_skips_failures(self):
        class Flaky(HashEmbedder):
            def embed(self, texts):
                if any("boom" in t for t in texts):
                    raise ConnectionError("embedding failed")
                return super().embed(texts)

        store = InMemoryDocumentStore()
        store.add("good.txt", "Fine. Also fine.")
        bad = store.add("bad.txt", "This goes boom.")
        service = RetrievalService(embedder=Flaky(16), chunk_size=500)

        stats = IngestionManager(service).reingest(store)
        assert stats.documents_seen == 2
        assert stats.documents_ingested == 1
        assert stats.chunks_added == 1
        assert stats.failed == [bad.document_id]

    def test_replay_is_idempotent(self):
        store = InMemoryDocumentStore()
        store.add("a.txt", "One. Two.")
        service = RetrievalService(embedder=HashEmbedder(16), chunk_size=500)
        mgr = IngestionManager(service)
        mgr.reingest(store)
        mgr.reingest(store)
        assert len(service.index) == 1
