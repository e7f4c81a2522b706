"""
DocumentStore
=============
Durable source of document text, keyed by document id.

The vector index holds no state of its own across restarts; at startup every
document listed here is replayed through RetrievalService.ingest.

- InMemoryDocumentStore: integer ids assigned on add (tests, demos).
- DirectoryDocumentStore: read-only view of a folder; each file is a
  document whose id is its posix path relative to the root.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from voicerag.ingestion.document_parser import estimate_token_count
from voicerag.retrieval.chunk import DocumentId
from voicerag.utils.errors import ReadOnlyStoreError


@dataclass(frozen=True)
class StoredDocument:
    document_id: DocumentId
    name: str
    content: str
    file_type: str = "text/plain"
    token_count: int = 0


class DocumentStore(Protocol):
    def add(self, name: str, content: str, file_type: str = "text/plain") -> StoredDocument: ...

    def get(self, document_id: DocumentId) -> Optional[StoredDocument]: ...

    def list_documents(self) -> List[StoredDocument]: ...

    def remove(self, document_id: DocumentId) -> bool: ...


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._docs: Dict[DocumentId, StoredDocument] = {}

    def add(self, name: str, content: str, file_type: str = "text/plain") -> StoredDocument:
        with self._lock:
            doc = StoredDocument(
                document_id=next(self._ids),
                name=name,
                content=content,
                file_type=file_type,
                token_count=estimate_token_count(content),
            )
            self._docs[doc.document_id] = doc
        return doc

    def get(self, document_id: DocumentId) -> Optional[StoredDocument]:
        with self._lock:
            return self._docs.get(document_id)

    def list_documents(self) -> List[StoredDocument]:
        with self._lock:
            return list(self._docs.values())

    def remove(self, document_id: DocumentId) -> bool:
        with self._lock:
            return self._docs.pop(document_id, None) is not None


class DirectoryDocumentStore:
    """Scans a folder (recursively) and serves each file as a plain-text document."""

    def __init__(self, root: Path) -> None:
        """
        :param root: Folder holding the raw documents.
        """
        self.root = Path(root)
        if not self.root.exists():
            raise FileNotFoundError(f"Document folder does not exist: {self.root}")

    def add(self, name: str, content: str, file_type: str = "text/plain") -> StoredDocument:
        raise ReadOnlyStoreError("DirectoryDocumentStore is read-only")

    def get(self, document_id: DocumentId) -> Optional[StoredDocument]:
        path = self.root / str(document_id)
        if not path.is_file():
            return None
        return self._load(path)

    def list_documents(self) -> List[StoredDocument]:
        return [self._load(p) for p in sorted(self.root.rglob("*")) if p.is_file()]

    def remove(self, document_id: DocumentId) -> bool:
        raise ReadOnlyStoreError("DirectoryDocumentStore is read-only")

    def _load(self, path: Path) -> StoredDocument:
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            # Fallback: try latin-1 to avoid crash on non-UTF8 files
            text = path.read_text(encoding="latin-1")
        return StoredDocument(
            document_id=path.relative_to(self.root).as_posix(),
            name=path.name,
            content=text,
            token_count=estimate_token_count(text),
        )
