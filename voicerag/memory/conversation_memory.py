"""
ConversationMemory
==================
Append-only conversation history.

- One record per message, oldest first.
- A finished exchange is written as a pair: the user text (no trace), then
  the assistant answer carrying the serialised reasoning trace.
- In-process store; swap for a database-backed one behind the same methods.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationRecord:
    role: Role
    content: str
    reasoning_steps: Optional[str] = None   # JSON list of steps, assistant records only
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationMemory:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: List[ConversationRecord] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def append(self, role: Role, content: str, reasoning_steps: Optional[str] = None) -> ConversationRecord:
        record = ConversationRecord(role=role, content=content, reasoning_steps=reasoning_steps)
        with self._lock:
            self._records.append(record)
        return record

    def append_exchange(self, user_text: str, answer: str, steps_json: str) -> None:
        with self._lock:
            self.append("user", user_text)
            self.append("assistant", answer, steps_json)

    def get_recent(self, limit: int = 50) -> List[ConversationRecord]:
        """Last `limit` records, oldest first."""
        if limit <= 0:
            return []
        with self._lock:
            return list(self._records[-limit:])

    def clear(self) -> None:
        with self._lock:
            self._records = []
