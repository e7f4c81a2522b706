"""
Shared fixtures: a scripted LLM client, small deterministic embedder,
fresh retrieval service and memory.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Union

import pytest

from voicerag.config.settings import Settings
from voicerag.ingestion.embedder import HashEmbedder
from voicerag.memory.conversation_memory import ConversationMemory
from voicerag.retrieval.retriever import RetrievalService
from voicerag.utils.logging import SimpleLogger

Reply = Union[Optional[str], BaseException, Callable[[List[dict]], Any]]


class ScriptedLLM:
    """
    Stand-in for LLMClient. Replies are consumed in call order; an exception
    instance is raised instead of returned. Past the script, replies are
    "reply <n>".
    """

    def __init__(self, replies: Optional[List[Reply]] = None) -> None:
        self.replies = list(replies or [])
        self.calls: List[List[dict]] = []

    def complete(self, messages: List[dict], **kwargs: Any) -> Optional[str]:
        self.calls.append(messages)
        n = len(self.calls)
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, BaseException):
                raise reply
            if callable(reply):
                return reply(messages)
            return reply
        return f"reply {n}"

    def system_prompt(self, i: int) -> str:
        return self.calls[i][0]["content"]

    def user_prompt(self, i: int) -> str:
        return self.calls[i][1]["content"]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    for key in (
        "VOICERAG_EMBEDDING_BACKEND",
        "VOICERAG_EMBEDDING_DIM",
        "VOICERAG_WAKE_WORD",
        "VOICERAG_OPENING_MESSAGE",
        "VOICERAG_ASSISTANT_NAME",
        "VOICERAG_CHUNK_SIZE",
        "VOICERAG_TOP_K",
    ):
        monkeypatch.delenv(key, raising=False)
    Settings.clear_cache()
    SimpleLogger.set_enabled(False)
    yield
    SimpleLogger.set_enabled(True)
    Settings.clear_cache()


@pytest.fixture
def embedder():
    return HashEmbedder(dimension=64)


@pytest.fixture
def retrieval(embedder):
    return RetrievalService(embedder=embedder, chunk_size=500)


@pytest.fixture
def memory():
    return ConversationMemory()


@pytest.fixture
def llm():
    return ScriptedLLM()
