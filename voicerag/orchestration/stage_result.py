# -*- coding: utf-8 -*-
"""
StageResult — outcome of one LLM-backed pipeline stage.

Three tiers:
- ok:       the model returned usable text.
- fallback: the model answered with an empty/malformed shape; a static text
            stands in and the pipeline continues.
- fatal:    the call itself failed (network/service); the pipeline aborts.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

Status = Literal["ok", "fallback", "fatal"]


@dataclass(frozen=True)
class StageResult:
    status: Status
    text: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, text: str) -> "StageResult":
        return cls("ok", text)

    @classmethod
    def fallback(cls, text: str) -> "StageResult":
        return cls("fallback", text)

    @classmethod
    def fatal(cls, error: BaseException) -> "StageResult":
        return cls("fatal", "", error)

    @property
    def is_fatal(self) -> bool:
        return self.status == "fatal"

    @classmethod
    def from_response(cls, content: Optional[str], fallback_text: str) -> "StageResult":
        if isinstance(content, str) and content.strip():
            return cls.ok(content)
        return cls.fallback(fallback_text)
