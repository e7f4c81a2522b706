# -*- coding: utf-8 -*-
"""
ReasoningStep — one entry of the trace returned with every answer.

The trace is transient: it is built per call and only persisted as a JSON
blob on the assistant's conversation record.
"""

from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Union

StepType = Literal["semantic", "retrieval", "reasoning", "final"]

RetrievalSummary = Dict[str, Any]   # {"file": str, "snippet": str, "score": float}


@dataclass(frozen=True)
class ReasoningStep:
    type: StepType
    value: Union[str, List[RetrievalSummary]]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass
class PipelineResult:
    answer: str
    steps: List[ReasoningStep] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"answer": self.answer, "steps": [s.to_dict() for s in self.steps]}


def serialize_steps(steps: List[ReasoningStep]) -> str:
    return json.dumps([s.to_dict() for s in steps], ensure_ascii=False)
