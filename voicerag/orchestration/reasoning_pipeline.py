# -*- coding: utf-8 -*-
"""
ReasoningPipeline
=================
Runs one user query through four sequential stages:

    semantic -> [retrieval] -> reasoning -> final

- Each LLM stage yields a StageResult. ok/fallback continue; fatal aborts the
  whole run with PipelineError, and nothing is written to memory.
- Retrieval runs only when the caller asks for knowledge. When it runs, its
  step is always in the trace (possibly with an empty list); when it does
  not, the trace has no retrieval entry at all.
- After the final stage, the user record and the assistant record (with the
  serialised trace) are appended to memory as one pair.
"""

from __future__ import annotations
from typing import Callable, List, Optional

from voicerag.config.settings import Settings
from voicerag.memory.conversation_memory import ConversationMemory
from voicerag.orchestration import prompts
from voicerag.orchestration.llm_client import LLMClient
from voicerag.orchestration.reasoning_step import (
    PipelineResult,
    ReasoningStep,
    RetrievalSummary,
    serialize_steps,
)
from voicerag.orchestration.stage_result import StageResult
from voicerag.retrieval.retrieval_result import RetrievalResult
from voicerag.retrieval.retriever import RetrievalService
from voicerag.utils.errors import PipelineError
from voicerag.utils.logging import SimpleLogger


class ReasoningPipeline:
    """
    Orchestrates the reasoning stages for a single query.

    This class stays thin:
    - prompt texts live in orchestration.prompts,
    - the LLM provider sits behind LLMClient,
    - knowledge lookup goes through RetrievalService.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        retrieval: RetrievalService,
        memory: Optional[ConversationMemory] = None,
        *,
        top_k: Optional[int] = None,
        assistant_name: Optional[str] = None,
    ) -> None:
        self._llm = llm_client
        self._retrieval = retrieval
        self._memory = memory
        self._top_k = top_k if top_k is not None else Settings.get_int("VOICERAG_TOP_K")
        self._assistant_name = assistant_name or Settings.get("VOICERAG_ASSISTANT_NAME")

    def run(self, user_text: str, include_knowledge: bool = False) -> PipelineResult:
        steps: List[ReasoningStep] = []

        # 1) Semantic analysis
        semantic = self._call_stage(
            "semantic",
            prompts.messages(prompts.SEMANTIC_SYSTEM, prompts.semantic_prompt(user_text)),
            prompts.SEMANTIC_FALLBACK,
        )
        steps.append(ReasoningStep("semantic", semantic))

        # 2) Knowledge retrieval
        retrieved: List[RetrievalResult] = []
        if include_knowledge:
            try:
                retrieved = self._retrieval.query(user_text, self._top_k)
            except Exception as exc:
                SimpleLogger.error(f"ReasoningPipeline: retrieval failed: {exc!r}")
                raise PipelineError("retrieval", exc) from exc
            steps.append(ReasoningStep("retrieval", self._summarize(retrieved)))
            SimpleLogger.info(f"ReasoningPipeline: retrieved {len(retrieved)} chunks")

        context = prompts.context_block([r.content for r in retrieved])

        # 3) Reasoning
        reasoning = self._call_stage(
            "reasoning",
            prompts.messages(prompts.REASONING_SYSTEM, prompts.reasoning_prompt(user_text, context)),
            prompts.REASONING_FALLBACK,
        )
        steps.append(ReasoningStep("reasoning", reasoning))

        # 4) Final answer
        answer = self._call_stage(
            "final",
            prompts.messages(
                prompts.final_system(self._assistant_name),
                prompts.final_prompt(user_text, context),
            ),
            prompts.FINAL_FALLBACK,
        )
        steps.append(ReasoningStep("final", answer))

        if self._memory is not None:
            self._memory.append_exchange(user_text, answer, serialize_steps(steps))

        return PipelineResult(answer=answer, steps=steps)

    # ---- helpers ----
    def _call_stage(self, stage: str, messages: List[dict], fallback_text: str) -> str:
        result = self._invoke(lambda: self._llm.complete(messages), fallback_text)
        if result.is_fatal:
            SimpleLogger.error(f"ReasoningPipeline: stage '{stage}' failed: {result.error!r}")
            raise PipelineError(stage, result.error)
        if result.status == "fallback":
            SimpleLogger.warning(
                f"ReasoningPipeline: stage '{stage}' got an empty/malformed response, using fallback"
            )
        else:
            SimpleLogger.debug(f"ReasoningPipeline: stage '{stage}' done")
        return result.text

    @staticmethod
    def _invoke(call: Callable[[], Optional[str]], fallback_text: str) -> StageResult:
        try:
            content = call()
        except Exception as exc:
            return StageResult.fatal(exc)
        return StageResult.from_response(content, fallback_text)

    @staticmethod
    def _summarize(results: List[RetrievalResult]) -> List[RetrievalSummary]:
        return [
            {
                "file": r.document_name,
                "snippet": r.content[: prompts.SNIPPET_CHARS],
                "score": round(r.score, 2),
            }
            for r in results
        ]
