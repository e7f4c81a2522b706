# -*- coding: utf-8 -*-
"""
LLMClient — thin wrapper around the chat-completion provider.

Current implementation:
- Uses OpenAI Python client v1 (OpenAI() + client.chat.completions.create).
- Reads OPENAI_API_KEY from configuration (or optional api_key in __init__).
- complete() returns the raw message content, or None when the response has
  no usable text. Transport/service errors are not caught here.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from openai import OpenAI

from voicerag.config.settings import Settings
from voicerag.utils.logging import SimpleLogger

Message = Dict[str, str]


class LLMClient:
    """
    Neutral LLM gateway.

    You give it:
      - messages: [{"role": "system", "content": "..."}, {"role": "user", "content": "..."}]
      - optional model_name, temperature, max_output_tokens (defaults from Settings)

    It returns:
      - the completion text, or None for an empty/malformed response
    """

    def __init__(self, api_key: Optional[str] = None, client: Optional[Any] = None) -> None:
        self._client: Optional[Any] = client
        if client is not None:
            return

        key = api_key or Settings.get("OPENAI_API_KEY") or ""
        if not key:
            SimpleLogger.warning(
                "LLMClient: OPENAI_API_KEY not set. Any LLM call will fail until you set it."
            )
            return

        self._client = OpenAI(api_key=key, timeout=Settings.get_float("VOICERAG_LLM_TIMEOUT_S"))
        SimpleLogger.info("LLMClient: OpenAI client initialised (v1 API).")

    def complete(
            self,
            messages: List[Message],
            *,
            model_name: Optional[str] = None,
            temperature: Optional[float] = None,
            max_output_tokens: Optional[int] = None,
    ) -> Optional[str]:
        """
        Thin wrapper over OpenAI chat.completions.

        - Uses max_completion_tokens (new API) instead of max_tokens.
        - For gpt-5* reasoning models, we do NOT send temperature (it is unsupported).
        """
        if self._client is None:
            raise RuntimeError("LLMClient: OpenAI client is not initialised")

        model = model_name or Settings.get("VOICERAG_LLM_MODEL")
        if temperature is None:
            temperature = Settings.get_float("VOICERAG_LLM_TEMPERATURE")

        kwargs: dict = {
            "model": model,
            "messages": messages,
            "max_completion_tokens": max_output_tokens or Settings.get_int("VOICERAG_LLM_MAX_TOKENS"),
        }
        if not model.startswith("gpt-5"):
            kwargs["temperature"] = temperature

        resp = self._client.chat.completions.create(**kwargs)
        choices = getattr(resp, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        return content if isinstance(content, str) else None
