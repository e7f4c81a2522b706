# -*- coding: utf-8 -*-
"""
Prompt texts and fallbacks for the reasoning stages.
"""

from __future__ import annotations
from typing import List, Sequence

SEMANTIC_SYSTEM = "You are a semantic analyzer. Extract intent and keywords."
REASONING_SYSTEM = "You are a helpful AI assistant. Think step by step."
FINAL_SYSTEM_TEMPLATE = "You are a helpful AI assistant named {name}. Provide clear, friendly answers."

SEMANTIC_FALLBACK = "Intent analysis completed"
REASONING_FALLBACK = "Reasoning completed"
FINAL_FALLBACK = "I'm sorry, I couldn't generate an answer."

SNIPPET_CHARS = 200


def semantic_prompt(user_text: str) -> str:
    return f'Analyze the user\'s intent and extract keywords from: "{user_text}"'


def context_block(contents: Sequence[str]) -> str:
    """Full chunk contents separated by blank lines; empty when nothing was retrieved."""
    if not contents:
        return ""
    return "\n\nRelevant knowledge:\n" + "\n\n".join(contents)


def reasoning_prompt(user_text: str, context: str) -> str:
    return f"User question: {user_text}{context}\n\nProvide a step-by-step reasoning process."


def final_prompt(user_text: str, context: str) -> str:
    return f"Based on the reasoning, provide a clear and concise answer to: {user_text}{context}"


def final_system(assistant_name: str) -> str:
    return FINAL_SYSTEM_TEMPLATE.format(name=assistant_name)


def messages(system: str, user: str) -> List[dict]:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
