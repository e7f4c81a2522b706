"""
Settings
========
Centralised, cached access to environment configuration.
A local .env file is read once, on first access.
"""
import os
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULTS: Dict[str, Any] = {
    "VOICERAG_LLM_MODEL": "gpt-4o-mini",
    "VOICERAG_LLM_TEMPERATURE": 0.7,
    "VOICERAG_LLM_MAX_TOKENS": 1024,
    "VOICERAG_LLM_TIMEOUT_S": 60.0,
    "VOICERAG_EMBEDDING_BACKEND": "hash",
    "VOICERAG_EMBEDDING_MODEL": "text-embedding-3-small",
    "VOICERAG_EMBEDDING_DIM": 1536,
    "VOICERAG_CHUNK_SIZE": 500,
    "VOICERAG_TOP_K": 3,
    "VOICERAG_ASSISTANT_NAME": "小卫",
    "VOICERAG_WAKE_WORD": "小卫小卫",
    "VOICERAG_OPENING_MESSAGE": "你好,我是小卫,有什么可以帮助你的吗?",
    "VOICERAG_LOG_LEVEL": "INFO",
}

_TRUE = {"1", "true", "yes", "on"}


class Settings:
    _CACHE: Dict[str, Any] = {}
    _dotenv_loaded: bool = False

    @classmethod
    def get(cls, key: str, default: Any | None = None) -> Any:
        if not cls._dotenv_loaded:
            load_dotenv()
            cls._dotenv_loaded = True
        if key not in cls._CACHE:
            fallback = default if default is not None else DEFAULTS.get(key)
            cls._CACHE[key] = os.getenv(key, fallback)
        return cls._CACHE[key]

    @classmethod
    def get_int(cls, key: str, default: int | None = None) -> int:
        return int(cls.get(key, default))

    @classmethod
    def get_float(cls, key: str, default: float | None = None) -> float:
        return float(cls.get(key, default))

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        value = cls.get(key, None)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE

    @classmethod
    def clear_cache(cls) -> None:
        """Forget cached values so the next read sees the current environment."""
        cls._CACHE.clear()
