# -*- coding: utf-8 -*-
"""
SimpleLogger — tiny logging facade for voicerag.

- One class with classmethods, printing to stdout.
- Minimum level comes from VOICERAG_LOG_LEVEL (DEBUG, INFO, WARN, ERROR).
"""

from __future__ import annotations
import sys
import datetime
from typing import ClassVar, Dict, Optional

from voicerag.config.settings import Settings

_LEVELS: Dict[str, int] = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}


class SimpleLogger:
    """
    Very small logging helper.

    Usage:
        SimpleLogger.info("message")
        SimpleLogger.debug("details")
    """

    _enabled: ClassVar[bool] = True
    _prefix: ClassVar[str] = "voicerag"
    _min_level: ClassVar[Optional[int]] = None

    @classmethod
    def _threshold(cls) -> int:
        if cls._min_level is None:
            name = str(Settings.get("VOICERAG_LOG_LEVEL") or "INFO").upper()
            cls._min_level = _LEVELS.get(name, _LEVELS["INFO"])
        return cls._min_level

    @classmethod
    def _log(cls, level: str, msg: str) -> None:
        if not cls._enabled or _LEVELS[level] < cls._threshold():
            return
        now = datetime.datetime.now().strftime("%H:%M:%S")
        line = f"{cls._prefix} | {level:5s} | {now} | {msg}"
        print(line, file=sys.stdout, flush=True)

    @classmethod
    def debug(cls, msg: str) -> None:
        cls._log("DEBUG", msg)

    @classmethod
    def info(cls, msg: str) -> None:
        cls._log("INFO", msg)

    @classmethod
    def warning(cls, msg: str) -> None:
        cls._log("WARN", msg)

    @classmethod
    def error(cls, msg: str) -> None:
        cls._log("ERROR", msg)

    @classmethod
    def set_enabled(cls, enabled: bool) -> None:
        cls._enabled = enabled

    @classmethod
    def set_prefix(cls, prefix: str) -> None:
        cls._prefix = prefix

    @classmethod
    def set_level(cls, level: str) -> None:
        cls._min_level = _LEVELS.get(level.upper(), _LEVELS["INFO"])
