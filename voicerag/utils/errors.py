# -*- coding: utf-8 -*-
"""
Error types raised across voicerag.

Inside the core, hard failures surface as PipelineError. The AppController
turns anything fatal into one of the opaque, user-facing errors below.
"""

from __future__ import annotations


class VoiceragError(RuntimeError):
    """Base class for voicerag failures."""


class PipelineError(VoiceragError):
    """A reasoning stage hit a transport/service failure; the run is aborted."""

    def __init__(self, stage: str, cause: BaseException | None = None) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"reasoning pipeline failed at stage '{stage}': {cause!r}")


class ProcessingError(VoiceragError):
    """Opaque chat failure shown to the end user."""


class IngestionError(VoiceragError):
    """Opaque document ingestion failure."""


class UnsupportedDocumentError(ValueError):
    """The upload has a file type this service does not parse."""


class ReadOnlyStoreError(VoiceragError):
    """The document store does not accept writes."""
