"""
Tests for LLMClient response handling, using a fake OpenAI-shaped client.
"""
from types import SimpleNamespace

import pytest

from voicerag.config.settings import Settings
from voicerag.orchestration.llm_client import LLMClient


class _Completions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return self.response


def _client(response=None, error=None):
    completions = _Completions(response, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


MESSAGES = [{"role": "user", "content": "hi"}]


def test_returns_text_content():
    fake, completions = _client(_response("hello"))
    assert LLMClient(client=fake).complete(MESSAGES, model_name="gpt-4o-mini") == "hello"
    assert completions.kwargs["messages"] == MESSAGES
    assert "temperature" in completions.kwargs
    assert completions.kwargs["max_completion_tokens"] == 1024


@pytest.mark.parametrize("response", [
    SimpleNamespace(choices=[]),
    _response(None),
    _response([{"type": "image"}]),
])
def test_malformed_responses_return_none(response):
    fake, _ = _client(response)
    assert LLMClient(client=fake).complete(MESSAGES) is None


def test_transport_errors_propagate():
    fake, _ = _client(error=TimeoutError("deadline exceeded"))
    with pytest.raises(TimeoutError):
        LLMClient(client=fake).complete(MESSAGES)


def test_gpt5_models_skip_temperature():
    fake, completions = _client(_response("ok"))
    LLMClient(client=fake).complete(MESSAGES, model_name="gpt-5-mini", temperature=0.2)
    assert "temperature" not in completions.kwargs


def test_missing_key_fails_on_call(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr("voicerag.config.settings.load_dotenv", lambda: None)
    Settings.clear_cache()
    client = LLMClient()
    with pytest.raises(RuntimeError):
        client.complete(MESSAGES)
