"""Tests for the Groq client wrapper, with the network call stubbed out."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.services.llm_client import LLMClient, LLMError, LLMUnavailable


def _stub(client: LLMClient, content=None, error: Exception | None = None) -> list:
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

    client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return calls


@pytest.fixture
def client() -> LLMClient:
    return LLMClient(api_key="", model="test-model")


class TestLLMClient:
    def test_missing_key_disables_client(self, client):
        assert client.enabled is False
        with pytest.raises(LLMUnavailable):
            client.complete_text("system", "user")

    def test_text_is_stripped(self, client):
        calls = _stub(client, content="  hello \n")
        assert client.complete_text("system", "user", temperature=0.3) == "hello"
        assert calls[0]["model"] == "test-model"
        assert calls[0]["temperature"] == 0.3
        assert [m["role"] for m in calls[0]["messages"]] == ["system", "user"]

    def test_json_requests_json_mode(self, client):
        calls = _stub(client, content='{"ok": true}')
        assert client.complete_json("system", "user") == {"ok": True}
        assert calls[0]["response_format"] == {"type": "json_object"}

    @pytest.mark.parametrize("content", ["not json", "[1, 2]", ""])
    def test_unusable_content_raises(self, client, content):
        _stub(client, content=content)
        with pytest.raises(LLMError):
            client.complete_json("system", "user")

    def test_request_failure_is_wrapped(self, client):
        _stub(client, error=RuntimeError("connection reset"))
        with pytest.raises(LLMError) as excinfo:
            client.complete_text("system", "user")
        assert not isinstance(excinfo.value, LLMUnavailable)
