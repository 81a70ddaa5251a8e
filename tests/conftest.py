"""Shared test fixtures for the writing tools API."""

from __future__ import annotations

import random

import pytest

from app.services.llm_client import LLMClient


class FakeLLM:
    """Stands in for LLMClient: returns a canned response or raises."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    @property
    def enabled(self) -> bool:
        return True

    def _answer(self, system, user, options):
        self.calls.append({"system": system, "user": user, "options": options})
        if self.error is not None:
            raise self.error
        return self.response

    def complete_json(self, system, user, **options):
        return self._answer(system, user, options)

    def complete_text(self, system, user, **options):
        return self._answer(system, user, options)


@pytest.fixture
def offline_llm() -> LLMClient:
    """A real client with no API key: every call raises LLMUnavailable."""
    return LLMClient(api_key="")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fake_llm():
    """Factory for FakeLLM instances."""
    return FakeLLM
