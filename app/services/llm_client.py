import json
import logging
from typing import Any, Dict, Optional

from groq import Groq

from app import config

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """The completion service failed or returned something unusable."""


class LLMUnavailable(LLMError):
    """No API key is configured, so the completion service cannot be called."""


class LLMClient:
    """
    Thin wrapper over the Groq chat-completions API.

    Every call is a single round trip: no retries, no streaming. Failures are
    raised as LLMError so that callers can switch to their local fallback.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else config.GROQ_API_KEY
        self.model = model or config.GROQ_MODEL
        self._client = None
        if self.api_key:
            try:
                self._client = Groq(api_key=self.api_key)
                logger.info("Groq client initialized (%s)", self.model)
            except Exception as e:
                logger.error("Failed to init Groq: %s", e)
        else:
            logger.warning("GROQ_API_KEY not found. Endpoints will use local fallbacks.")

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def complete_text(self, system: str, user: str, **options: Any) -> str:
        """Returns the raw message content of a single completion."""
        if not self.enabled:
            raise LLMUnavailable("GROQ_API_KEY is not configured")

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **options,
            )
        except Exception as e:
            raise LLMError(f"Completion request failed: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise LLMError("Empty completion")
        return content.strip()

    def complete_json(self, system: str, user: str, **options: Any) -> Dict[str, Any]:
        """Requests a JSON object and returns it decoded."""
        options.setdefault("response_format", {"type": "json_object"})
        content = self.complete_text(system, user, **options)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LLMError(f"Malformed JSON in completion: {e}") from e
        if not isinstance(data, dict):
            raise LLMError("Completion JSON is not an object")
        return data


_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """FastAPI dependency returning the process-wide client."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
