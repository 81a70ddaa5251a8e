import logging
from typing import Optional

from app.models.schemas import TranslateResult
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a translation assistant. Provide accurate translations while preserving meaning and context. "
    "Return only the translated text."
)


class Translator:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    def translate(self, text: str, target_language: str = "Spanish",
                  source_language: Optional[str] = None) -> TranslateResult:
        direction = f"from {source_language} to {target_language}" if source_language else f"to {target_language}"
        try:
            translated = self.llm.complete_text(
                SYSTEM_PROMPT, f'Translate this {direction}: "{text}"', temperature=0.3, max_tokens=1000
            )
            return TranslateResult(
                original=text,
                translated=translated,
                source_language=source_language,
                target_language=target_language,
                confidence=95,
                source="ai_generated",
            )
        except LLMError as e:
            if isinstance(e, LLMUnavailable):
                message = "Mock response - API key not set"
            else:
                logger.warning("Translation fell back to mock: %s", e)
                message = "Translation service unavailable, using fallback"

        return TranslateResult(
            original=text,
            translated=f"Translated [{source_language or 'auto'} to {target_language}]: {text}",
            source_language=source_language,
            target_language=target_language,
            confidence=0,
            source="mock_generated",
            message=message,
        )
