import logging
import re
from typing import List

from app.models.schemas import SummaryResult, SummaryWordCount
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable
from app.utils.text_processing import split_into_sentences, word_count

logger = logging.getLogger(__name__)

LENGTHS = ("short", "medium", "long")
MODES = ("paragraph", "bullet", "custom")

LENGTH_INSTRUCTIONS = {
    "short": "Create a very concise summary (2-3 sentences maximum). Focus only on the most essential information.",
    "medium": "Create a balanced summary (4-6 sentences). Include key points and important details.",
    "long": "Create a comprehensive summary (7-10 sentences). Include main ideas and supporting details.",
}
MODE_INSTRUCTIONS = {
    "paragraph": "Present the summary as a coherent, flowing paragraph.",
    "bullet": "Present the summary as bullet points. Start each point with '• '.",
    "custom": "Present the summary as a numbered list. Start each point with a number and period.",
}
MAX_TOKENS = {"short": 150, "medium": 300, "long": 500}
# Leading sentences kept by the extractive fallback.
EXTRACT_SENTENCES = {"short": 2, "medium": 4, "long": 7}

SYSTEM_PROMPT = """You are an expert summarization assistant. Your task is to create clear, accurate summaries that preserve the essential meaning of the original text.

CRITICAL REQUIREMENTS:
1. {length}
2. {mode}
3. Maintain the original meaning and key information
4. Use clear, concise language
5. Avoid adding new information or opinions
6. Focus on the main ideas and key points
7. Ensure the summary is self-contained and understandable

The summary should be significantly shorter than the original while capturing all essential information."""

_NUMBERED = re.compile(r"^\d+\.")


def render(sentences: List[str], mode: str) -> str:
    if mode == "bullet":
        return "\n".join(f"• {s}" for s in sentences)
    if mode == "custom":
        return "\n".join(f"{i}. {s}" for i, s in enumerate(sentences, 1))
    return ". ".join(sentences) + "." if sentences else ""


def format_summary(summary: str, mode: str) -> str:
    """Coerces LLM output into the requested layout."""
    if mode == "bullet" and "•" not in summary and "-" not in summary:
        return render(split_into_sentences(summary, limit=None), mode)
    if mode == "custom" and not _NUMBERED.match(summary):
        return render(split_into_sentences(summary, limit=None), mode)
    if mode == "paragraph":
        summary = summary.rstrip()
        if not summary.endswith((".", "!", "?")):
            summary += "."
    return summary


def extract_summary(text: str, length: str, mode: str) -> str:
    sentences = split_into_sentences(text, limit=None)[:EXTRACT_SENTENCES.get(length, 4)]
    return render(sentences, mode)


class Summarizer:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    def summarize(self, text: str, length: str = "medium", mode: str = "paragraph") -> SummaryResult:
        note = None
        try:
            raw = self.llm.complete_text(
                SYSTEM_PROMPT.format(length=LENGTH_INSTRUCTIONS[length], mode=MODE_INSTRUCTIONS[mode]),
                f'Please summarize the following text:\n\n"{text}"',
                temperature=0.3,
                max_tokens=MAX_TOKENS[length],
                top_p=0.9,
            )
            summary = format_summary(raw, mode)
            source = "ai_generated"
        except LLMUnavailable:
            logger.info("GROQ_API_KEY not set, using extractive summary")
            summary = extract_summary(text, length, mode)
            source = "mock_generated"
        except LLMError as e:
            logger.warning("Summarization fell back to extraction: %s", e)
            summary = extract_summary(text, length, mode)
            source = "error_fallback"
            note = "Using fallback summary due to API error"

        reduction = round((len(text) - len(summary)) / len(text) * 100) if text else 0
        return SummaryResult(
            original_length=len(text),
            summary_length=len(summary),
            summary=summary,
            reduction=reduction,
            mode=mode,
            length=length,
            word_count=SummaryWordCount(original=word_count(text), summary=word_count(summary)),
            source=source,
            note=note,
        )
