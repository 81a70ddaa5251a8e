import logging
import random
from typing import Optional

from app.models.schemas import DetectorEstimate, HumanizeResult
from app.services import ai_detector
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are simulating authentic human thought and speech patterns. Your task is to create text that reads like natural human conversation.

SPEECH PATTERNS TO INCORPORATE:
- Filler words: "um", "like", "you know", "I mean"
- Sentence fragments and incomplete thoughts
- Mid-sentence corrections and changes in direction
- Conversational markers: "so", "well", "anyway", "right?"
- Uncertainty expressions: "I think", "maybe", "probably"
- Contractions in nearly every possible instance
- Natural pauses indicated by ellipses and dashes

Sound like a real person, not a polished writer."""

USER_PROMPT = """Transform this text into natural, unedited human speech. Keep the original meaning.

Text to transform: "{text}"

Language: {language}
Style: {mode}
Creativity level: {level}/100"""

# Simulated third-party detector scores, as (name, spread).
DETECTORS = [("GPTZero", 10), ("OriginalityAI", 8), ("WriterAI", 12), ("ContentAtScale", 6)]


def human_score(creativity_level: int) -> float:
    return min(99.0, 85 + creativity_level / 100 * 15)


def ai_detection_after(creativity_level: int) -> float:
    return max(0.1, 5 - creativity_level / 100 * 4.9)


def sampling_options(creativity_level: int) -> dict:
    """More creative requests sample hotter and penalize repetition harder."""
    level = creativity_level / 100
    return {
        "temperature": min(0.95, 0.7 + level * 0.3),
        "max_tokens": min(1000, 500 + creativity_level * 5),
        "presence_penalty": 0.4 + level * 0.3,
        "frequency_penalty": 0.5 + level * 0.3,
        "top_p": 0.95,
    }


class Humanizer:
    def __init__(self, llm: LLMClient, rng: Optional[random.Random] = None):
        self.llm = llm
        self.rng = rng or random.Random()

    def humanize(self, text: str, mode: str = "casual", creativity_level: int = 50,
                 language: str = "english") -> HumanizeResult:
        try:
            humanized = self.llm.complete_text(
                SYSTEM_PROMPT,
                USER_PROMPT.format(text=text, language=language, mode=mode, level=creativity_level),
                **sampling_options(creativity_level),
            )
        except LLMError as e:
            if isinstance(e, LLMUnavailable):
                logger.info("GROQ_API_KEY not set, returning template humanization")
                source, note = "mock_generated", "Using mock response - Set GROQ_API_KEY for real humanization"
            else:
                logger.warning("Humanization fell back to template: %s", e)
                source, note = "error_fallback", "Humanization service unavailable, using fallback"
            return HumanizeResult(
                original_text=text,
                humanized_text=f"Humanized version of: {text}",
                human_score=95,
                ai_detection_before=75,
                ai_detection_after=5,
                readability_score=80,
                creativity_level=creativity_level,
                source=source,
                note=note,
            )

        after = ai_detection_after(creativity_level)
        # The "before" figure comes from the local detector rather than a random draw.
        before = ai_detector.classify(text).overall_score * 100 / ai_detector.MAX_OVERALL_SCORE
        return HumanizeResult(
            original_text=text,
            humanized_text=humanized,
            human_score=human_score(creativity_level),
            ai_detection_before=round(before, 1),
            ai_detection_after=round(after, 2),
            readability_score=min(95.0, 75 + creativity_level / 100 * 20),
            creativity_level=creativity_level,
            ai_detection_results=[
                DetectorEstimate(detector=name, confidence=round(max(0.05, self.rng.random() * after * spread), 2))
                for name, spread in DETECTORS
            ],
            source="ai_generated",
            note=f"Text humanized using {mode} mode with {creativity_level}% creativity level",
        )
