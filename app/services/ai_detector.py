"""
Conservative AI-content detection.

The LLM is asked first when a key is configured. Whatever it returns is
validated and forced through the same conservative bounds as the local
heuristic, which also serves as the fallback when the key is missing, the
call fails or the response is not valid JSON.

Scores are biased toward "human-written": content is only flagged as
generated when formal-transition phrases pile up and casual-speech markers
are scarce.
"""
import logging
import math
import random
import re
from typing import Any, Dict, Iterable, List, Optional

from app import config
from app.models.schemas import AnalysisResult, DetailedAnalysis, SentenceScore
from app.services.llm_client import LLMClient, LLMError
from app.utils import patterns
from app.utils.text_processing import clamp, split_into_sentences, split_words, word_count

logger = logging.getLogger(__name__)

# Per-sentence weights. One table for every call site.
SENTENCE_BASE_SCORE = 10
AI_INDICATOR_WEIGHT = 15
HUMAN_INDICATOR_WEIGHT = 25
NATURAL_PUNCTUATION_PENALTY = 20
CASUAL_MARKER_PENALTY = 30

HIGHLIGHT_THRESHOLD = 80

# Document-level bounds.
MAX_TOTAL_AI = 30
MAX_AI_GENERATED = 25
MAX_AI_REFINED = 15
MIN_HUMAN_WRITTEN = 70
MAX_OVERALL_SCORE = 30

HEURISTIC_NOTE = "Conservative analysis - favors human text unless clear AI patterns"

SYSTEM_PROMPT = """You are a conservative AI detection expert. You must be VERY careful about flagging text as AI-generated.

CRITICAL RULES:
1. Text with natural human speech patterns (fillers, contractions, informal language) = HUMAN
2. Only flag text as AI if it shows clear, undeniable AI patterns
3. Sentence fragments, run-ons, and natural imperfections = HUMAN
4. Conversational tone with personal voice = HUMAN
5. Only flag if text is overly structured, formal, or shows repetitive AI patterns

Human indicators: "um", "like", "you know", contractions, informal language, personal opinions, natural errors
AI indicators: perfect structure, formal transitions, repetitive patterns, lack of human quirks

Be conservative - when in doubt, mark as human."""

USER_PROMPT = """Analyze this text to detect AI-generated content. Be VERY conservative - only flag text as AI if it clearly shows AI patterns.

IMPORTANT: Text with natural human imperfections like "um", "like", "you know", informal language, contractions, sentence fragments, and conversational style should be considered HUMAN.

Return JSON with:
- overallScore: overall AI detection confidence (0-100)
- aiGenerated: percentage AI-generated (0-100)
- aiRefined: percentage AI-refined (0-100)
- humanWritten: percentage human-written (0-100)
- sentences: array of {{text, aiProbability, patterns[], highlighted}}
- detailedAnalysis: {{vocabulary, syntax, coherence, creativity}} scores (0-100)

Text to analyze:
"{text}"

Return only valid JSON."""


def _round(value: float) -> int:
    # Half-up rounding for percentages.
    return int(math.floor(value + 0.5))


# --- Indicator counting & sentence scoring ---

def count_human_indicators(text: str) -> int:
    return patterns.count_matches(patterns.HUMAN_INDICATORS, text or "")


def count_ai_indicators(text: str) -> int:
    return patterns.count_matches(patterns.AI_INDICATORS, text or "")


def score_sentence(sentence: str) -> int:
    """AI probability of a single sentence, in [0, 100]."""
    score = (
        SENTENCE_BASE_SCORE
        + AI_INDICATOR_WEIGHT * count_ai_indicators(sentence)
        - HUMAN_INDICATOR_WEIGHT * count_human_indicators(sentence)
    )
    if patterns.NATURAL_PUNCTUATION(sentence):
        score -= NATURAL_PUNCTUATION_PENALTY
    if patterns.CASUAL_MARKERS(sentence):
        score -= CASUAL_MARKER_PENALTY
    return int(clamp(score, 0, 100))


def detect_sentence_patterns(sentence: str) -> List[str]:
    return patterns.matching_labels(patterns.SENTENCE_PATTERNS, sentence)


def analyze_sentence(sentence: str) -> SentenceScore:
    probability = score_sentence(sentence)
    return SentenceScore(
        text=sentence,
        ai_probability=probability,
        patterns=detect_sentence_patterns(sentence),
        highlighted=probability > HIGHLIGHT_THRESHOLD,
    )


# --- Supporting metrics ---

def lexical_diversity(text: str) -> float:
    """Share of distinct lowercase words, as a percentage."""
    words = split_words((text or "").lower())
    if not words:
        return 70.0
    return min(100.0, len(set(words)) / len(words) * 100)


def natural_syntax_score(text: str) -> int:
    """Starts at 50 and rewards punctuation, fillers, quotes and length variety."""
    score = 50
    for sentence in split_into_sentences(text):
        if patterns.SYNTAX_SIGNALS["expressive punctuation"](sentence):
            score += 5
        if patterns.SYNTAX_SIGNALS["filler words"](sentence):
            score += 10
        if patterns.SYNTAX_SIGNALS["quotation"](sentence):
            score += 3
        if len(sentence) < 10 or len(sentence) > 40:
            score += 5
    return min(100, score)


def predictability_score(text: str) -> int:
    return max(20, 60 - count_human_indicators(text) * 5)


# --- Normalization ---

def normalize_scores(result: AnalysisResult) -> AnalysisResult:
    """
    Caps combined AI share at 30 (keeping the generated/refined ratio), then
    clamps every headline score into its conservative band.
    """
    ai_generated = result.ai_generated
    ai_refined = result.ai_refined
    total_ai = ai_generated + ai_refined
    if total_ai > MAX_TOTAL_AI:
        ai_generated = _round(MAX_TOTAL_AI * ai_generated / total_ai)
        ai_refined = MAX_TOTAL_AI - ai_generated

    human_written = max(MIN_HUMAN_WRITTEN, 100 - ai_generated - ai_refined)
    overall_score = _round((ai_generated + ai_refined) / 2)

    result.overall_score = int(clamp(overall_score, 0, MAX_OVERALL_SCORE))
    result.ai_generated = int(clamp(ai_generated, 0, MAX_AI_GENERATED))
    result.ai_refined = int(clamp(ai_refined, 0, MAX_AI_REFINED))
    result.human_written = int(clamp(human_written, MIN_HUMAN_WRITTEN, 100))
    return result


# --- Classification ---

def classify(text: str, language: str = "en", rng: Optional[random.Random] = None) -> AnalysisResult:
    """Local, human-favouring classification. Never raises for string input."""
    rng = rng or random
    text = text or ""
    human_indicators = count_human_indicators(text)
    ai_indicators = count_ai_indicators(text)

    ai_generated = 0
    ai_refined = 0
    if ai_indicators > 3 and human_indicators < 2:
        ai_generated = min(30, ai_indicators * 5)
    elif ai_indicators > 1 and human_indicators < 3:
        ai_refined = min(15, ai_indicators * 3)

    human_written = max(80, 100 - ai_generated - ai_refined)
    overall_score = min(20, (ai_generated + ai_refined) / 2)

    result = AnalysisResult(
        overall_score=_round(overall_score),
        ai_generated=ai_generated,
        ai_refined=ai_refined,
        human_written=human_written,
        predictability_score=predictability_score(text),
        formulaic_patterns=ai_indicators * 8,
        sentences=[analyze_sentence(s) for s in split_into_sentences(text)],
        detailed_analysis=DetailedAnalysis(
            vocabulary=_round(lexical_diversity(text)),
            syntax=natural_syntax_score(text),
            coherence=_round(70 + rng.random() * 20),
            creativity=_round(60 + rng.random() * 30),
        ),
        word_count=word_count(text),
        language=language,
        source="heuristic",
        note=HEURISTIC_NOTE,
    )
    return normalize_scores(result)


def highlight_matches(original_text: str, sentences: Iterable[SentenceScore]) -> str:
    """
    Wraps each occurrence of a highly-probable AI sentence in ***...***.
    Longer sentences go first so a short sentence cannot split a longer match.
    """
    flagged = [
        s for s in sentences
        if s.highlighted and s.text and s.ai_probability > HIGHLIGHT_THRESHOLD
    ]
    highlighted = original_text
    for sentence in sorted(flagged, key=lambda s: len(s.text), reverse=True):
        regex = re.compile(re.escape(sentence.text), re.IGNORECASE)
        highlighted = regex.sub(lambda m: f"***{m.group(0)}***", highlighted)
    return highlighted


# --- LLM response validation ---

def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _percent(value: Any, default: int) -> int:
    number = _number(value)
    # Zero falls back to the default, as with a missing field.
    if not number:
        return default
    return int(clamp(_round(number), 0, 100))


def _validate_sentences(raw: Any) -> List[SentenceScore]:
    if not isinstance(raw, list):
        return []
    sentences = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("text"), str) or not item["text"].strip():
            continue
        probability = _percent(item.get("aiProbability"), 0)
        labels = item.get("patterns")
        labels = [p for p in labels if isinstance(p, str)] if isinstance(labels, list) else []
        sentences.append(SentenceScore(
            text=item["text"],
            ai_probability=probability,
            patterns=labels,
            highlighted=bool(item.get("highlighted")) and probability > HIGHLIGHT_THRESHOLD,
        ))
    return sentences


def _validate_details(raw: Any) -> DetailedAnalysis:
    if not isinstance(raw, dict):
        return DetailedAnalysis()
    defaults = DetailedAnalysis()
    return DetailedAnalysis(
        vocabulary=_percent(raw.get("vocabulary"), defaults.vocabulary),
        syntax=_percent(raw.get("syntax"), defaults.syntax),
        coherence=_percent(raw.get("coherence"), defaults.coherence),
        creativity=_percent(raw.get("creativity"), defaults.creativity),
    )


def validate_analysis(raw: Dict[str, Any], text: str, language: str = "en") -> AnalysisResult:
    """Fills missing or malformed LLM fields with conservative defaults, then normalizes."""
    ai_generated = _percent(raw.get("aiGenerated"), 0)
    ai_refined = _percent(raw.get("aiRefined"), 0)
    sentences = _validate_sentences(raw.get("sentences"))
    if not sentences:
        sentences = [analyze_sentence(s) for s in split_into_sentences(text)]

    result = AnalysisResult(
        overall_score=_percent(raw.get("overallScore"), 15),
        ai_generated=ai_generated,
        ai_refined=ai_refined,
        human_written=_percent(raw.get("humanWritten"), max(80, 100 - ai_generated - ai_refined)),
        predictability_score=_percent(raw.get("predictabilityScore"), 40),
        formulaic_patterns=_percent(raw.get("formulaicPatterns"), 20),
        sentences=sentences,
        detailed_analysis=_validate_details(raw.get("detailedAnalysis")),
        word_count=word_count(text),
        language=language,
        source="ai_generated",
    )
    return normalize_scores(result)


class AIDetector:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    def detect(self, text: str, language: str = "en") -> AnalysisResult:
        """
        Runs the LLM analysis when available and falls back to the local
        heuristic on any service or parse failure.
        """
        logger.info("Detection request for text length %d", len(text))
        try:
            raw = self.llm.complete_json(
                SYSTEM_PROMPT,
                USER_PROMPT.format(text=text[:config.DETECTION_CHAR_LIMIT]),
                temperature=0.2,
                max_tokens=2000,
            )
            result = validate_analysis(raw, text, language)
        except LLMError as e:
            logger.warning("LLM detection unavailable, using heuristic: %s", e)
            result = classify(text, language)

        result.highlighted_text = highlight_matches(text, result.sentences)
        return result
