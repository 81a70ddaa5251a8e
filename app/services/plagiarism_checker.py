import logging
import random
from typing import Any, Dict, List, Optional

from app.models.schemas import HighlightedSegment, PlagiarismResult, PlagiarismSource
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable
from app.utils.text_processing import clamp, split_into_sentences, word_count

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {"en": "English", "es": "Spanish", "fr": "French", "de": "German"}

# Sentence similarity above which a sentence counts as copied.
MATCH_THRESHOLD = 60
VERDICT_THRESHOLD = 15

MOCK_DOMAINS = [
    ("scholar.archive.org", "Archived Research on"),
    ("en.wikipedia.org", "Overview of"),
    ("www.researchgate.net", "A Study of"),
    ("journals.plos.org", "Perspectives on"),
    ("medium.com", "Notes on"),
]

SYSTEM_PROMPT = """You are an advanced plagiarism detection system. Analyze text content and generate realistic plagiarism reports with accurate source matching.
Always return valid JSON with the exact structure specified. Do not include any explanations or additional text - only the JSON object.
Base your analysis on the actual content provided, creating plausible sources that could realistically match parts of the text."""

USER_PROMPT = """Analyze the following text and provide a realistic plagiarism analysis.

TEXT TO ANALYZE:
"{text}"

Return ONLY valid JSON with this structure:
{{
  "plagiarizedPercentage": number,
  "sources": [
    {{"id": number, "url": string, "title": string, "similarity": number,
      "matchedText": string, "matchedWords": number, "domain": string}}
  ],
  "highlightedText": [
    {{"text": string, "isPlagiarized": boolean, "sourceId": number, "similarity": number}}
  ]
}}"""


def lexical_similarity(sent1: str, sent2: str) -> float:
    """Jaccard overlap of lowercase word sets, as a percentage."""
    set1 = set(sent1.lower().split())
    set2 = set(sent2.lower().split())
    if not set1 or not set2:
        return 0.0
    return len(set1 & set2) / len(set1 | set2) * 100


def language_names(language: str) -> List[str]:
    return [LANGUAGE_NAMES.get(language, "English")]


def verdict(plagiarized_percentage: float) -> str:
    return "Plagiarism Detected" if plagiarized_percentage > VERDICT_THRESHOLD else "Clean"


def _result(text: str, language: str, plagiarized: float, sources: List[PlagiarismSource],
            segments: List[HighlightedSegment], source: str) -> PlagiarismResult:
    plagiarized = round(clamp(plagiarized, 0, 100), 2)
    unique = round(100 - plagiarized, 2)
    return PlagiarismResult(
        overall_score=unique,
        unique_content=unique,
        plagiarized_percentage=plagiarized,
        word_count=word_count(text),
        sources=sources,
        highlighted_text=segments,
        languages=language_names(language),
        verdict=verdict(plagiarized),
        source=source,
    )


class PlagiarismChecker:
    def __init__(self, llm: LLMClient, rng: Optional[random.Random] = None):
        self.llm = llm
        self.rng = rng or random.Random()

    def compare_with_sources(self, text: str, sources: List[str], language: str = "en") -> PlagiarismResult:
        """Sentence-by-sentence lexical comparison against caller-supplied documents."""
        sentences = split_into_sentences(text, limit=None)
        candidates = [
            (idx, candidate)
            for idx, document in enumerate(sources)
            for candidate in split_into_sentences(document, limit=None)
        ]

        segments = []
        best_per_source: Dict[int, tuple] = {}
        for sentence in sentences:
            best_idx, best_match, best_score = None, "", 0.0
            for idx, candidate in candidates:
                score = lexical_similarity(sentence, candidate)
                if score > best_score:
                    best_idx, best_match, best_score = idx, candidate, score

            copied = best_idx is not None and best_score > MATCH_THRESHOLD
            segments.append(HighlightedSegment(
                text=sentence,
                is_plagiarized=copied,
                source_id=best_idx + 1 if copied else None,
                similarity=round(best_score, 2),
            ))
            if copied and best_score > best_per_source.get(best_idx, (0.0, ""))[0]:
                best_per_source[best_idx] = (best_score, best_match)

        found = [
            PlagiarismSource(
                id=idx + 1,
                url="",
                title=f"Provided source {idx + 1}",
                similarity=round(score, 2),
                matched_text=match,
                matched_words=len(match.split()),
                domain="user-provided",
            )
            for idx, (score, match) in sorted(best_per_source.items())
        ]
        flagged = sum(1 for s in segments if s.is_plagiarized)
        plagiarized = flagged / len(segments) * 100 if segments else 0.0
        return _result(text, language, plagiarized, found, segments, "lexical_comparison")

    def mock_report(self, text: str, language: str = "en") -> PlagiarismResult:
        """Fabricated but plausible report used when no model is available."""
        sentences = split_into_sentences(text, limit=None)
        plagiarized = self.rng.uniform(0, 30)

        found = []
        if plagiarized > 10 and sentences:
            topic = " ".join(sentences[0].split()[:4])
            count = min(len(sentences), self.rng.randint(1, 3))
            picks = self.rng.sample(range(len(sentences)), count)
            for i, pick in enumerate(sorted(picks), 1):
                domain, prefix = self.rng.choice(MOCK_DOMAINS)
                matched = sentences[pick]
                found.append(PlagiarismSource(
                    id=i,
                    url=f"https://{domain}/{topic.lower().replace(' ', '-')}",
                    title=f"{prefix} {topic}",
                    similarity=round(plagiarized * self.rng.uniform(0.5, 0.9), 2),
                    matched_text=matched,
                    matched_words=len(matched.split()),
                    domain=domain,
                ))

        matched_ids = {s.matched_text: s.id for s in found}
        segments = [
            HighlightedSegment(
                text=sentence,
                is_plagiarized=sentence in matched_ids,
                source_id=matched_ids.get(sentence),
                similarity=round(plagiarized, 2) if sentence in matched_ids else None,
            )
            for sentence in sentences
        ]
        return _result(text, language, plagiarized, found, segments, "mock_generated")

    def _validate_llm(self, raw: Dict[str, Any], text: str, language: str) -> PlagiarismResult:
        raw_sources = raw.get("sources")
        raw_segments = raw.get("highlightedText")
        if not isinstance(raw_sources, list):
            raw_sources = []
        if not isinstance(raw_segments, list):
            raw_segments = []

        sources = []
        for index, item in enumerate(raw_sources, 1):
            if not isinstance(item, dict):
                continue
            similarity = item.get("similarity")
            similarity = similarity if isinstance(similarity, (int, float)) else 0
            matched_words = item.get("matchedWords")
            sources.append(PlagiarismSource(
                id=item.get("id") if isinstance(item.get("id"), int) else index,
                url=str(item.get("url") or f"https://example-source-{index}.edu/research"),
                title=str(item.get("title") or f"Research Paper {index}"),
                similarity=clamp(similarity, 0, 100),
                matched_text=str(item.get("matchedText") or "Content match not specified"),
                matched_words=matched_words if isinstance(matched_words, int) else self.rng.randint(20, 69),
                domain=str(item.get("domain") or f"example-source-{index}.edu"),
            ))

        segments = []
        for item in raw_segments:
            if isinstance(item, dict) and isinstance(item.get("text"), str):
                segments.append(HighlightedSegment(
                    text=item["text"],
                    is_plagiarized=bool(item.get("isPlagiarized")),
                    source_id=item.get("sourceId") if isinstance(item.get("sourceId"), int) else None,
                    similarity=item.get("similarity") if isinstance(item.get("similarity"), (int, float)) else None,
                ))
        if not segments:
            segments = [HighlightedSegment(text=s, is_plagiarized=False) for s in split_into_sentences(text, limit=None)]

        plagiarized = raw.get("plagiarizedPercentage")
        plagiarized = plagiarized if isinstance(plagiarized, (int, float)) else 0
        return _result(text, language, plagiarized, sources, segments, "ai_generated")

    def check(self, text: str, language: str = "en", sources: Optional[List[str]] = None) -> PlagiarismResult:
        if sources:
            return self.compare_with_sources(text, sources, language)

        try:
            raw = self.llm.complete_json(
                SYSTEM_PROMPT, USER_PROMPT.format(text=text), temperature=0.8, max_tokens=2000
            )
            return self._validate_llm(raw, text, language)
        except LLMUnavailable:
            logger.info("GROQ_API_KEY not set, returning mock plagiarism report")
        except LLMError as e:
            logger.warning("Plagiarism check fell back to mock report: %s", e)
        return self.mock_report(text, language)
