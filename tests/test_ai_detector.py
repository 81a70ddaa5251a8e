"""Tests for the conservative AI-content detector."""

from __future__ import annotations

import random

import pytest

from app.models.schemas import AnalysisResult, SentenceScore
from app.services import ai_detector
from app.services.ai_detector import (
    AIDetector,
    classify,
    count_ai_indicators,
    count_human_indicators,
    highlight_matches,
    normalize_scores,
    score_sentence,
    validate_analysis,
)
from app.services.llm_client import LLMError
from app.utils.text_processing import split_into_sentences

STRONG_AI = "Furthermore moreover consequently additionally nevertheless thus the plan works"

SAMPLES = [
    "",
    "   ",
    "The cat sat on the mat.",
    "Furthermore, therefore, consequently, hence this is true.",
    "I mean, you know, it's kinda like, whatever.",
    STRONG_AI + ". It rained.",
    "In conclusion, moreover, thus, hence, therefore, accordingly, overall it works!",
    "Wait... what?! No way — that's gonna be wild, right?",
    "(a+b) * [c] ^ $d$ | {e}?",
]


def _result(**overrides) -> AnalysisResult:
    values = dict(overall_score=0, ai_generated=0, ai_refined=0, human_written=100)
    values.update(overrides)
    return AnalysisResult(**values)


class TestIndicatorCounts:
    def test_human_indicators(self):
        assert count_human_indicators("I mean, you know, it's kinda like, whatever.") == 5

    def test_ai_indicators(self):
        assert count_ai_indicators("Furthermore, therefore, consequently, hence this is true.") == 4

    def test_empty_text(self):
        assert count_human_indicators("") == 0
        assert count_ai_indicators("") == 0


class TestScoreSentence:
    def test_neutral_sentence_gets_base_score(self):
        assert score_sentence("The report was filed") == 10

    def test_ai_indicators_raise_score(self):
        assert score_sentence("Furthermore, therefore, consequently, hence this is true") == 70

    def test_human_indicator_and_casual_marker_floor_at_zero(self):
        assert score_sentence("It's kinda weird") == 0

    def test_question_mark_penalty(self):
        # 10 + 15 (furthermore) - 20 (question mark)
        assert score_sentence("Furthermore, is the plan ready?") == 5

    def test_clamped_to_hundred(self):
        assert score_sentence(STRONG_AI) == 100


class TestClassify:
    def test_no_indicators_is_human(self):
        result = classify("The cat sat on the mat.")
        assert result.ai_generated == 0
        assert result.ai_refined == 0
        assert result.human_written >= 80

    def test_formal_transitions_flag_generated(self):
        result = classify("Furthermore, therefore, consequently, hence this is true.")
        assert result.ai_generated == 20
        assert result.ai_refined == 0
        assert result.human_written == 80
        assert result.overall_score == 10

    def test_casual_speech_is_fully_human(self):
        result = classify("I mean, you know, it's kinda like, whatever.")
        assert result.ai_generated == 0
        assert result.ai_refined == 0
        assert result.human_written == 100

    def test_few_transitions_flag_refined(self):
        result = classify("Moreover, the results hold. Thus we proceed.")
        assert result.ai_generated == 0
        assert result.ai_refined == 6
        assert result.human_written == 94
        assert result.overall_score == 3

    def test_human_markers_suppress_ai_flags(self):
        text = "Furthermore, moreover, thus, hence, it's kinda, like, you know, fine."
        result = classify(text)
        assert result.ai_generated == 0
        assert result.ai_refined == 0

    def test_strong_ai_is_capped(self):
        result = classify(STRONG_AI + ".")
        assert result.ai_generated == 25
        assert result.human_written == 70
        assert result.overall_score == 15

    def test_sentences_are_split_and_capped(self):
        text = " ".join(f"Sentence number {i}." for i in range(30))
        result = classify(text)
        assert len(result.sentences) == 20
        assert result.sentences[0].text == "Sentence number 0"

    def test_sentence_annotations(self):
        result = classify("Furthermore, therefore, consequently, hence this is true.")
        [sentence] = result.sentences
        assert sentence.ai_probability == 70
        assert sentence.patterns == ["Formal transitions"]
        assert sentence.highlighted is False

    def test_metadata(self):
        result = classify("One two three. Four five!", language="fr")
        assert result.word_count == 5
        assert result.language == "fr"
        assert result.source == "heuristic"
        assert result.note == ai_detector.HEURISTIC_NOTE

    def test_detailed_analysis_ranges(self):
        result = classify("Some ordinary text here.", rng=random.Random(7))
        details = result.detailed_analysis
        assert 70 <= details.coherence <= 90
        assert 60 <= details.creativity <= 90
        assert details.vocabulary == 100

    @pytest.mark.parametrize("text", SAMPLES)
    def test_bounds_hold_for_all_inputs(self, text):
        result = classify(text)
        assert 0 <= result.overall_score <= 30
        assert 0 <= result.ai_generated <= 25
        assert 0 <= result.ai_refined <= 15
        assert 70 <= result.human_written <= 100
        for sentence in result.sentences:
            assert 0 <= sentence.ai_probability <= 100
            assert sentence.highlighted == (sentence.ai_probability > 80)


class TestNormalizeScores:
    def test_rescales_combined_share_to_thirty(self):
        result = normalize_scores(_result(ai_generated=40, ai_refined=20))
        assert result.ai_generated == 20
        assert result.ai_refined == 10
        assert result.human_written == 70
        assert result.overall_score == 15

    def test_clamps_each_bucket(self):
        result = normalize_scores(_result(ai_generated=30, ai_refined=0))
        assert result.ai_generated == 25
        assert result.human_written == 70

    def test_small_values_untouched(self):
        result = normalize_scores(_result(ai_generated=4, ai_refined=2, human_written=50))
        assert (result.ai_generated, result.ai_refined) == (4, 2)
        assert result.human_written == 94
        assert result.overall_score == 3


class TestHighlightMatches:
    def test_wraps_high_probability_sentences(self):
        text = STRONG_AI + ". It rained."
        result = classify(text)
        highlighted = highlight_matches(text, result.sentences)
        assert highlighted == f"***{STRONG_AI}***. It rained."

    def test_ignores_low_probability_sentences(self):
        text = "The report was filed. It rained."
        sentences = [
            SentenceScore(text="The report was filed", ai_probability=80, highlighted=True),
            SentenceScore(text="It rained", ai_probability=10),
        ]
        assert highlight_matches(text, sentences) == text

    def test_requires_highlighted_flag(self):
        text = "The report was filed."
        sentences = [SentenceScore(text="The report was filed", ai_probability=95, highlighted=False)]
        assert highlight_matches(text, sentences) == text

    def test_escapes_regex_metacharacters(self):
        text = "Costs rose (a+b) [sharply]? Yes."
        sentences = [SentenceScore(text="Costs rose (a+b) [sharply]", ai_probability=90, highlighted=True)]
        assert highlight_matches(text, sentences) == "***Costs rose (a+b) [sharply]***? Yes."

    def test_case_insensitive_and_all_occurrences(self):
        text = "Data matters. data matters."
        sentences = [SentenceScore(text="Data matters", ai_probability=99, highlighted=True)]
        assert highlight_matches(text, sentences) == "***Data matters***. ***data matters***."

    def test_longer_sentence_first(self):
        text = "The plan works well today."
        sentences = [
            SentenceScore(text="plan works", ai_probability=90, highlighted=True),
            SentenceScore(text="The plan works well today", ai_probability=90, highlighted=True),
        ]
        highlighted = highlight_matches(text, sentences)
        assert highlighted.startswith("***The ")
        assert highlighted.endswith("today***.")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_highlighted_text_resplits_and_preserves_length(self, text):
        result = classify(text)
        highlighted = highlight_matches(text, result.sentences)
        split_into_sentences(highlighted)
        markers = highlighted.count("***") - text.count("***")
        assert len(highlighted) == len(text) + 3 * markers


class TestValidateAnalysis:
    def test_missing_fields_get_conservative_defaults(self):
        result = validate_analysis({}, "Plain text here. And more.")
        assert result.ai_generated == 0
        assert result.ai_refined == 0
        assert result.human_written == 100
        assert len(result.sentences) == 2
        assert result.detailed_analysis.syntax == 65
        assert result.source == "ai_generated"

    def test_model_scores_are_normalized(self):
        raw = {
            "aiGenerated": 90,
            "aiRefined": 50,
            "humanWritten": 10,
            "overallScore": 95,
            "sentences": [
                {"text": "Sentence one", "aiProbability": 95.4, "patterns": ["Formal", 3], "highlighted": True},
                {"text": "Sentence two", "aiProbability": 60, "highlighted": True},
                {"aiProbability": 99},
                "not a sentence",
            ],
            "detailedAnalysis": {"vocabulary": 88, "syntax": "bad"},
        }
        result = validate_analysis(raw, "Sentence one. Sentence two.")
        assert result.ai_generated == 19
        assert result.ai_refined == 11
        assert result.human_written == 70
        assert result.overall_score == 15
        assert [s.text for s in result.sentences] == ["Sentence one", "Sentence two"]
        assert result.sentences[0].ai_probability == 95
        assert result.sentences[0].patterns == ["Formal"]
        assert result.sentences[0].highlighted is True
        assert result.sentences[1].highlighted is False
        assert result.detailed_analysis.vocabulary == 88
        assert result.detailed_analysis.syntax == 65

    def test_non_numeric_scores_ignored(self):
        result = validate_analysis({"aiGenerated": "lots", "aiRefined": True}, "Hello.")
        assert result.ai_generated == 0
        assert result.ai_refined == 0


class TestAIDetector:
    def test_uses_model_response(self, fake_llm):
        llm = fake_llm(response={"aiGenerated": 10, "sentences": [
            {"text": "Furthermore it works", "aiProbability": 90, "highlighted": True},
        ]})
        result = AIDetector(llm).detect("Furthermore it works. Fine.")
        assert result.source == "ai_generated"
        assert result.ai_generated == 10
        assert result.highlighted_text == "***Furthermore it works***. Fine."
        assert llm.calls[0]["options"]["temperature"] == 0.2

    def test_prompt_truncates_long_text(self, fake_llm):
        llm = fake_llm(response={})
        AIDetector(llm).detect("a" * 5000)
        assert "a" * 3000 in llm.calls[0]["user"]
        assert "a" * 3001 not in llm.calls[0]["user"]

    def test_falls_back_on_service_error(self, fake_llm):
        llm = fake_llm(error=LLMError("boom"))
        result = AIDetector(llm).detect("Furthermore, therefore, consequently, hence this is true.")
        assert result.source == "heuristic"
        assert result.ai_generated == 20
        assert result.highlighted_text == "Furthermore, therefore, consequently, hence this is true."

    def test_falls_back_without_api_key(self, offline_llm):
        result = AIDetector(offline_llm).detect("I mean, you know, it's kinda like, whatever.")
        assert result.source == "heuristic"
        assert result.human_written == 100
