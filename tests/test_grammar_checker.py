"""Tests for the grammar checker and the writing analyzer behind it."""

from __future__ import annotations

import pytest

from app.models.schemas import GrammarIssue, IssuePosition
from app.services.grammar_checker import GrammarChecker, calculate_confidence
from app.services.llm_client import LLMError
from app.services.writing_analyzer import WritingAnalyzer


@pytest.fixture(scope="module")
def analyzer():
    return WritingAnalyzer()


def _issue(severity: str) -> GrammarIssue:
    return GrammarIssue(
        type="grammar", severity=severity, text="x", suggestion="y", position=IssuePosition(start=0, end=1)
    )


class TestWritingAnalyzer:
    def test_empty_text(self, analyzer):
        stats = analyzer.analyze("   ")
        assert stats["readability_label"] == "N/A"
        assert stats["word_count"] == 0

    def test_basic_stats(self, analyzer):
        stats = analyzer.analyze("The cat sat. The dog ran!")
        assert stats["word_count"] == 6
        assert stats["sentence_count"] == 2
        assert stats["long_sentences"] == 0

    @pytest.mark.parametrize(
        "score, label",
        [(95, "Very Easy"), (85, "Easy"), (75, "Fairly Easy"), (65, "Standard"),
         (55, "Fairly Difficult"), (40, "Difficult"), (10, "Very Confusing")],
    )
    def test_readability_labels(self, score, label):
        assert WritingAnalyzer.readability_label(score) == label

    def test_misspellings_with_offsets(self, analyzer):
        found = analyzer.misspellings("We will recieve the parcel.")
        assert found == [("recieve", 8, "receive")]

    def test_capitalized_words_are_skipped(self, analyzer):
        assert analyzer.misspellings("Zyxqwv went home.") == []


class TestConfidence:
    def test_weights_errors_and_warnings(self):
        issues = [_issue("error"), _issue("error"), _issue("warning"), _issue("suggestion")]
        assert calculate_confidence(issues) == 88

    def test_floor_at_zero(self):
        assert calculate_confidence([_issue("error")] * 30) == 0


class TestRuleBasedIssues:
    def test_homophone_and_comma(self, offline_llm, analyzer):
        issues = GrammarChecker(offline_llm, analyzer).rule_based_issues("I went their, and it was fun.")
        assert [i.subtype for i in issues] == ["homophone confusion", "comma usage"]
        homophone, comma = issues
        assert homophone.text == "their"
        assert homophone.suggestion == "there"
        assert (homophone.position.start, homophone.position.end) == (7, 12)
        assert comma.text == ", and"
        assert comma.suggestion == " and"
        assert comma.position.start == 12

    def test_capitalized_homophone(self, offline_llm, analyzer):
        [issue] = GrammarChecker(offline_llm, analyzer).rule_based_issues("There it is.")
        assert issue.suggestion == "Their"

    def test_double_space(self, offline_llm, analyzer):
        [issue] = GrammarChecker(offline_llm, analyzer).rule_based_issues("Hello  world")
        assert issue.subtype == "double spaces"
        assert issue.position.start == 5

    def test_spelling(self, offline_llm, analyzer):
        [issue] = GrammarChecker(offline_llm, analyzer).rule_based_issues("We will recieve it.")
        assert issue.severity == "error"
        assert issue.suggestion == "receive"

    def test_clean_text(self, offline_llm, analyzer):
        assert GrammarChecker(offline_llm, analyzer).rule_based_issues("The cat sat on the mat.") == []


class TestCheck:
    def test_offline_check(self, offline_llm, analyzer):
        result = GrammarChecker(offline_llm, analyzer).check("I went their, and it was fun.")
        assert result.source == "rule_based"
        assert len(result.issues) == 2
        assert result.confidence == 98
        assert result.word_count == 7
        assert result.character_count == 29
        assert result.note is None

    def test_model_issues_are_validated(self, fake_llm, analyzer):
        llm = fake_llm(response={"issues": [
            {"type": "grammar", "severity": "error", "text": "go", "suggestion": "goes",
             "position": {"start": 4, "end": 6}},
            {"type": "style", "text": "x", "suggestion": "y", "position": {"start": "0"}},
            {"type": "spelling", "text": "teh"},
            "garbage",
        ]})
        result = GrammarChecker(llm, analyzer).check("She go home.", language="en-GB")
        assert result.source == "ai_generated"
        assert len(result.issues) == 1
        assert result.issues[0].suggestion == "goes"
        assert result.confidence == 95
        assert result.language == "en-GB"
        assert llm.calls[0]["options"]["temperature"] == 0.1

    def test_service_error_uses_rules(self, fake_llm, analyzer):
        result = GrammarChecker(fake_llm(error=LLMError("down")), analyzer).check("Hello  world")
        assert result.source == "error_fallback"
        assert result.note == "Using fallback analysis due to API error"
        assert result.issues[0].subtype == "double spaces"
