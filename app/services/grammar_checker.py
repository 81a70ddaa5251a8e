import logging
import re
from typing import Any, List

from app.models.schemas import GrammarIssue, GrammarResult, IssuePosition
from app.services.llm_client import LLMClient, LLMError, LLMUnavailable
from app.services.writing_analyzer import WritingAnalyzer

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an advanced grammar checking engine. Analyze the provided text for grammar, spelling, punctuation, and style issues.

CRITICAL REQUIREMENTS:
1. Return ONLY a JSON object of the form {"issues": [...]} - no other text
2. Each issue must have exact character positions
3. Be precise and accurate with suggestions
4. Include educational explanations
5. Categorize issues by type and severity

ISSUE TYPES:
- grammar: Subject-verb agreement, tense, sentence structure
- spelling: Misspelled words, homophones, typos
- punctuation: Commas, periods, quotes, apostrophes
- style: Word choice, clarity, conciseness, formality

SEVERITY LEVELS:
- error: Critical issues that affect understanding
- warning: Issues that may cause confusion
- suggestion: Style improvements and enhancements

ISSUE FORMAT:
{
  "type": "grammar|spelling|punctuation|style",
  "subtype": "specific issue category",
  "severity": "error|warning|suggestion",
  "text": "exact text with issue",
  "suggestion": "corrected text",
  "explanation": "clear educational explanation",
  "rule": "relevant grammar rule",
  "position": {"start": number, "end": number}
}"""

USER_PROMPT = """Analyze this text for all types of writing issues. Be thorough but concise. Focus on actual errors rather than subjective preferences.

Text to analyze:
"{text}"

Language: {language}
Include detailed explanations: {explanations}"""

_HOMOPHONE = re.compile(r"\b(their|there)\b", re.IGNORECASE)
_CONJUNCTION_COMMA = re.compile(r", (?:and|but)\b")
_DOUBLE_SPACE = re.compile(r"  ")


def calculate_confidence(issues: List[GrammarIssue]) -> int:
    errors = sum(1 for i in issues if i.severity == "error")
    warnings = sum(1 for i in issues if i.severity == "warning")
    return max(0, min(100, 100 - errors * 5 - warnings * 2))


def _issue(type_, subtype, severity, text, suggestion, explanation, rule, start) -> GrammarIssue:
    return GrammarIssue(
        type=type_,
        subtype=subtype,
        severity=severity,
        text=text,
        suggestion=suggestion,
        explanation=explanation,
        rule=rule,
        position=IssuePosition(start=start, end=start + len(text)),
    )


class GrammarChecker:
    def __init__(self, llm: LLMClient, analyzer: WritingAnalyzer = None):
        self.llm = llm
        self.analyzer = analyzer or WritingAnalyzer()

    def rule_based_issues(self, text: str) -> List[GrammarIssue]:
        """Local checks used whenever the LLM is not available."""
        issues = []

        m = _HOMOPHONE.search(text)
        if m:
            word = m.group(1)
            other = "there" if word.lower() == "their" else "their"
            if word[0].isupper():
                other = other.capitalize()
            issues.append(_issue(
                "spelling", "homophone confusion", "warning", word, other,
                f'Check that "{word}" is the intended word here; "{other}" is easily confused with it.',
                "Homophone Usage: There (place), Their (possessive), They're (they are).",
                m.start(),
            ))

        m = _CONJUNCTION_COMMA.search(text)
        if m:
            issues.append(_issue(
                "punctuation", "comma usage", "suggestion", m.group(0), m.group(0)[1:],
                "Consider whether the comma is necessary before the coordinating conjunction.",
                "Comma Rules: Use commas before coordinating conjunctions in compound sentences.",
                m.start(),
            ))

        m = _DOUBLE_SPACE.search(text)
        if m:
            issues.append(_issue(
                "spelling", "double spaces", "warning", "  ", " ",
                "Avoid using double spaces between words.",
                "Typography: Use single spaces between words in modern writing.",
                m.start(),
            ))

        for word, start, correction in self.analyzer.misspellings(text):
            issues.append(_issue(
                "spelling", "misspelled word", "error", word, correction,
                f'"{word}" appears to be misspelled.',
                "Spelling: Use the standard dictionary spelling.",
                start,
            ))

        return sorted(issues, key=lambda i: i.position.start)

    def _validate_issues(self, raw: Any) -> List[GrammarIssue]:
        if not isinstance(raw, list):
            return []
        issues = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            position = item.get("position")
            if not (item.get("type") and item.get("text") and item.get("suggestion")):
                continue
            if not isinstance(position, dict):
                continue
            start, end = position.get("start"), position.get("end")
            if not isinstance(start, int) or not isinstance(end, int):
                continue
            issues.append(GrammarIssue(
                type=str(item["type"]),
                subtype=str(item.get("subtype", "")),
                severity=str(item.get("severity", "suggestion")),
                text=str(item["text"]),
                suggestion=str(item["suggestion"]),
                explanation=str(item.get("explanation", "")),
                rule=str(item.get("rule", "")),
                position=IssuePosition(start=start, end=end),
            ))
        return issues

    def check(self, text: str, language: str = "en-US", include_explanations: bool = True) -> GrammarResult:
        note = None
        try:
            raw = self.llm.complete_json(
                SYSTEM_PROMPT,
                USER_PROMPT.format(text=text, language=language, explanations=include_explanations),
                temperature=0.1,
                max_tokens=2000,
                top_p=0.9,
            )
            issues = self._validate_issues(raw.get("issues"))
            source = "ai_generated"
        except LLMUnavailable:
            logger.info("GROQ_API_KEY not set, using rule-based grammar check")
            issues = self.rule_based_issues(text)
            source = "rule_based"
        except LLMError as e:
            logger.warning("Grammar check fell back to rules: %s", e)
            issues = self.rule_based_issues(text)
            source = "error_fallback"
            note = "Using fallback analysis due to API error"

        stats = self.analyzer.analyze(text)
        return GrammarResult(
            issues=issues,
            word_count=stats["word_count"],
            character_count=len(text),
            confidence=calculate_confidence(issues),
            readability_score=stats["readability_score"],
            readability_label=stats["readability_label"],
            language=language,
            source=source,
            note=note,
        )
