import re
from typing import Any, Dict, List, Tuple

import textstat
from spellchecker import SpellChecker

from app.utils.text_processing import split_into_sentences, word_count

_WORD = re.compile(r"\b[A-Za-z]+(?:'[A-Za-z]+)?\b")


class WritingAnalyzer:
    def __init__(self):
        self.spell = SpellChecker()

    def analyze(self, text: str) -> Dict[str, Any]:
        """
        Readability and basic statistics for a block of text.
        """
        if not text.strip():
            return {
                "readability_score": 0.0,
                "readability_label": "N/A",
                "word_count": 0,
                "sentence_count": 0,
                "long_sentences": 0,
            }

        # Flesch Reading Ease: 90-100 very easy, 0-30 very confusing
        score = textstat.flesch_reading_ease(text)
        sentences = split_into_sentences(text, limit=None)

        return {
            "readability_score": round(score, 2),
            "readability_label": self.readability_label(score),
            "word_count": word_count(text),
            "sentence_count": len(sentences),
            # Sentences over 30 words read as run-ons
            "long_sentences": sum(1 for s in sentences if len(s.split()) > 30),
        }

    def misspellings(self, text: str) -> List[Tuple[str, int, str]]:
        """
        Returns (word, offset, correction) for every unknown word.
        Capitalized words are skipped as likely proper nouns.
        """
        matches = [m for m in _WORD.finditer(text) if not m.group(0)[0].isupper()]
        unknown = self.spell.unknown([m.group(0).lower() for m in matches])
        found = []
        for m in matches:
            word = m.group(0)
            if word.lower() not in unknown:
                continue
            correction = self.spell.correction(word.lower())
            if correction and correction != word.lower():
                found.append((word, m.start(), correction))
        return found

    @staticmethod
    def readability_label(score: float) -> str:
        if score > 90: return "Very Easy"
        if score > 80: return "Easy"
        if score > 70: return "Fairly Easy"
        if score > 60: return "Standard"
        if score > 50: return "Fairly Difficult"
        if score > 30: return "Difficult"
        return "Very Confusing"
