"""
Named pattern tables for the heuristic AI-detection scorer.

Each table maps a label to a detector: a callable that takes a string and
returns True when the pattern is present. Indicator tables are counted by
the number of distinct labels that fire, not by occurrences.
"""
import re
from typing import Callable, Dict, List

Detector = Callable[[str], bool]


def _phrase(phrase: str) -> Detector:
    """Case-insensitive whole-word match for a literal phrase."""
    regex = re.compile(r"(?<![\w'])" + re.escape(phrase) + r"(?![\w'])", re.IGNORECASE)
    return lambda text: regex.search(text) is not None


def _regex(pattern: str, flags: int = re.IGNORECASE) -> Detector:
    regex = re.compile(pattern, flags)
    return lambda text: regex.search(text) is not None


_APOSTROPHE = "['’]"


def _contraction(word: str) -> Detector:
    # Accept both straight and curly apostrophes.
    head, tail = word.split("'")
    return _regex(r"\b" + re.escape(head) + _APOSTROPHE + re.escape(tail) + r"\b")


# Casual-speech markers: fillers, hedges, contractions and slang.
HUMAN_INDICATORS: Dict[str, Detector] = {
    "um": _phrase("um"),
    "uh": _phrase("uh"),
    "like": _phrase("like"),
    "you know": _phrase("you know"),
    "kinda": _phrase("kinda"),
    "sorta": _phrase("sorta"),
    "i mean": _phrase("i mean"),
    "honestly": _phrase("honestly"),
    "actually": _phrase("actually"),
    "basically": _phrase("basically"),
    "literally": _phrase("literally"),
    "pretty": _phrase("pretty"),
    "really": _phrase("really"),
    "totally": _phrase("totally"),
    "absolutely": _phrase("absolutely"),
    "seriously": _phrase("seriously"),
    "wait": _phrase("wait"),
    "no": _phrase("no"),
    "yeah": _phrase("yeah"),
    "yep": _phrase("yep"),
    "nope": _phrase("nope"),
    "huh": _phrase("huh"),
    "right?": _regex(r"\bright\?"),
    "i'm": _contraction("i'm"),
    "it's": _contraction("it's"),
    "that's": _contraction("that's"),
    "what's": _contraction("what's"),
    "there's": _contraction("there's"),
    "here's": _contraction("here's"),
    "how's": _contraction("how's"),
    "don't": _contraction("don't"),
    "can't": _contraction("can't"),
    "won't": _contraction("won't"),
    "isn't": _contraction("isn't"),
    "aren't": _contraction("aren't"),
    "wasn't": _contraction("wasn't"),
    "weren't": _contraction("weren't"),
    "gonna": _phrase("gonna"),
    "wanna": _phrase("wanna"),
    "gotta": _phrase("gotta"),
    "shoulda": _phrase("shoulda"),
    "coulda": _phrase("coulda"),
    "woulda": _phrase("woulda"),
}

# Formal transitions and stock phrases typical of generated prose.
AI_INDICATORS: Dict[str, Detector] = {
    phrase: _phrase(phrase)
    for phrase in (
        "furthermore",
        "moreover",
        "consequently",
        "additionally",
        "nevertheless",
        "thus",
        "hence",
        "therefore",
        "accordingly",
        "in conclusion",
        "to summarize",
        "overall",
        "in summary",
        "it is important to",
        "it is crucial to",
        "it is essential to",
        "in order to",
        "with the aim of",
        "for the purpose of",
    )
}

# Sentence-level signals that lower a sentence's AI probability.
NATURAL_PUNCTUATION: Detector = _regex(r"\?|\.\.\.|…|—")
CASUAL_MARKERS: Detector = _regex(r"\b(?:like|um|uh|you know|kinda|sorta)\b")

# Labels reported per sentence.
SENTENCE_PATTERNS: Dict[str, Detector] = {
    "Formal transitions": _regex(r"\b(?:furthermore|moreover|consequently|thus|hence)\b"),
    "Summary phrases": _regex(r"\b(?:in conclusion|to summarize|overall|in summary)\b"),
    "Long structured sentence": lambda s: len(s) > 35 and re.search(r"[,;—]", s) is None,
}

# Signals rewarded by the natural-syntax metric.
SYNTAX_SIGNALS: Dict[str, Detector] = {
    "expressive punctuation": _regex(r"[?!…—]"),
    "filler words": CASUAL_MARKERS,
    "quotation": _regex(r"'.*?'|\".*?\""),
}


def matching_labels(table: Dict[str, Detector], text: str) -> List[str]:
    """Return the labels in `table` whose detector fires on `text`."""
    return [label for label, detect in table.items() if detect(text)]


def count_matches(table: Dict[str, Detector], text: str) -> int:
    return len(matching_labels(table, text))
