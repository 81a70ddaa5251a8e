import re
from typing import List, Optional

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
_WHITESPACE = re.compile(r"\s+")

MAX_SENTENCES = 20


def split_into_sentences(text: str, limit: Optional[int] = MAX_SENTENCES) -> List[str]:
    """
    Splits text on runs of '.', '!' and '?', dropping empty fragments.
    At most `limit` sentences are returned; pass None for no cap.
    """
    sentences = [s.strip() for s in _SENTENCE_BOUNDARY.split(text or "") if s.strip()]
    if limit is not None:
        sentences = sentences[:limit]
    return sentences


def split_words(text: str) -> List[str]:
    return [w for w in _WHITESPACE.split(text or "") if w]


def word_count(text: str) -> int:
    return len(split_words(text))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
