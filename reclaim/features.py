"""
Text Feature Extractor

Derives the linguistic statistics the scorer needs from raw text:
word and sentence counts, two sentence-length averages (words for the
authorship heuristic, characters for the manipulation heuristic), and
word frequencies with repeated-content-word detection.

Pure function of its input. Empty text yields all-zero features.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_EDGE_PUNCT = "\"'“”‘’()[]{}<>.,;:!?…-"

# Repeated-word thresholds: count must exceed REPEAT_MIN_COUNT and
# length must exceed REPEAT_MIN_LENGTH (filters short stop words).
REPEAT_MIN_COUNT = 5
REPEAT_MIN_LENGTH = 4

# Sentences at or below this trimmed length are not substantive
SUBSTANTIVE_MIN_CHARS = 10


@dataclass(frozen=True)
class TextFeatures:
    word_count: int = 0
    sentence_count: int = 0
    avg_sentence_length: float = 0.0
    substantive_sentence_count: int = 0
    avg_sentence_chars: float = 0.0
    word_frequency: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    repeated_content_words: tuple[str, ...] = ()


def split_words(text: str) -> list[str]:
    """Case-folded whitespace tokens, empties dropped."""
    return [w for w in text.casefold().split() if w]


def split_sentences(text: str) -> list[str]:
    """Trimmed sentence fragments split on runs of . ! ?"""
    return [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]


def extract_features(text: str) -> TextFeatures:
    if not text or not text.strip():
        return TextFeatures()

    words = split_words(text)
    sentences = split_sentences(text)

    avg_words = 0.0
    if sentences:
        avg_words = sum(len(s.split()) for s in sentences) / len(sentences)

    substantive = [s for s in sentences if len(s) > SUBSTANTIVE_MIN_CHARS]
    avg_chars = 0.0
    if substantive:
        avg_chars = sum(len(s) for s in substantive) / len(substantive)

    # Counter preserves first-insertion order, so repeated words come
    # out in the order they first appear.
    frequency = Counter(
        token for token in (w.strip(_EDGE_PUNCT) for w in words) if token
    )
    repeated = tuple(
        word for word, count in frequency.items()
        if count > REPEAT_MIN_COUNT and len(word) > REPEAT_MIN_LENGTH
    )

    return TextFeatures(
        word_count=len(words),
        sentence_count=len(sentences),
        avg_sentence_length=avg_words,
        substantive_sentence_count=len(substantive),
        avg_sentence_chars=avg_chars,
        word_frequency=MappingProxyType(dict(frequency)),
        repeated_content_words=repeated,
    )
