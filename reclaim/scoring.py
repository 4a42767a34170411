"""
Scoring Engine

Applies the RuleBook and the structural features of a text to produce
raw category scores. Scores only ever grow; comparing or netting them
is the classifier's job.

Each category that fires contributes sum(match_count * weight) to the
score field named by its target, and exactly one indicator string.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from reclaim.features import TextFeatures
from reclaim.patterns import RULEBOOK, Category, RuleBook

# Structural adjustments
LONG_SENTENCE_WORDS = 25
LONG_SENTENCE_BONUS = 20
SHORT_SENTENCE_WORDS = 10
SHORT_SENTENCE_BONUS = 15
DENSE_SENTENCE_CHARS = 120
DENSE_SENTENCE_BONUS = 15
REPEATED_WORDS_MIN = 3
REPEATED_WORDS_BONUS = 10

_SNIPPET_MAX = 60


@dataclass
class ScoreAccumulator:
    """Mutable score state for a single classification pass."""
    ai_score: float = 0.0
    human_score: float = 0.0
    manipulation_score: float = 0.0
    hyperreal_score: float = 0.0
    counts: dict[Category, int] = field(default_factory=dict)
    scores: dict[Category, float] = field(default_factory=dict)
    samples: dict[Category, list[str]] = field(default_factory=dict)
    indicators: list[str] = field(default_factory=list)

    def add(self, target: str, amount: float) -> None:
        if amount < 0:
            raise ValueError("Score contributions must be non-negative")
        if target == "ai":
            self.ai_score += amount
        elif target == "human":
            self.human_score += amount
        elif target == "manipulation":
            self.manipulation_score += amount
        elif target == "hyperreal":
            self.hyperreal_score += amount
        # "credibility" categories are read through counts by the
        # news decision and have no accumulator field.

    def note(self, indicator: str) -> None:
        self.indicators.append(indicator)

    def count(self, category: Category) -> int:
        return self.counts.get(category, 0)

    def has_authorship_signal(self) -> bool:
        return self.ai_score + self.human_score > 0


def _snippet(fragment: str) -> str:
    fragment = " ".join(fragment.split())
    if len(fragment) > _SNIPPET_MAX:
        fragment = fragment[:_SNIPPET_MAX - 3] + "..."
    return fragment


def _describe(category: Category, count: int, sample: str) -> str:
    if sample:
        return f"{count} {category.label} (e.g. \"{sample}\")"
    return f"{count} {category.label}"


def score_text(
    text: str,
    features: TextFeatures,
    rulebook: RuleBook = RULEBOOK,
    technical: bool = False,
) -> ScoreAccumulator:
    """
    Score a text against every rule plus structural adjustments.

    Args:
        text: Raw text; rules run against it unmodified.
        features: Output of extract_features() for the same text.
        rulebook: Rule library to apply.
        technical: Also apply the character-length adjustment used by
            the manipulation variant.
    """
    acc = ScoreAccumulator()

    # --- Phase 1: rule matches, grouped by category ---
    for category in rulebook.categories:
        total_matches = 0
        category_score = 0.0
        fragments: list[str] = []
        for r in rulebook.for_category(category):
            found = r.find(text)
            if not found:
                continue
            total_matches += len(found)
            category_score += len(found) * r.weight
            fragments.extend(found)

        if total_matches == 0:
            continue

        acc.counts[category] = total_matches
        acc.scores[category] = category_score
        acc.samples[category] = [_snippet(f) for f in fragments]
        acc.add(category.target, category_score)
        acc.note(_describe(category, total_matches, acc.samples[category][0]))

    # --- Phase 2: sentence structure ---
    if features.sentence_count > 0:
        if features.avg_sentence_length > LONG_SENTENCE_WORDS:
            acc.add("ai", LONG_SENTENCE_BONUS)
            acc.note("very long sentences")
        elif features.avg_sentence_length < SHORT_SENTENCE_WORDS:
            acc.add("human", SHORT_SENTENCE_BONUS)
            acc.note("short, casual sentences")

    if technical and features.avg_sentence_chars > DENSE_SENTENCE_CHARS:
        acc.add("ai", DENSE_SENTENCE_BONUS)
        acc.note("long, dense sentences")

    # --- Phase 3: repetition ---
    repeated = features.repeated_content_words
    if len(repeated) > REPEATED_WORDS_MIN:
        acc.add("ai", REPEATED_WORDS_BONUS)
        acc.note(f"repeated words: {', '.join(repeated[:3])}")

    return acc
