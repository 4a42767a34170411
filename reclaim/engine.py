"""
Heuristic Engine - Deterministic Fallback Classifier

The rule-based path. Deterministic, no network, no state between calls.
Used whenever the model path is unconfigured or fails.

  text -> extract_features -> score_text -> decide_* -> verdict

The engine holds only a reference to an immutable RuleBook, so one
instance is safely shared by every request and thread.
"""

from __future__ import annotations

from typing import Optional

from reclaim.classifier import (
    NewsVerdict,
    Verdict,
    decide_authorship,
    decide_manipulation,
    decide_news,
    uncertain_news_verdict,
    uncertain_verdict,
)
from reclaim.features import extract_features
from reclaim.patterns import RULEBOOK, RuleBook
from reclaim.scoring import ScoreAccumulator, score_text

_EMPTY_REASON = "No text provided. Nothing to analyze."


class HeuristicEngine:
    """
    Rule-based classifier for authorship, manipulation and news
    credibility. None of its operations raise for any string input.
    """

    def __init__(self, rulebook: RuleBook = RULEBOOK):
        self._rulebook = rulebook

    @property
    def rulebook(self) -> RuleBook:
        return self._rulebook

    def score(self, text: str, technical: bool = False) -> ScoreAccumulator:
        text = text or ""
        return score_text(
            text, extract_features(text), rulebook=self._rulebook, technical=technical,
        )

    def classify_authorship(self, text: str) -> Verdict:
        if not text or not text.strip():
            return uncertain_verdict(_EMPTY_REASON)
        return decide_authorship(self.score(text))

    def classify_manipulation(self, text: str) -> Verdict:
        """Authorship plus hyperreal/manipulated detection."""
        if not text or not text.strip():
            return uncertain_verdict(_EMPTY_REASON)
        return decide_manipulation(self.score(text, technical=True))

    def classify_news_credibility(
        self,
        text: str,
        source_url: Optional[str] = None,
    ) -> NewsVerdict:
        if not text or not text.strip():
            return uncertain_news_verdict(_EMPTY_REASON)
        return decide_news(self.score(text), source_url=source_url)


# ============================================================
# SINGLETON - instantiated once, never mutated
# ============================================================

heuristic_engine = HeuristicEngine()
