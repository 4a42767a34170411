"""
Reclaim - Content Authenticity Checker

Estimates whether text is AI-generated or human-written and, for news,
whether it is credible. A deterministic heuristic engine answers when
the model path is unavailable; both paths share one output contract.

Public API:
  - heuristic_engine:     Deterministic classifier (no network, no state)
  - detect_authorship:    AI vs human, primary path with heuristic fallback
  - detect_manipulation:  Authorship plus hyperreal/manipulated detection
  - verify_news:          News credibility, primary path with fallback
  - analyze_content:      Combined authorship + news analysis
  - VerdictProvider:      Strategy interface for verdict sources
  - LLMProvider:          Abstract LLM interface for provider swapping

Usage:
    from reclaim import heuristic_engine
    verdict = heuristic_engine.classify_authorship(text)
"""

__version__ = "0.3.0"

from reclaim.patterns import RULEBOOK, RULEBOOK_VERSION, Category, PatternRule, RuleBook
from reclaim.features import TextFeatures, extract_features
from reclaim.scoring import ScoreAccumulator, score_text
from reclaim.classifier import Breakdown, FactCheck, NewsVerdict, Verdict
from reclaim.engine import HeuristicEngine, heuristic_engine
from reclaim.providers import HeuristicVerdictProvider, ModelVerdictProvider, VerdictProvider
from reclaim.detector import (
    analyze_content,
    detect_authorship,
    detect_manipulation,
    is_news_content,
    verify_news,
)
from reclaim.llm import LLMProvider
from reclaim.llm.factory import get_provider

__all__ = [
    "RULEBOOK",
    "RULEBOOK_VERSION",
    "Category",
    "PatternRule",
    "RuleBook",
    "TextFeatures",
    "extract_features",
    "ScoreAccumulator",
    "score_text",
    "Breakdown",
    "FactCheck",
    "NewsVerdict",
    "Verdict",
    "HeuristicEngine",
    "heuristic_engine",
    "HeuristicVerdictProvider",
    "ModelVerdictProvider",
    "VerdictProvider",
    "analyze_content",
    "detect_authorship",
    "detect_manipulation",
    "is_news_content",
    "verify_news",
    "LLMProvider",
    "get_provider",
]
