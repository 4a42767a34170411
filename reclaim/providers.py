"""
Verdict Providers

Two interchangeable strategies answer the same questions:

  - HeuristicVerdictProvider:  the deterministic engine (fallback path)
  - ModelVerdictProvider:      an LLM asked for a structured verdict

Both return Verdict / NewsVerdict, built with the same classifier
primitives, so callers never need to know which one ran.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from reclaim.classifier import (
    CONFIDENCE_FLOOR,
    MODEL_CONFIDENCE_CAP,
    NEWS_CONFIDENCE_FLOOR,
    NEWS_MODEL_CONFIDENCE_CAP,
    FactCheck,
    NewsVerdict,
    Verdict,
    authorship_status,
    clamp,
    news_authenticity,
    normalize_breakdown,
)
from reclaim.config import settings
from reclaim.engine import HeuristicEngine, heuristic_engine
from reclaim.llm import LLMProvider
from reclaim.schemas.model import (
    ModelAuthorshipReply,
    ModelNewsReply,
    parse_authorship_reply,
    parse_news_reply,
)

FALLBACK_NAME = "fallback-analysis"

# Used when the model omits its breakdown
_DEFAULT_AI_BREAKDOWN = {"ai_generated": 70, "ai_refined": 20, "human_refined": 10, "human_written": 0}
_DEFAULT_HUMAN_BREAKDOWN = {"ai_generated": 20, "ai_refined": 25, "human_refined": 25, "human_written": 30}


class VerdictProvider(ABC):
    """Anything that can classify authorship and news credibility."""

    name: str = "provider"

    @abstractmethod
    async def authorship(self, text: str) -> Verdict:
        ...

    @abstractmethod
    async def news(self, text: str, source_url: Optional[str] = None) -> NewsVerdict:
        ...


class HeuristicVerdictProvider(VerdictProvider):
    """The rule-based engine behind the provider interface."""

    name = FALLBACK_NAME

    def __init__(self, engine: HeuristicEngine = heuristic_engine):
        self._engine = engine

    async def authorship(self, text: str) -> Verdict:
        return self._engine.classify_authorship(text)

    async def news(self, text: str, source_url: Optional[str] = None) -> NewsVerdict:
        return self._engine.classify_news_credibility(text, source_url=source_url)


# ============================================================
# MODEL PATH
# ============================================================

AUTHORSHIP_SYSTEM = """You are an AI content detection specialist. Decide whether text was written by a language model or a human.

AI indicators: repetitive sentence structures; heavy use of transitions (furthermore, moreover); hedging ("it's worth noting", "it's important to consider"); balanced, overly diplomatic tone; templated, list-like organization; flawless grammar.

Human indicators: personal anecdotes; typos and informal language; strong opinions and emotion; slang and abbreviations (lol, tbh); inconsistent style.

Respond with ONLY this JSON:
{
  "isAI": boolean,
  "confidence": number (65-95),
  "reasoning": "explanation citing specific examples from the text",
  "ai_indicators": ["patterns found"],
  "human_indicators": ["patterns found"],
  "breakdown": {
    "ai_generated": number,
    "ai_refined": number,
    "human_refined": number,
    "human_written": number
  }
}"""

AUTHORSHIP_PROMPT = """Analyze this text for AI vs human authorship.

TEXT TO ANALYZE:
"{text}"
"""

NEWS_SYSTEM = """You are a fact-checking journalist. Judge whether news content is authentic.

Check: factual accuracy of specific claims, dates and figures; source credibility and attribution; sensationalized or emotionally manipulative language; conspiracy narratives; unverified claims presented as fact.

Respond with ONLY this JSON:
{
  "isReal": boolean,
  "credibilityScore": number (0-100),
  "confidence": number (70-95),
  "reasoning": "explanation of the fact-check",
  "factCheckResults": {
    "claimsVerified": ["verified claims"],
    "claimsDisputed": ["disputed or false claims"],
    "sourcesFound": ["credible sources mentioned"],
    "redFlags": ["misinformation indicators"]
  },
  "researchSummary": "summary of findings",
  "newsCategory": "breaking|political|health|science|entertainment|sports|other"
}"""

NEWS_PROMPT = """Fact-check this news content.

{source}NEWS CONTENT TO VERIFY:
"{text}"
"""


def model_verdict(reply: ModelAuthorshipReply) -> Verdict:
    """Map a validated model reply onto the shared Verdict contract."""
    confidence = clamp(CONFIDENCE_FLOOR, MODEL_CONFIDENCE_CAP, reply.confidence)

    if reply.breakdown is not None:
        raw_breakdown = reply.breakdown.model_dump()
    elif reply.is_ai:
        raw_breakdown = _DEFAULT_AI_BREAKDOWN
    else:
        raw_breakdown = _DEFAULT_HUMAN_BREAKDOWN

    reasoning = reply.reasoning
    if reply.ai_indicators:
        reasoning += f" AI patterns detected: {', '.join(reply.ai_indicators)}."
    if reply.human_indicators:
        reasoning += f" Human patterns detected: {', '.join(reply.human_indicators)}."

    ai_probability = confidence if reply.is_ai else 100 - confidence
    return Verdict(
        status=authorship_status(confidence, reply.is_ai),
        confidence=round(confidence, 1),
        ai_probability=round(ai_probability, 1),
        human_probability=round(100 - ai_probability, 1),
        reasoning=reasoning,
        breakdown=normalize_breakdown(raw_breakdown),
        is_ai=reply.is_ai,
        indicators=tuple(reply.ai_indicators + reply.human_indicators),
    )


def model_news_verdict(reply: ModelNewsReply, source_url: Optional[str] = None) -> NewsVerdict:
    credibility = int(round(clamp(0, 100, reply.credibility_score)))
    confidence = clamp(NEWS_CONFIDENCE_FLOOR, NEWS_MODEL_CONFIDENCE_CAP, reply.confidence)
    sources = list(reply.fact_check.sources_found)
    if source_url and source_url not in sources:
        sources.append(source_url)

    return NewsVerdict(
        authenticity=news_authenticity(confidence, credibility),
        credibility_score=credibility,
        confidence=round(confidence, 1),
        is_real=reply.is_real,
        reasoning=reply.reasoning,
        fact_check=FactCheck(
            claims_verified=tuple(reply.fact_check.claims_verified),
            claims_disputed=tuple(reply.fact_check.claims_disputed),
            sources_found=tuple(sources),
            red_flags=tuple(reply.fact_check.red_flags),
        ),
        research_summary=reply.research_summary,
    )


class ModelVerdictProvider(VerdictProvider):
    """
    Primary path. Any failure (transport, timeout, invalid JSON, schema
    mismatch) propagates to the caller, which decides on fallback.
    """

    def __init__(self, llm: LLMProvider, timeout: float = settings.LLM_TIMEOUT_SECONDS):
        self._llm = llm
        self._timeout = timeout
        model = getattr(llm, "model", None)
        self.name = f"{llm.name}-{model}" if model else llm.name

    async def _ask(self, system: str, prompt: str, temperature: float) -> dict:
        return await asyncio.wait_for(
            self._llm.generate_json(
                prompt, system_instruction=system, temperature=temperature,
            ),
            timeout=self._timeout,
        )

    async def authorship(self, text: str) -> Verdict:
        raw = await self._ask(AUTHORSHIP_SYSTEM, AUTHORSHIP_PROMPT.format(text=text), 0.05)
        return model_verdict(parse_authorship_reply(raw))

    async def news(self, text: str, source_url: Optional[str] = None) -> NewsVerdict:
        source = f"SOURCE URL: {source_url}\n\n" if source_url else ""
        raw = await self._ask(NEWS_SYSTEM, NEWS_PROMPT.format(source=source, text=text), 0.1)
        return model_news_verdict(parse_news_reply(raw), source_url=source_url)
