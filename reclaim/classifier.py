"""
Classifier - Decision Layer

Turns raw scores into labeled verdicts. Three decision procedures share
the normalization primitives defined at the top of this module:

  - decide_authorship:    AI vs human, with confidence and breakdown
  - decide_manipulation:  hyperreal / manipulated, else authorship
  - decide_news:          credibility score and news authenticity

The primitives are also used by the model path (providers.py) so both
paths clamp, normalize and label identically.

Threshold table:
  AI decision threshold        55 (strict >, biased toward "human")
  Authorship confidence        [65, 90] heuristic, [65, 95] model
  News confidence              [70, 85] heuristic, [70, 95] model
  News credibility prior       70
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional

from reclaim.patterns import Category
from reclaim.scoring import ScoreAccumulator

AI_THRESHOLD = 55.0
CONFIDENCE_FLOOR = 65.0
HEURISTIC_CONFIDENCE_CAP = 90.0
MODEL_CONFIDENCE_CAP = 95.0
CONFIDENCE_SLOPE = 1.5
STRONG_CONFIDENCE = 85.0
MODERATE_CONFIDENCE = 75.0

NEWS_PRIOR = 70
NEWS_REAL_THRESHOLD = 60
NEWS_CONFIDENCE_FLOOR = 70.0
NEWS_HEURISTIC_CONFIDENCE_CAP = 85.0
NEWS_MODEL_CONFIDENCE_CAP = 95.0

HYPERREAL_THRESHOLD = 40.0
MANIPULATION_THRESHOLD = 36.0

BREAKDOWN_FIELDS = ("ai_generated", "ai_refined", "human_refined", "human_written")
BREAKDOWN_TOLERANCE = 2

AUTHORSHIP_STATUSES = ("authentic", "ai_generated", "manipulated", "hyperreal", "uncertain")
NEWS_AUTHENTICITIES = ("real", "fake", "misleading", "satire", "uncertain")


# ============================================================
# RESULT TYPES
# ============================================================

@dataclass(frozen=True)
class Breakdown:
    """Four-way provenance split. Always sums to exactly 100."""
    ai_generated: int
    ai_refined: int
    human_refined: int
    human_written: int

    def total(self) -> int:
        return self.ai_generated + self.ai_refined + self.human_refined + self.human_written

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in BREAKDOWN_FIELDS}


@dataclass(frozen=True)
class Verdict:
    """Authorship verdict. Same shape on the heuristic and model paths."""
    status: str
    confidence: float
    ai_probability: float
    human_probability: float
    reasoning: str
    breakdown: Breakdown
    is_ai: bool = False
    indicators: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "authenticity_status": self.status,
            "confidence": self.confidence,
            "ai_probability": self.ai_probability,
            "human_probability": self.human_probability,
            "is_ai": self.is_ai,
            "reasoning": self.reasoning,
            "breakdown": self.breakdown.to_dict(),
            "indicators": list(self.indicators),
        }


@dataclass(frozen=True)
class FactCheck:
    claims_verified: tuple[str, ...] = ()
    claims_disputed: tuple[str, ...] = ()
    sources_found: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "claims_verified": list(self.claims_verified),
            "claims_disputed": list(self.claims_disputed),
            "sources_found": list(self.sources_found),
            "red_flags": list(self.red_flags),
        }


@dataclass(frozen=True)
class NewsVerdict:
    """News credibility verdict."""
    authenticity: str
    credibility_score: int
    confidence: float
    is_real: bool
    reasoning: str
    fact_check: FactCheck = field(default_factory=FactCheck)
    research_summary: str = ""

    def to_dict(self) -> dict:
        return {
            "news_authenticity": self.authenticity,
            "credibility_score": self.credibility_score,
            "confidence": self.confidence,
            "is_real": self.is_real,
            "reasoning": self.reasoning,
            "fact_check_results": self.fact_check.to_dict(),
            "research_summary": self.research_summary,
        }


# ============================================================
# SHARED PRIMITIVES
# ============================================================

def clamp(lo: float, hi: float, value: float) -> float:
    return max(lo, min(hi, value))


def authorship_confidence(ai_probability: float, cap: float = HEURISTIC_CONFIDENCE_CAP) -> float:
    """Grows with distance from 50, floored at 65."""
    return clamp(
        CONFIDENCE_FLOOR, cap,
        abs(ai_probability - 50) * CONFIDENCE_SLOPE + CONFIDENCE_FLOOR,
    )


def authorship_status(confidence: float, is_ai: bool) -> str:
    # The two upper bands map identically; only the lowest diverges.
    if confidence > STRONG_CONFIDENCE:
        return "ai_generated" if is_ai else "authentic"
    elif confidence > MODERATE_CONFIDENCE:
        return "ai_generated" if is_ai else "authentic"
    return "uncertain"


def news_authenticity(confidence: float, credibility_score: float) -> str:
    if confidence > STRONG_CONFIDENCE:
        if credibility_score > 80:
            return "real"
        if credibility_score < 30:
            return "fake"
        return "misleading"
    return "uncertain"


def _round_half_up(value: float) -> int:
    # Non-negative inputs only; round() would send .5 to the even neighbor.
    return int(value + 0.5)


def normalize_breakdown(values: Mapping[str, float]) -> Breakdown:
    """
    Coerce four provenance values into a Breakdown summing to 100.

    Negative or missing values count as 0. When the sum is off by more
    than BREAKDOWN_TOLERANCE every field is rescaled by 100/sum. Any
    rounding residual left after that goes to the largest field.
    """
    vals = {name: max(0.0, float(values.get(name) or 0)) for name in BREAKDOWN_FIELDS}
    total = sum(vals.values())
    if total <= 0:
        return derive_breakdown(50.0)

    if abs(total - 100) > BREAKDOWN_TOLERANCE:
        factor = 100 / total
        vals = {name: v * factor for name, v in vals.items()}

    rounded = {name: _round_half_up(v) for name, v in vals.items()}
    residual = 100 - sum(rounded.values())
    if residual:
        largest = max(BREAKDOWN_FIELDS, key=lambda name: rounded[name])
        rounded[largest] = max(0, rounded[largest] + residual)
    return Breakdown(**rounded)


def derive_breakdown(ai_probability: float) -> Breakdown:
    human = 100 - ai_probability
    return normalize_breakdown({
        "ai_generated": _round_half_up(ai_probability * 0.8),
        "ai_refined": _round_half_up(ai_probability * 0.2),
        "human_refined": _round_half_up(human * 0.3),
        "human_written": _round_half_up(human * 0.7),
    })


def uncertain_verdict(reason: str) -> Verdict:
    """Lowest-confidence verdict for input with no usable signal."""
    return Verdict(
        status="uncertain",
        confidence=CONFIDENCE_FLOOR,
        ai_probability=50.0,
        human_probability=50.0,
        reasoning=reason,
        breakdown=derive_breakdown(50.0),
        is_ai=False,
    )


def uncertain_news_verdict(reason: str) -> NewsVerdict:
    """Neutral-credibility verdict at the floor confidence."""
    return NewsVerdict(
        authenticity="uncertain",
        credibility_score=50,
        confidence=NEWS_CONFIDENCE_FLOOR,
        is_real=False,
        reasoning=reason,
        research_summary="No content was available to analyze.",
    )


# ============================================================
# DECISIONS
# ============================================================

def decide_authorship(acc: ScoreAccumulator) -> Verdict:
    if not acc.has_authorship_signal():
        return uncertain_verdict(
            "Heuristic analysis found no authorship signals. "
            "Text is too short or too neutral to classify."
        )

    total = max(acc.ai_score + acc.human_score, 1)
    ai_probability = 100 * acc.ai_score / total
    is_ai = ai_probability > AI_THRESHOLD
    confidence = authorship_confidence(ai_probability)

    if is_ai:
        tail = f"AI probability: {round(ai_probability)}%"
    else:
        tail = f"Human probability: {round(100 - ai_probability)}%"

    return Verdict(
        status=authorship_status(confidence, is_ai),
        confidence=round(confidence, 1),
        ai_probability=round(ai_probability, 1),
        human_probability=round(100 - ai_probability, 1),
        reasoning=f"Heuristic analysis based on: {', '.join(acc.indicators)}. {tail}",
        breakdown=derive_breakdown(ai_probability),
        is_ai=is_ai,
        indicators=tuple(acc.indicators),
    )


def decide_manipulation(acc: ScoreAccumulator) -> Verdict:
    """
    Hyperreal framing wins over manipulation when both fire and it is
    at least as strong. Below both thresholds the authorship decision
    stands.
    """
    base = decide_authorship(acc)
    hyperreal = acc.hyperreal_score
    manipulation = acc.manipulation_score

    if hyperreal >= HYPERREAL_THRESHOLD and hyperreal >= manipulation:
        status, signal, label = "hyperreal", hyperreal, "sensationalized framing"
    elif manipulation >= MANIPULATION_THRESHOLD:
        status, signal, label = "manipulated", manipulation, "anonymous or leaked sourcing"
    else:
        return base

    confidence = clamp(CONFIDENCE_FLOOR, HEURISTIC_CONFIDENCE_CAP, CONFIDENCE_FLOOR + signal * 0.5)
    return replace(
        base,
        status=status,
        confidence=round(confidence, 1),
        reasoning=(
            f"Heuristic analysis based on: {', '.join(acc.indicators)}. "
            f"Dominant signal: {label} (score {round(signal)})"
        ),
        indicators=tuple(acc.indicators),
    )


def decide_news(acc: ScoreAccumulator, source_url: Optional[str] = None) -> NewsVerdict:
    score = NEWS_PRIOR
    verified: list[str] = []
    red_flags: list[str] = []

    sensational = acc.count(Category.SENSATIONAL)
    if sensational > 2:
        score -= 20
        red_flags.append(f"Excessive sensationalized language ({sensational} terms)")
    elif sensational == 0:
        score += 10
        verified.append("Professional tone")

    if acc.count(Category.ATTRIBUTION) > 0:
        score += 15
        verified.append("Proper source attribution")
    else:
        score -= 15
        red_flags.append("Lack of source attribution")

    if acc.count(Category.SPECIFICITY) > 0:
        score += 10
        verified.append("Specific facts and figures")

    if acc.count(Category.CONSPIRACY) > 0:
        score -= 30
        red_flags.append("Conspiracy theory language")

    if acc.count(Category.EMOTIONAL) > 2:
        score -= 15
        red_flags.append("Emotional manipulation tactics")

    score = int(clamp(0, 100, score))
    is_real = score > NEWS_REAL_THRESHOLD
    confidence = clamp(
        NEWS_CONFIDENCE_FLOOR, NEWS_HEURISTIC_CONFIDENCE_CAP, abs(score - 50) + NEWS_CONFIDENCE_FLOOR,
    )

    sources: list[str] = []
    for sample in acc.samples.get(Category.ATTRIBUTION, []):
        if sample not in sources:
            sources.append(sample)
    if source_url:
        sources.append(source_url)

    summary = (
        f"Pattern-based analysis found {len(red_flags)} red flags "
        f"and {len(verified)} positive indicators."
    )
    if acc.indicators:
        summary += f" Signals: {'; '.join(acc.indicators)}."

    return NewsVerdict(
        authenticity=news_authenticity(confidence, score),
        credibility_score=score,
        confidence=round(confidence, 1),
        is_real=is_real,
        reasoning=f"Heuristic analysis based on: {', '.join(verified + red_flags)}",
        fact_check=FactCheck(
            claims_verified=tuple(verified),
            claims_disputed=(),
            sources_found=tuple(sources),
            red_flags=tuple(red_flags),
        ),
        research_summary=summary,
    )
