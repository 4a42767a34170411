"""
API Schemas - Request and Response Models

Pydantic models for the Reclaim API.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


# ============================================================
# AI DETECTION
# ============================================================

class AIDetectRequest(BaseModel):
    """POST /ai-detect request body."""
    text: str = Field(..., max_length=50_000,
                      description="Text to classify (at least 20 non-blank characters).")
    real_time: bool = False

    model_config = {"json_schema_extra": {"examples": [
        {"text": "Furthermore, it's important to note that the results are robust across settings."},
    ]}}


class BreakdownResponse(BaseModel):
    ai_generated: int
    ai_refined: int
    human_refined: int
    human_written: int


class AIDetectResponse(BaseModel):
    """POST /ai-detect response body."""
    authenticity_status: str
    confidence: float
    ai_probability: float
    human_probability: float
    is_ai: bool
    reasoning: str
    breakdown: BreakdownResponse
    indicators: list[str] = []
    analysis_time: int
    model_used: str
    truncated: bool = False


# ============================================================
# NEWS VERIFICATION
# ============================================================

class NewsVerifyRequest(BaseModel):
    """POST /news-verify request body."""
    text: str = Field(..., max_length=50_000,
                      description="News content to verify (at least 50 non-blank characters).")
    url: Optional[str] = Field(None, max_length=2048)
    real_time: bool = False


class FactCheckResponse(BaseModel):
    claims_verified: list[str]
    claims_disputed: list[str]
    sources_found: list[str]
    red_flags: list[str]


class NewsVerifyResponse(BaseModel):
    """POST /news-verify response body."""
    news_authenticity: str
    credibility_score: int
    confidence: float
    is_real: bool
    reasoning: str
    fact_check_results: FactCheckResponse
    research_summary: str
    verification_time: int
    model_used: str
    truncated: bool = False


# ============================================================
# COMBINED ANALYSIS
# ============================================================

class AnalyzeRequest(BaseModel):
    """POST /analyze request body."""
    text: Optional[str] = Field(None, max_length=50_000)
    image_url: Optional[str] = Field(None, max_length=2048)
    video_url: Optional[str] = Field(None, max_length=2048)
    url: Optional[str] = Field(None, max_length=2048)
    content_type: str = Field("text", pattern="^(text|image|video)$")
    real_time: bool = False


class CredibilityFactors(BaseModel):
    ai_detection: float
    content_authenticity: float
    fact_check_status: float
    source_reliability: float


class CredibilityScore(BaseModel):
    overall: int
    factors: CredibilityFactors


class RealTimeFlags(BaseModel):
    ai_generated: bool
    fake_news: bool
    misleading_content: bool
    unverified_claims: bool
    low_credibility: bool


class AnalyzeResponse(BaseModel):
    """POST /analyze response body. News fields are present only for news text."""
    content_type: str
    authenticity_status: str
    confidence: float
    analysis_time: int
    suggested_action: str
    is_news_content: Optional[bool] = None
    ai_probability: Optional[float] = None
    human_probability: Optional[float] = None
    ai_reasoning: Optional[str] = None
    reasoning: Optional[str] = None
    breakdown: Optional[BreakdownResponse] = None
    model_used: Optional[str] = None
    news_authenticity: Optional[str] = None
    news_credibility_score: Optional[int] = None
    news_confidence: Optional[float] = None
    news_reasoning: Optional[str] = None
    fact_check_results: Optional[FactCheckResponse] = None
    research_summary: Optional[str] = None
    credibility_score: Optional[CredibilityScore] = None
    real_time_flags: Optional[RealTimeFlags] = None


# ============================================================
# META
# ============================================================

class PatternEntry(BaseModel):
    id: str
    category: str
    target: str
    label: str
    weight: float


class PatternsResponse(BaseModel):
    rulebook_version: str
    total_patterns: int
    patterns: list[PatternEntry]


class HealthResponse(BaseModel):
    status: str
    version: str
    rulebook_version: str
    llm_provider: str
    model_path_enabled: bool
