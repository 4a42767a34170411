"""
Model Reply Schemas

Fixed-shape records for the JSON the model path returns. Replies are
validated here, at the boundary, so nothing loosely-typed reaches the
classifier. Field aliases match the camelCase keys the prompts ask for.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError


class _Reply(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ModelBreakdown(_Reply):
    ai_generated: float = 0
    ai_refined: float = 0
    human_refined: float = 0
    human_written: float = 0


class ModelAuthorshipReply(_Reply):
    is_ai: StrictBool = Field(..., alias="isAI")
    confidence: float
    reasoning: str
    ai_indicators: list[str] = Field(default_factory=list)
    human_indicators: list[str] = Field(default_factory=list)
    breakdown: Optional[ModelBreakdown] = None


class ModelFactCheck(_Reply):
    claims_verified: list[str] = Field(default_factory=list, alias="claimsVerified")
    claims_disputed: list[str] = Field(default_factory=list, alias="claimsDisputed")
    sources_found: list[str] = Field(default_factory=list, alias="sourcesFound")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")


class ModelNewsReply(_Reply):
    is_real: StrictBool = Field(..., alias="isReal")
    credibility_score: float = Field(..., alias="credibilityScore")
    confidence: float
    reasoning: str = "Analysis completed"
    fact_check: ModelFactCheck = Field(default_factory=ModelFactCheck, alias="factCheckResults")
    research_summary: str = Field("Research summary not available", alias="researchSummary")
    news_category: Optional[str] = Field(None, alias="newsCategory")


def parse_authorship_reply(raw: dict) -> ModelAuthorshipReply:
    try:
        return ModelAuthorshipReply.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid authorship reply from model: {e}") from e


def parse_news_reply(raw: dict) -> ModelNewsReply:
    try:
        return ModelNewsReply.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid news reply from model: {e}") from e
