"""Score state and scoring API models."""
from typing import Any, Optional

from pydantic import BaseModel, Field

from .answers import FormAnswers
from .enums import Tier


class ScoreState(BaseModel):
    """Derived score state for one session. Recomputed, never edited."""
    form_score: int = Field(default=0, ge=0, le=100)
    website_score: int = Field(default=0, ge=0, le=100)
    final_score: int = Field(default=0, ge=0, le=100)
    tier: Tier = Tier.CRITICAL
    raw_data: Optional[Any] = None
    audit_data: Optional[dict[str, Any]] = None
    is_complete: bool = False
    error: Optional[str] = None


class FinalScoreRequest(BaseModel):
    """Answers plus an optional audit score to blend with them."""
    answers: FormAnswers = Field(default_factory=FormAnswers)
    # Out-of-range or non-numeric values count as absent
    website_score: Optional[Any] = None


class FormScoreResponse(BaseModel):
    form_score: int = Field(..., ge=0, le=100)
    answered_categories: list[str]


class ScoreBreakdownResponse(BaseModel):
    """Form, audit and final score with the blend weights that produced it."""
    form_score: int = Field(..., ge=0, le=100)
    website_score: int = Field(..., ge=0, le=100)
    website_score_valid: bool
    final_score: int = Field(..., ge=0, le=100)
    website_weight: float
    form_weight: float
    tier: Tier
    tier_message: str
    recommendations: list[str]


class TierResponse(BaseModel):
    score: int
    tier: Tier
    message: str


class RecommendationsResponse(BaseModel):
    channel: Optional[str] = None
    recommendations: list[str]


class OptionResponse(BaseModel):
    value: str
    label: str
    weight: int = Field(..., ge=0, le=10)


class AuditRequest(BaseModel):
    """Website to run through the external audit service."""
    url: str = Field(..., min_length=3, description="Website URL, scheme optional")


class SessionResponse(BaseModel):
    """Score session as returned by the API."""
    id: str
    answers: dict[str, Any]
    state: ScoreState
    created_at: str
    updated_at: str
