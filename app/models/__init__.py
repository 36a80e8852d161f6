"""Pydantic models for the visibility assessment service."""

# Common Models
from app.models.common import (
    HealthResponse,
    ErrorResponse,
    MessageResponse,
)

# Enums
from app.models.enums import (
    Category,
    Tier,
    TIER_THRESHOLDS,
)

# Answers
from app.models.answers import (
    SingleAnswer,
    MultipleAnswer,
    Answer,
    FormAnswers,
)

# Scores
from app.models.score import (
    ScoreState,
    FinalScoreRequest,
    FormScoreResponse,
    ScoreBreakdownResponse,
    TierResponse,
    RecommendationsResponse,
    OptionResponse,
    AuditRequest,
    SessionResponse,
)

# Reports
from app.models.report import (
    ContactInfo,
    ReportRequest,
    WebhookResponse,
    is_valid_email,
)

__all__ = [
    # Common
    "HealthResponse",
    "ErrorResponse",
    "MessageResponse",
    # Enums
    "Category",
    "Tier",
    "TIER_THRESHOLDS",
    # Answers
    "SingleAnswer",
    "MultipleAnswer",
    "Answer",
    "FormAnswers",
    # Scores
    "ScoreState",
    "FinalScoreRequest",
    "FormScoreResponse",
    "ScoreBreakdownResponse",
    "TierResponse",
    "RecommendationsResponse",
    "OptionResponse",
    "AuditRequest",
    "SessionResponse",
    # Reports
    "ContactInfo",
    "ReportRequest",
    "WebhookResponse",
    "is_valid_email",
]
