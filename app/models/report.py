"""Email report Pydantic models."""
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .answers import FormAnswers

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{7,20}$")


def is_valid_email(email: Optional[str]) -> bool:
    """Basic ``local@domain.tld`` check."""
    return bool(email) and bool(EMAIL_PATTERN.match(email))


class ContactInfo(BaseModel):
    """Personal details collected on the last form step."""
    salutation: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    company_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    marketing_consent: bool = False

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not PHONE_PATTERN.match(v):
            raise ValueError("Invalid phone format")
        return v


class ReportRequest(BaseModel):
    """Request for an emailed visibility report."""
    contact: ContactInfo
    answers: FormAnswers = Field(default_factory=FormAnswers)
    session_id: Optional[str] = None
    # Used when no session is given; out-of-range values count as absent
    website_score: Optional[Any] = None
    locale: Optional[str] = None


class WebhookResponse(BaseModel):
    """Outcome of an email-report relay."""
    success: bool
    message: str
    data: Optional[Any] = None
