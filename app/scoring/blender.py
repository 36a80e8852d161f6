"""Final score blender.

Formula
-------
  final = round_half_up( website × w_web + form × w_form )

Weights (w_web / w_form)
------------------------
  audit valid, form answered        0.7 / 0.3   default
  audit invalid or absent, form > 0 0.2 / 0.8   trust the form
  audit valid, form == 0            0.8 / 0.2   trust the audit

An audit score is valid when it is a finite number with 0 < score ≤ 100.
Invalid audit scores enter the blend as 0. These weights are policy, not
a fitted model.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

import structlog

from app.models.answers import FormAnswers
from app.scoring.form_score import compute_form_score
from app.scoring.utils import SCORE_MAX, parse_score, round_score

logger = structlog.get_logger(__name__)

# ── Blend weights (website, form) ─────────────────────────────────────────────
DEFAULT_WEIGHTS: tuple[Decimal, Decimal] = (Decimal("0.7"), Decimal("0.3"))
FORM_TRUSTED_WEIGHTS: tuple[Decimal, Decimal] = (Decimal("0.2"), Decimal("0.8"))
AUDIT_TRUSTED_WEIGHTS: tuple[Decimal, Decimal] = (Decimal("0.8"), Decimal("0.2"))


@dataclass
class BlendResult:
    """Final score with the inputs and weights used to reach it."""

    final_score: int
    website_score: int
    website_score_valid: bool
    form_score: int
    website_weight: Decimal
    form_weight: Decimal

    def to_dict(self) -> dict:
        return {
            "final_score": self.final_score,
            "website_score": self.website_score,
            "website_score_valid": self.website_score_valid,
            "form_score": self.form_score,
            "website_weight": float(self.website_weight),
            "form_weight": float(self.form_weight),
        }


def normalize_website_score(website_score: Any) -> Optional[Decimal]:
    """Return the audit score if usable, else None (absent or unreliable)."""
    parsed = parse_score(website_score)
    if parsed is None or parsed <= 0 or parsed > SCORE_MAX:
        return None
    return parsed


def select_weights(website_valid: bool, form_score: int) -> tuple[Decimal, Decimal]:
    """Pick (website_weight, form_weight) from data completeness."""
    if not website_valid and form_score > 0:
        return FORM_TRUSTED_WEIGHTS
    if website_valid and form_score == 0:
        return AUDIT_TRUSTED_WEIGHTS
    return DEFAULT_WEIGHTS


def blend_scores(website_score: Any, form_score: int) -> BlendResult:
    """Blend an (unvalidated) audit score with an already computed form score."""
    website = normalize_website_score(website_score)
    valid = website is not None
    w_web, w_form = select_weights(valid, form_score)
    web_value = website if valid else Decimal(0)

    final = round_score(web_value * w_web + Decimal(form_score) * w_form)
    result = BlendResult(
        final_score=final,
        website_score=round_score(web_value),
        website_score_valid=valid,
        form_score=form_score,
        website_weight=w_web,
        form_weight=w_form,
    )
    logger.info("final_score_blended", **result.to_dict())
    return result


def compute_final_score(website_score: Any, answers: Optional[FormAnswers]) -> int:
    """Final 0–100 visibility score from an optional audit score and the answers."""
    return blend_scores(website_score, compute_form_score(answers)).final_score
