"""Helpers for the website-audit payload.

The audit service is opaque apart from its top-level numeric score. It
answers either with an object carrying ``score`` or with a list whose
first scored item carries ``overall_score``.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from app.scoring.utils import parse_score, to_decimal

SCORE_KEYS = ("score", "overall_score")


def _score_of(item: Any) -> Optional[int]:
    if not isinstance(item, dict):
        return None
    for key in SCORE_KEYS:
        if key in item:
            parsed = parse_score(item[key])
            if parsed is None:
                return None
            return int(parsed.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    return None


def extract_score_from_response(payload: Any) -> Optional[int]:
    """Top-level audit score rounded to an int, or None if missing/non-numeric.

    The range is left unchecked so the blender can reject out-of-range scores.
    """
    if isinstance(payload, dict):
        return _score_of(payload)
    if isinstance(payload, list):
        for item in payload:
            if isinstance(item, dict) and any(k in item for k in SCORE_KEYS):
                return _score_of(item)
    return None


def _band(score: int, high: float, mid: float, low: float) -> float:
    if score >= 70:
        return high
    if score >= 50:
        return mid
    return low


def _security_grade(score: int) -> str:
    if score >= 80:
        return "A"
    if score >= 60:
        return "B"
    if score >= 40:
        return "C"
    return "D"


def fallback_audit_data(score: int, url: str = "example.com") -> dict[str, Any]:
    """Synthetic audit payload for display when the real audit is unavailable.

    Sub-scores are derived from the overall score only; nothing here feeds
    back into scoring.
    """
    performance = min(0.9, max(0.4, float(to_decimal(score / 100, 2))))
    return {
        "url": url,
        "score": score,
        "is_fallback": True,
        "lighthouse_report": {
            "categories": {
                "performance": {"score": performance},
                "seo": {"score": _band(score, 0.85, 0.65, 0.45)},
                "accessibility": {"score": _band(score, 0.75, 0.55, 0.35)},
                "best-practices": {"score": _band(score, 0.8, 0.6, 0.4)},
            }
        },
        "security_headers": {"grade": _security_grade(score)},
    }
