"""Form score calculator.

Formula
-------
  form_score = round_half_up( mean(w_c for c in answered) × 10 )

Where:
  answered  = scoreable categories holding at least one non-blank value
  w_c       = option weight (0–10); a multi-select answer contributes the
              highest weight among its selected values
  mean      = divided by the number of *answered* categories, not by the
              total number of categories

No answered categories → 0. An unknown option value still counts as
answered and contributes weight 0.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union

import structlog

from app.models.answers import FormAnswers
from app.models.enums import Category
from app.scoring.utils import round_score
from app.scoring.weights import get_weight

logger = structlog.get_logger(__name__)

SCALE: Decimal = Decimal(10)


@dataclass
class FormScoreResult:
    """Form score with the per-category weights that produced it."""

    form_score: int
    average_weight: Decimal
    category_weights: Dict[str, int] = field(default_factory=dict)

    @property
    def answered_count(self) -> int:
        return len(self.category_weights)

    def to_dict(self) -> dict:
        return {
            "form_score": self.form_score,
            "average_weight": float(self.average_weight),
            "answered_count": self.answered_count,
            "category_weights": dict(self.category_weights),
        }


def category_weight(category: Category, values: list[str]) -> int:
    """Weight of one answered category (max over multi-select values)."""
    return max(get_weight(category, v) for v in values)


class FormScoreCalculator:
    """Compute the 0–100 form score from self-reported answers."""

    def calculate(self, answers: Optional[FormAnswers]) -> FormScoreResult:
        weights: Dict[str, int] = {}
        if answers is not None:
            for category in Category:
                values = answers.selected(category)
                if values:
                    weights[category.value] = category_weight(category, values)

        if not weights:
            result = FormScoreResult(form_score=0, average_weight=Decimal(0))
        else:
            average = Decimal(sum(weights.values())) / Decimal(len(weights))
            result = FormScoreResult(
                form_score=round_score(average * SCALE),
                average_weight=average,
                category_weights=weights,
            )

        logger.info("form_score_calculated", **result.to_dict())
        return result


_calculator = FormScoreCalculator()


def compute_form_score(answers: Union[FormAnswers, Mapping[str, Any], None]) -> int:
    """Form score for ``answers`` (a ``FormAnswers`` or a raw ``{category: value}`` dict)."""
    if answers is not None and not isinstance(answers, FormAnswers):
        answers = FormAnswers.from_raw(dict(answers))
    return _calculator.calculate(answers).form_score
