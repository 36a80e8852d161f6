"""Form answer Pydantic models.

A category's answer is either a single option value or, for multi-select
questions, a set of option values. Raw form payloads send a plain string or
a list of strings; both are coerced into the tagged variant on validation.
"""
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import Category


class SingleAnswer(BaseModel):
    """One selected option value."""
    kind: Literal["single"] = "single"
    value: str

    def selected(self) -> list[str]:
        value = self.value.strip()
        return [value] if value else []


class MultipleAnswer(BaseModel):
    """Several selected option values (multi-select question)."""
    kind: Literal["multiple"] = "multiple"
    values: frozenset[str] = Field(default_factory=frozenset)

    def selected(self) -> list[str]:
        return sorted({v.strip() for v in self.values if v and v.strip()})


Answer = Annotated[Union[SingleAnswer, MultipleAnswer], Field(discriminator="kind")]


def _coerce_answer(raw: Any) -> Any:
    if isinstance(raw, str):
        return {"kind": "single", "value": raw}
    if isinstance(raw, (list, tuple, set, frozenset)):
        return {"kind": "multiple", "values": [str(v) for v in raw]}
    return raw


class FormAnswers(BaseModel):
    """Answers submitted so far, keyed by category name.

    Partial by design: any category may be missing. Keys that are not a
    known ``Category`` are kept but ignored by scoring.
    """
    answers: dict[str, Answer] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def wrap_flat_mapping(cls, data: Any) -> Any:
        """Allow the flat ``{category: value}`` form in place of ``{"answers": {...}}``."""
        if isinstance(data, dict) and "answers" not in data:
            return {"answers": data}
        return data

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_raw_answers(cls, value: Any) -> Any:
        """Accept ``{"visibility": "print", "goals": ["all"]}`` style input."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        coerced = {}
        for key, raw in value.items():
            if raw is None:
                continue
            name = key.value if isinstance(key, Category) else str(key)
            coerced[name] = _coerce_answer(raw)
        return coerced

    @classmethod
    def from_raw(cls, raw: Optional[dict[str, Any]] = None) -> "FormAnswers":
        """Build from a flat ``{category: value}`` mapping."""
        return cls(answers=raw or {})

    def get(self, category: Union[Category, str]) -> Optional[Union[SingleAnswer, MultipleAnswer]]:
        key = category.value if isinstance(category, Category) else category
        return self.answers.get(key)

    def selected(self, category: Union[Category, str]) -> list[str]:
        """Non-blank values selected for ``category`` (empty if unanswered)."""
        answer = self.get(category)
        return answer.selected() if answer is not None else []

    def is_answered(self, category: Union[Category, str]) -> bool:
        return bool(self.selected(category))

    def answered_categories(self) -> list[Category]:
        return [c for c in Category if self.is_answered(c)]

    def to_raw(self) -> dict[str, Union[str, list[str]]]:
        """Flatten back to the form's ``{category: value}`` shape."""
        raw: dict[str, Union[str, list[str]]] = {}
        for key, answer in self.answers.items():
            if isinstance(answer, SingleAnswer):
                raw[key] = answer.value
            else:
                raw[key] = answer.selected()
        return raw
