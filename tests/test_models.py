"""Tests for Pydantic models."""
import pytest
from pydantic import ValidationError
from app.models import (
    Category, ContactInfo, FormAnswers, MultipleAnswer, ReportRequest,
    ScoreState, SingleAnswer, Tier, TIER_THRESHOLDS, is_valid_email,
)


class TestFormAnswers:
    """Tests for the answer tagged variant."""

    def test_string_becomes_single(self):
        answers = FormAnswers.from_raw({"visibility": "print"})
        assert isinstance(answers.get(Category.VISIBILITY), SingleAnswer)
        assert answers.selected("visibility") == ["print"]

    def test_list_becomes_multiple(self):
        answers = FormAnswers.from_raw({"goals": ["all", "new_clients", "all"]})
        answer = answers.get("goals")
        assert isinstance(answer, MultipleAnswer)
        assert answer.values == frozenset({"all", "new_clients"})
        assert answers.selected(Category.GOALS) == ["all", "new_clients"]

    def test_tagged_input_accepted(self):
        answers = FormAnswers(answers={"goals": {"kind": "single", "value": "all"}})
        assert answers.selected("goals") == ["all"]

    def test_flat_and_wrapped_forms_equal(self):
        flat = FormAnswers.model_validate({"goals": "all"})
        wrapped = FormAnswers.model_validate({"answers": {"goals": "all"}})
        assert flat == wrapped

    def test_enum_keys(self):
        answers = FormAnswers.from_raw({Category.ONLINE_REVIEWS: "positive"})
        assert answers.is_answered("online_reviews")

    def test_none_values_dropped(self):
        answers = FormAnswers.from_raw({"goals": None})
        assert answers.answers == {}

    def test_blank_not_answered(self):
        answers = FormAnswers.from_raw({"goals": "  ", "visibility": ["", " "]})
        assert answers.answered_categories() == []

    def test_invalid_value_type(self):
        with pytest.raises(ValidationError):
            FormAnswers.from_raw({"goals": 3})

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            FormAnswers(answers={"goals": {"kind": "ranked", "value": "all"}})

    def test_to_raw(self):
        answers = FormAnswers.from_raw({"goals": "all", "visibility": ["store", "print"]})
        assert answers.to_raw() == {"goals": "all", "visibility": ["print", "store"]}

    def test_json_round_trip(self):
        answers = FormAnswers.from_raw({"goals": "all", "visibility": ["store", "print"]})
        assert FormAnswers.model_validate_json(answers.model_dump_json()) == answers


class TestScoreState:
    """Tests for ScoreState bounds."""

    def test_defaults(self):
        state = ScoreState()
        assert state.final_score == 0
        assert state.tier == Tier.CRITICAL
        assert state.error is None

    def test_score_out_of_range(self):
        with pytest.raises(ValidationError):
            ScoreState(final_score=101)
        with pytest.raises(ValidationError):
            ScoreState(form_score=-1)


class TestTierThresholds:
    """Tests for the tier threshold table."""

    def test_thresholds_descending(self):
        bounds = [t for t, _ in TIER_THRESHOLDS]
        assert bounds == sorted(bounds, reverse=True)
        assert bounds[-1] == 0

    def test_every_tier_has_threshold(self):
        assert {tier for _, tier in TIER_THRESHOLDS} == set(Tier)


class TestReportModels:
    """Tests for report request models."""

    @pytest.mark.parametrize("email,valid", [
        ("erika@example.com", True),
        ("a@b.co", True),
        ("no-at-sign.com", False),
        ("two@@example.com", False),
        ("spaces in@example.com", False),
        ("", False),
        (None, False),
    ])
    def test_email_validation(self, email, valid):
        assert is_valid_email(email) is valid

    def test_phone_accepted(self):
        assert ContactInfo(phone="+49 (30) 123-4567").phone == "+49 (30) 123-4567"

    def test_empty_phone_normalized(self):
        assert ContactInfo(phone="").phone is None

    def test_phone_rejected(self):
        with pytest.raises(ValidationError):
            ContactInfo(phone="12")

    def test_report_request_flat_answers(self):
        request = ReportRequest.model_validate({
            "contact": {"email": "a@b.co"},
            "answers": {"goals": "all"},
        })
        assert request.answers.selected("goals") == ["all"]
        assert request.website_score is None
