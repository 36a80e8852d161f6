"""Scoring endpoints: form score, blended final score, tiers and recommendations."""
from typing import Optional

from fastapi import APIRouter, Query

from app.models import (
    FinalScoreRequest,
    FormAnswers,
    FormScoreResponse,
    OptionResponse,
    RecommendationsResponse,
    ScoreBreakdownResponse,
    TierResponse,
)
from app.models.enums import Category
from app.scoring.blender import blend_scores
from app.scoring.form_score import compute_form_score
from app.scoring.tiers import classify, select_recommendations, tier_message
from app.scoring.weights import list_options

router = APIRouter(prefix="/api/v1", tags=["Scores"])


def build_breakdown(answers: FormAnswers, website_score) -> ScoreBreakdownResponse:
    """Run the full pipeline for one set of inputs."""
    blend = blend_scores(website_score, compute_form_score(answers))
    tier = classify(blend.final_score)
    return ScoreBreakdownResponse(
        form_score=blend.form_score,
        website_score=blend.website_score,
        website_score_valid=blend.website_score_valid,
        final_score=blend.final_score,
        website_weight=float(blend.website_weight),
        form_weight=float(blend.form_weight),
        tier=tier,
        tier_message=tier_message(tier),
        recommendations=select_recommendations(
            answers.selected(Category.VISIBILITY),
            answers.selected(Category.GOALS),
        ),
    )


@router.get(
    "/options",
    response_model=dict[str, list[OptionResponse]],
    summary="Answer Options",
)
async def get_options():
    """Every scoreable category with its options and weights."""
    return {
        category: [OptionResponse(value=o.value, label=o.label, weight=o.weight) for o in options]
        for category, options in list_options().items()
    }


@router.post(
    "/scores/form",
    response_model=FormScoreResponse,
    summary="Form Score",
)
async def form_score(answers: FormAnswers):
    """Score the submitted answers alone (0–100)."""
    return FormScoreResponse(
        form_score=compute_form_score(answers),
        answered_categories=[c.value for c in answers.answered_categories()],
    )


@router.post(
    "/scores/final",
    response_model=ScoreBreakdownResponse,
    summary="Final Score",
)
async def final_score(request: FinalScoreRequest):
    """Blend the audit score with the form score and classify the result."""
    return build_breakdown(request.answers, request.website_score)


@router.get(
    "/scores/tier/{score}",
    response_model=TierResponse,
    summary="Classify Score",
)
async def score_tier(score: int):
    tier = classify(score)
    return TierResponse(score=score, tier=tier, message=tier_message(tier))


@router.get(
    "/recommendations",
    response_model=RecommendationsResponse,
    summary="Recommendations",
)
async def recommendations(
    channel: Optional[list[str]] = Query(default=None, description="Selected visibility channel(s)"),
    goals: Optional[list[str]] = Query(default=None, description="Selected goal(s)"),
):
    """Recommendations for the chosen visibility channel; generic set when unknown."""
    return RecommendationsResponse(
        channel=channel[0] if channel else None,
        recommendations=select_recommendations(channel, goals),
    )
