"""Tier classification and recommendation selection."""
from typing import Iterable, Optional, Union

from app.models.enums import TIER_THRESHOLDS, Tier
from app.scoring.utils import parse_score, round_score

MAX_RECOMMENDATIONS = 4
MIN_SPECIFIC_RECOMMENDATIONS = 3

CHANNEL_RECOMMENDATIONS: dict[str, list[str]] = {
    "social_media": [
        "Optimise your social media strategy for maximum reach",
        "Build a content plan with viral potential for your target audience",
    ],
    "search_engines": [
        "SEO optimisation for top rankings on relevant keywords",
        "Technical website optimisation for better performance and higher conversion rates",
    ],
}

GOAL_RECOMMENDATIONS: dict[str, list[str]] = {
    "new_clients": [
        "Targeted client acquisition strategy with measurable results",
    ],
    "new_employees": [
        "Employer branding and recruiting optimisation for qualified applicants",
    ],
}

GENERIC_RECOMMENDATIONS: list[str] = [
    "Holistic digital strategy for sustainable online growth",
    "Performance-based campaign optimisation with continuous monitoring",
]

TIER_MESSAGES: dict[Tier, str] = {
    Tier.CRITICAL: (
        "Your digital visibility has significant room for improvement. "
        "Targeted measures can lift your online presence considerably."
    ),
    Tier.MEDIUM: (
        "Your digital visibility is on a good path. Focused measures will "
        "open up new customer groups."
    ),
    Tier.GOOD: (
        "Your digital visibility is already very good. A few strategic "
        "adjustments will strengthen your market position further."
    ),
    Tier.EXCELLENT: (
        "Your digital visibility is excellent. The next step is securing "
        "your lead over the long term."
    ),
}


def classify(score) -> Tier:
    """Map a 0–100 score to its tier. Out-of-range input is clamped first."""
    parsed = parse_score(score)
    value = round_score(parsed) if parsed is not None else 0
    for threshold, tier in TIER_THRESHOLDS:
        if value >= threshold:
            return tier
    return Tier.CRITICAL


def tier_message(tier: Tier) -> str:
    return TIER_MESSAGES[tier]


def _as_values(answer: Union[str, Iterable[str], None]) -> list[str]:
    if answer is None:
        return []
    if isinstance(answer, str):
        return [answer]
    return [v for v in answer if isinstance(v, str)]


def select_recommendations(
    primary_visibility_channel: Union[str, Iterable[str], None],
    goals: Union[str, Iterable[str], None] = None,
) -> list[str]:
    """Ordered recommendations for the user's visibility channel.

    Channel-specific items come first (every matching channel for a
    multi-select answer), then goal-specific ones. The generic set is added
    whenever fewer than three items were picked, so an unknown or missing
    channel yields the generic set. At most four items are returned.
    """
    channels = _as_values(primary_visibility_channel)
    selected_goals = _as_values(goals)

    recommendations: list[str] = []
    for channel in CHANNEL_RECOMMENDATIONS:
        if channel in channels:
            recommendations.extend(CHANNEL_RECOMMENDATIONS[channel])
    for goal in GOAL_RECOMMENDATIONS:
        if goal in selected_goals:
            recommendations.extend(GOAL_RECOMMENDATIONS[goal])

    if len(recommendations) < MIN_SPECIFIC_RECOMMENDATIONS:
        recommendations.extend(GENERIC_RECOMMENDATIONS)

    return recommendations[:MAX_RECOMMENDATIONS]
