"""Enumeration types for the visibility assessment."""
from enum import Enum


class Category(str, Enum):
    """Scoreable survey questions, in the order the form asks them."""
    VISIBILITY = "visibility"  # Where the business can be found
    ADVERTISING_FREQUENCY = "advertising_frequency"
    GOALS = "goals"
    CAMPAIGN_MANAGEMENT = "campaign_management"  # Who runs the ads
    ONLINE_REVIEWS = "online_reviews"
    PREVIOUS_CAMPAIGNS = "previous_campaigns"
    BUSINESS_PHASE = "business_phase"
    IMPLEMENTATION_TIME = "implementation_time"


class Tier(str, Enum):
    """Qualitative bucket for a final visibility score."""
    CRITICAL = "critical"  # < 30
    MEDIUM = "medium"  # 30-69
    GOOD = "good"  # 70-89
    EXCELLENT = "excellent"  # >= 90


# Inclusive lower bound of each tier, highest first
TIER_THRESHOLDS: list[tuple[int, Tier]] = [
    (90, Tier.EXCELLENT),
    (70, Tier.GOOD),
    (30, Tier.MEDIUM),
    (0, Tier.CRITICAL),
]
