"""Option weight table.

Each survey option carries a hand-tuned favorability weight in [0, 10].
Lookups never fail: an unknown category or option value weighs 0.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Union

import structlog

from app.models.enums import Category

logger = structlog.get_logger(__name__)

WEIGHT_MIN = 0
WEIGHT_MAX = 10


@dataclass(frozen=True)
class Option:
    """One allowed answer for a category."""

    value: str
    label: str
    weight: int


def _options(*options: Option) -> Mapping[str, Option]:
    for opt in options:
        if not WEIGHT_MIN <= opt.weight <= WEIGHT_MAX:
            raise ValueError(f"Weight for {opt.value!r} must be in [0, 10], got {opt.weight}")
    return MappingProxyType({opt.value: opt for opt in options})


OPTION_TABLE: Mapping[Category, Mapping[str, Option]] = MappingProxyType({
    Category.VISIBILITY: _options(
        Option("search_engines", "Search engines", 5),
        Option("social_media", "Social media", 5),
        Option("print", "Print", 3),
        Option("store", "Store / walk-in", 3),
    ),
    Category.ADVERTISING_FREQUENCY: _options(
        Option("weekly", "Weekly", 7),
        Option("monthly", "Monthly", 3),
        Option("yearly", "Yearly", 1),
    ),
    Category.GOALS: _options(
        Option("new_clients", "New clients", 5),
        Option("new_employees", "New employees", 5),
        Option("more_online", "More online presence", 10),
        Option("all", "All of the above", 10),
    ),
    Category.CAMPAIGN_MANAGEMENT: _options(
        Option("self", "Ourselves", 3),
        Option("digitalpusher", "An agency", 10),
        Option("employee", "An employee", 1),
    ),
    Category.ONLINE_REVIEWS: _options(
        Option("positive", "Mostly positive", 7),
        Option("negative", "Mostly negative", 2),
        Option("none", "No reviews yet", 1),
    ),
    Category.PREVIOUS_CAMPAIGNS: _options(
        Option("yes", "Yes", 7),
        Option("no", "No", 1),
        Option("would_like", "Not yet, but we would like to", 3),
    ),
    Category.BUSINESS_PHASE: _options(
        Option("planning", "Planning", 5),
        Option("less_than_6_months", "Less than 6 months", 3),
        Option("more_than_6_months", "More than 6 months", 4),
        Option("family_business", "Established family business", 10),
    ),
    Category.IMPLEMENTATION_TIME: _options(
        Option("immediate", "Immediately", 3),
        Option("medium", "Within 3 months", 10),
        Option("long_term", "Long term", 5),
    ),
})


def _as_category(category: Union[Category, str]) -> Union[Category, None]:
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        return None


def get_weight(category: Union[Category, str], value: str) -> int:
    """Weight of ``value`` within ``category``; 0 when either is unknown."""
    if not isinstance(value, str):
        return 0
    cat = _as_category(category)
    if cat is None:
        logger.debug("weight_lookup_unknown_category", category=str(category))
        return 0
    option = OPTION_TABLE[cat].get(value)
    if option is None:
        logger.debug("weight_lookup_unknown_value", category=cat.value, value=value)
        return 0
    return option.weight


def list_options() -> dict[str, list[Option]]:
    """Options per category in form order, for rendering the quiz."""
    return {cat.value: list(OPTION_TABLE[cat].values()) for cat in Category}
