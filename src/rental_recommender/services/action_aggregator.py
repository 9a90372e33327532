"""User preference profile built from action history.

Each action contributes its type weight to the acted-upon property's score,
and the property's type, location and price to the profile statistics.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from rental_recommender.services.records import (
    ActionRecord,
    PriceBounds,
    price_bounds,
)
from shared.constants import PRICE_LOWER_RATIO, PRICE_UPPER_RATIO

logger = structlog.get_logger()


@dataclass
class PreferenceProfile:
    """Request-scoped summary of what a user has interacted with."""

    scores: dict[int, int] = field(default_factory=dict)
    type_counts: dict[str, int] = field(default_factory=dict)
    districts: set[str] = field(default_factory=set)
    cities: set[str] = field(default_factory=set)
    average_price: int = 0
    price_bounds: PriceBounds = field(default_factory=lambda: PriceBounds(0, 0))


def aggregate_actions(
    actions: Iterable[ActionRecord],
    lower_ratio: float = PRICE_LOWER_RATIO,
    upper_ratio: float = PRICE_UPPER_RATIO,
) -> PreferenceProfile | None:
    """
    Fold a user's actions into a preference profile.

    Args:
        actions: The user's actions, in any order
        lower_ratio: Multiplier for the lower end of the price band
        upper_ratio: Multiplier for the upper end of the price band

    Returns:
        The profile, or None when there are no actions (cold start)
    """
    scores: dict[int, int] = defaultdict(int)
    type_counts: dict[str, int] = defaultdict(int)
    districts: set[str] = set()
    cities: set[str] = set()
    price_total = 0
    count = 0

    for action in actions:
        scores[action.property_id] += action.action_type.weight
        type_counts[action.property_type] += 1
        districts.add(action.district_name)
        cities.add(action.city_name)
        price_total += action.price
        count += 1

    if count == 0:
        return None

    average_price = price_total // count
    bounds = price_bounds(average_price, lower_ratio, upper_ratio)
    logger.info(
        "Built preference profile",
        actions=count,
        average_price=average_price,
        price_lower=bounds.lower,
        price_upper=bounds.upper,
    )

    return PreferenceProfile(
        scores=dict(scores),
        type_counts=dict(type_counts),
        districts=districts,
        cities=cities,
        average_price=average_price,
        price_bounds=bounds,
    )
