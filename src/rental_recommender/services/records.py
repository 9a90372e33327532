"""Read-only records exchanged between the recommendation stages and the stores."""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from shared.constants import (
    ACTION_WEIGHTS,
    DEFAULT_PAGE_SIZE,
    PRICE_LOWER_RATIO,
    PRICE_UPPER_RATIO,
)


class ActionType(str, Enum):
    """Kinds of user action recorded against a listing.

    Any raw value outside the known kinds parses to ``OTHER``.
    """

    VIEW = "VIEW"
    FAVORITE = "FAVORITE"
    CONTACT = "CONTACT"
    OTHER = "OTHER"

    @classmethod
    def _missing_(cls, value: object) -> "ActionType":
        return cls.OTHER

    @property
    def weight(self) -> int:
        return ACTION_WEIGHTS[self.value]


@dataclass(frozen=True)
class ActionRecord:
    """A user's action on a property, with the property attributes it refers to."""

    user_id: int
    property_id: int
    action_type: ActionType
    property_type: str
    city_name: str
    district_name: str
    price: int


@dataclass(frozen=True)
class PropertyRecord:
    id: int
    title: str
    city_name: str
    district_name: str
    road_name: str | None
    address: str | None
    price: int
    property_type: str
    building_type: str
    area: Decimal
    floor: int
    status: str
    main_image: str
    created_at: datetime


@dataclass(frozen=True)
class LayoutRecord:
    living_room_count: int
    bathroom_count: int
    balcony_count: int
    kitchen_count: int


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index and page size."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError(f"page must be >= 0, got {self.page}")
        if self.size < 1:
            raise ValueError(f"size must be >= 1, got {self.size}")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class PriceBounds:
    """Inclusive price window."""

    lower: int
    upper: int

    def __contains__(self, price: int) -> bool:
        return self.lower <= price <= self.upper


def price_bounds(
    average_price: int,
    lower_ratio: float = PRICE_LOWER_RATIO,
    upper_ratio: float = PRICE_UPPER_RATIO,
) -> PriceBounds:
    """Scale the average price into a window, flooring both ends."""
    return PriceBounds(
        lower=math.floor(average_price * lower_ratio),
        upper=math.floor(average_price * upper_ratio),
    )
