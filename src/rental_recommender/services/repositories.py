"""Data-access contracts the recommendation engine reads through.

All lookups are read-only. Implementations must propagate their own
failures; the engine neither retries nor recovers.
"""

from collections.abc import Collection, Sequence
from typing import Protocol

from rental_recommender.services.records import (
    ActionRecord,
    LayoutRecord,
    PageRequest,
    PropertyRecord,
)


class UserActionStore(Protocol):
    async def find_actions_by_user(self, user_id: int) -> list[ActionRecord]: ...


class PropertyStore(Protocol):
    async def find_recent_properties(self, page: PageRequest) -> list[PropertyRecord]:
        """Properties ordered by creation time, newest first."""
        ...

    async def find_candidates_by_location_and_price_range(
        self,
        cities: Collection[str],
        districts: Collection[str],
        lower: int,
        upper: int,
        page: PageRequest,
    ) -> list[PropertyRecord]:
        """Properties in any of ``cities`` and ``districts`` priced in [lower, upper]."""
        ...

    async def find_properties_by_id_set(
        self, ids: Sequence[int], page: PageRequest
    ) -> list[PropertyRecord]:
        """Properties whose id is in ``ids``, in no particular order."""
        ...

    async def find_properties_by_price_range_recent(
        self, lower: int, upper: int, page: PageRequest
    ) -> list[PropertyRecord]:
        """Properties priced in [lower, upper], newest first."""
        ...


class LayoutStore(Protocol):
    async def find_layout_by_property(self, property_id: int) -> LayoutRecord | None: ...
