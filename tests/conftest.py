"""Pytest configuration and fixtures."""

from collections.abc import Callable, Collection, Sequence
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest
from fastapi.testclient import TestClient

from rental_recommender.api.v1.recommendations import (
    get_recommendation_cache,
    get_recommendation_engine,
)
from rental_recommender.config import Settings, get_settings
from rental_recommender.infrastructure.redis import RecommendationCache
from rental_recommender.main import create_app
from rental_recommender.services.recommendation_engine import RecommendationEngine
from rental_recommender.services.records import (
    ActionRecord,
    ActionType,
    LayoutRecord,
    PageRequest,
    PropertyRecord,
)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


class InMemoryStore:
    """Action, property and layout store backed by plain dicts.

    Mirrors the ordering of the SQL repositories and records every call.
    """

    def __init__(self) -> None:
        self.properties: dict[int, PropertyRecord] = {}
        self.actions: list[ActionRecord] = []
        self.layouts: dict[int, LayoutRecord] = {}
        self.calls: list[tuple[str, tuple]] = []

    def add_property(self, record: PropertyRecord) -> PropertyRecord:
        self.properties[record.id] = record
        return record

    def add_action(self, user_id: int, property_id: int, action_type: str) -> ActionRecord:
        prop = self.properties[property_id]
        action = ActionRecord(
            user_id=user_id,
            property_id=property_id,
            action_type=ActionType(action_type),
            property_type=prop.property_type,
            city_name=prop.city_name,
            district_name=prop.district_name,
            price=prop.price,
        )
        self.actions.append(action)
        return action

    async def find_actions_by_user(self, user_id: int) -> list[ActionRecord]:
        self.calls.append(("find_actions_by_user", (user_id,)))
        return [a for a in self.actions if a.user_id == user_id]

    async def find_recent_properties(self, page: PageRequest) -> list[PropertyRecord]:
        self.calls.append(("find_recent_properties", (page,)))
        return self._page(self._newest_first(self.properties.values()), page)

    async def find_candidates_by_location_and_price_range(
        self,
        cities: Collection[str],
        districts: Collection[str],
        lower: int,
        upper: int,
        page: PageRequest,
    ) -> list[PropertyRecord]:
        self.calls.append(
            ("find_candidates_by_location_and_price_range", (cities, districts, lower, upper, page))
        )
        matches = [
            p
            for p in self.properties.values()
            if p.city_name in cities and p.district_name in districts and lower <= p.price <= upper
        ]
        return self._page(sorted(matches, key=lambda p: p.id), page)

    async def find_properties_by_id_set(
        self, ids: Sequence[int], page: PageRequest
    ) -> list[PropertyRecord]:
        self.calls.append(("find_properties_by_id_set", (ids, page)))
        matches = [self.properties[i] for i in sorted(set(ids)) if i in self.properties]
        return self._page(matches, page)

    async def find_properties_by_price_range_recent(
        self, lower: int, upper: int, page: PageRequest
    ) -> list[PropertyRecord]:
        self.calls.append(("find_properties_by_price_range_recent", (lower, upper, page)))
        matches = [p for p in self.properties.values() if lower <= p.price <= upper]
        return self._page(self._newest_first(matches), page)

    async def find_layout_by_property(self, property_id: int) -> LayoutRecord | None:
        self.calls.append(("find_layout_by_property", (property_id,)))
        return self.layouts.get(property_id)

    def called(self, name: str) -> list[tuple]:
        return [args for call, args in self.calls if call == name]

    @staticmethod
    def _newest_first(records) -> list[PropertyRecord]:
        return sorted(records, key=lambda p: (p.created_at, p.id), reverse=True)

    @staticmethod
    def _page(records: list[PropertyRecord], page: PageRequest) -> list[PropertyRecord]:
        return records[page.offset : page.offset + page.size]


def build_property(
    id: int,
    price: int = 10000,
    city: str = "C",
    district: str = "D",
    property_type: str = "APARTMENT",
    created_at: datetime | None = None,
) -> PropertyRecord:
    return PropertyRecord(
        id=id,
        title=f"Listing {id}",
        city_name=city,
        district_name=district,
        road_name="Main Rd.",
        address=f"No. {id}, Main Rd.",
        price=price,
        property_type=property_type,
        building_type="ELEVATOR_BUILDING",
        area=Decimal("25.50"),
        floor=3,
        status="AVAILABLE",
        main_image=f"https://example.com/{id}.jpg",
        created_at=created_at or BASE_TIME + timedelta(days=id),
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_property(store: InMemoryStore) -> Callable[..., PropertyRecord]:
    """Create a property and add it to the store."""

    def _make(id: int, **kwargs: Any) -> PropertyRecord:
        return store.add_property(build_property(id, **kwargs))

    return _make


@pytest.fixture
def test_settings() -> Settings:
    """Get test settings with overrides."""
    return Settings(
        app_env="test",
        debug=True,
        postgres_host="localhost",
        postgres_port=5432,
        postgres_user="test",
        postgres_password="test",
        postgres_db="test_db",
        redis_host="localhost",
        redis_port=6379,
        recommendation_cache_ttl_seconds=0,
    )


@pytest.fixture
def engine(store: InMemoryStore, test_settings: Settings) -> RecommendationEngine:
    return RecommendationEngine(store, store, store, settings=test_settings)


@pytest.fixture
def app(test_settings: Settings, engine: RecommendationEngine) -> Any:
    """Create test application backed by the in-memory store."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_recommendation_engine] = lambda: engine
    app.dependency_overrides[get_recommendation_cache] = lambda: RecommendationCache(None)
    return app


@pytest.fixture
def client(app: Any) -> TestClient:
    """Create synchronous test client."""
    return TestClient(app)
