"""Unit tests for the recommendation pipeline."""

from datetime import timedelta

import pytest

from rental_recommender.services.recommendation_engine import RecommendationEngine
from rental_recommender.services.records import PageRequest

PAGE = PageRequest(0, 10)


class TestColdStart:
    @pytest.mark.asyncio
    async def test_newest_ten(self, engine, store, make_property) -> None:
        for pid in range(1, 16):
            make_property(pid)

        result = await engine.recommend(user_id=42, page=PAGE)

        assert result.status_code == 200
        assert [v.id for v in result.items] == list(range(15, 5, -1))
        created = [v.created_at for v in result.items]
        assert created == sorted(created, reverse=True)

    @pytest.mark.asyncio
    async def test_small_inventory(self, engine, make_property) -> None:
        for pid in range(1, 5):
            make_property(pid)

        result = await engine.recommend(user_id=42, page=PAGE)

        assert [v.id for v in result.items] == [4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_skips_warm_path(self, engine, store, make_property) -> None:
        make_property(1)

        await engine.recommend(user_id=42, page=PageRequest(3, 5))

        assert store.called("find_recent_properties") == [(PageRequest(0, 10),)]
        assert not store.called("find_candidates_by_location_and_price_range")
        assert not store.called("find_properties_by_id_set")
        assert not store.called("find_properties_by_price_range_recent")

    @pytest.mark.asyncio
    async def test_empty_inventory(self, engine) -> None:
        result = await engine.recommend(user_id=42, page=PAGE)
        assert result.status_code == 200
        assert result.items == []


class TestWarmPath:
    @pytest.mark.asyncio
    async def test_single_view(self, engine, store, make_property) -> None:
        """Candidates in the viewed city/district and band gain type affinity + price bonus."""
        make_property(1, price=10000)
        make_property(2, price=9000)
        make_property(3, price=11500, property_type="STUDIO")
        make_property(4, price=15000)
        make_property(5, price=10000, district="Other")
        store.add_action(user_id=7, property_id=1, action_type="VIEW")

        result = await engine.recommend(user_id=7, page=PAGE)
        ids = [v.id for v in result.items]

        # 1: 1 + 1 + 5, 2: 1 + 5, 3: 5, then in-band backfill
        assert ids[:3] == [1, 2, 3]
        assert ids[3:] == [5]
        assert 4 not in ids

        cities, districts, lower, upper, page = store.called(
            "find_candidates_by_location_and_price_range"
        )[0]
        assert (list(cities), list(districts), lower, upper) == (["C"], ["D"], 8000, 12000)
        assert page == PAGE

    @pytest.mark.asyncio
    async def test_ties_order_by_id(self, engine, store, make_property) -> None:
        make_property(3, city="X", district="X")
        make_property(8, city="Y", district="Y")
        store.add_action(user_id=1, property_id=8, action_type="FAVORITE")
        store.add_action(user_id=1, property_id=3, action_type="FAVORITE")

        result = await engine.recommend(user_id=1, page=PAGE)

        assert [v.id for v in result.items][:2] == [3, 8]

    @pytest.mark.asyncio
    async def test_contact_outranks_views(self, engine, store, make_property) -> None:
        for pid in range(1, 4):
            make_property(pid)
        store.add_action(user_id=1, property_id=1, action_type="VIEW")
        store.add_action(user_id=1, property_id=1, action_type="VIEW")
        store.add_action(user_id=1, property_id=2, action_type="CONTACT")
        store.add_action(user_id=1, property_id=3, action_type="SHARE")

        result = await engine.recommend(user_id=1, page=PAGE)

        # every candidate gets +4 type affinity and +5 price bonus
        assert [v.id for v in result.items] == [2, 1, 3]

    @pytest.mark.asyncio
    async def test_backfills_short_candidate_pool(self, engine, store, make_property) -> None:
        for pid in range(1, 4):
            make_property(pid)
        for pid in range(20, 30):
            make_property(pid, city="Elsewhere", district="Elsewhere")
        store.add_action(user_id=1, property_id=1, action_type="VIEW")

        result = await engine.recommend(user_id=1, page=PAGE)
        ids = [v.id for v in result.items]

        assert len(ids) == 10
        assert ids[:3] == [1, 2, 3]
        assert set(ids[3:]) <= set(range(20, 30))
        assert len(set(ids)) == 10

    @pytest.mark.asyncio
    async def test_no_duplicates(self, engine, store, make_property) -> None:
        for pid in range(1, 30):
            make_property(
                pid,
                price=8000 + (pid % 5) * 1000,
                district="D" if pid % 2 else "E",
                property_type="APARTMENT" if pid % 3 else "STUDIO",
                created_at=None,
            )
        for pid, action in [(1, "VIEW"), (2, "FAVORITE"), (2, "VIEW"), (9, "CONTACT"), (14, "SHARE")]:
            store.add_action(user_id=1, property_id=pid, action_type=action)

        result = await engine.recommend(user_id=1, page=PAGE)
        ids = [v.id for v in result.items]

        assert len(ids) == 10
        assert len(set(ids)) == len(ids)

    @pytest.mark.asyncio
    async def test_newer_listing_backfills_first(self, engine, store, make_property) -> None:
        make_property(1, city="A", district="A")
        older = make_property(2, city="B", district="B")
        make_property(3, city="B", district="B", created_at=older.created_at + timedelta(days=30))
        store.add_action(user_id=1, property_id=1, action_type="VIEW")

        result = await engine.recommend(user_id=1, page=PAGE)

        assert [v.id for v in result.items] == [1, 3, 2]

    @pytest.mark.asyncio
    async def test_collaborator_failure_propagates(self, engine, store, make_property) -> None:
        make_property(1)
        store.add_action(user_id=1, property_id=1, action_type="VIEW")

        async def broken(*args, **kwargs):
            raise ConnectionError("database went away")

        store.find_candidates_by_location_and_price_range = broken

        with pytest.raises(ConnectionError):
            await engine.recommend(user_id=1, page=PAGE)


class TestSettings:
    @pytest.mark.asyncio
    async def test_limit_from_settings(self, store, make_property, test_settings) -> None:
        for pid in range(1, 10):
            make_property(pid)
        settings = test_settings.model_copy(update={"recommendation_limit": 4})
        engine = RecommendationEngine(store, store, store, settings=settings)

        result = await engine.recommend(user_id=1, page=PAGE)

        assert [v.id for v in result.items] == [9, 8, 7, 6]
