"""SQLAlchemy-backed stores read by the recommendation engine."""

from collections.abc import Collection, Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from rental_recommender.infrastructure.database.models import (
    City,
    District,
    Property,
    PropertyLayout,
    Road,
    UserAction,
)
from rental_recommender.services.records import (
    ActionRecord,
    ActionType,
    LayoutRecord,
    PageRequest,
    PropertyRecord,
)


def property_select() -> Select:
    """Property columns joined with their city, district and road names."""
    return (
        select(
            Property.id,
            Property.title,
            City.city_name,
            District.district_name,
            Road.road_name,
            Property.address,
            Property.price,
            Property.property_type,
            Property.building_type,
            Property.area,
            Property.floor,
            Property.status,
            Property.main_image,
            Property.created_at,
        )
        .join(City, Property.city_id == City.id)
        .join(District, Property.district_id == District.id)
        .outerjoin(Road, Property.road_id == Road.id)
    )


def _paged(stmt: Select, page: PageRequest) -> Select:
    return stmt.offset(page.offset).limit(page.size)


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(Property.created_at.desc(), Property.id.desc())


class SqlUserActionRepository:
    """User actions with the attributes of the property acted on."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_actions_by_user(self, user_id: int) -> list[ActionRecord]:
        query = (
            select(
                UserAction.user_id,
                UserAction.property_id,
                UserAction.action_type,
                Property.property_type,
                City.city_name,
                District.district_name,
                Property.price,
            )
            .join(Property, UserAction.property_id == Property.id)
            .join(City, Property.city_id == City.id)
            .join(District, Property.district_id == District.id)
            .where(UserAction.user_id == user_id)
            .order_by(UserAction.id)
        )
        result = await self.session.execute(query)

        return [
            ActionRecord(
                user_id=r.user_id,
                property_id=r.property_id,
                action_type=ActionType(r.action_type),
                property_type=r.property_type,
                city_name=r.city_name,
                district_name=r.district_name,
                price=r.price,
            )
            for r in result
        ]


class SqlPropertyRepository:
    """Property lookups used for cold start, candidates, ranking and backfill."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_recent_properties(self, page: PageRequest) -> list[PropertyRecord]:
        query = _paged(_newest_first(property_select()), page)
        return await self._fetch(query)

    async def find_candidates_by_location_and_price_range(
        self,
        cities: Collection[str],
        districts: Collection[str],
        lower: int,
        upper: int,
        page: PageRequest,
    ) -> list[PropertyRecord]:
        query = (
            property_select()
            .where(
                City.city_name.in_(list(cities)),
                District.district_name.in_(list(districts)),
                Property.price.between(lower, upper),
            )
            # Stable order so consecutive pages do not overlap
            .order_by(Property.id)
        )
        return await self._fetch(_paged(query, page))

    async def find_properties_by_id_set(
        self, ids: Sequence[int], page: PageRequest
    ) -> list[PropertyRecord]:
        if not ids:
            return []
        query = property_select().where(Property.id.in_(list(ids))).order_by(Property.id)
        return await self._fetch(_paged(query, page))

    async def find_properties_by_price_range_recent(
        self, lower: int, upper: int, page: PageRequest
    ) -> list[PropertyRecord]:
        query = property_select().where(Property.price.between(lower, upper))
        return await self._fetch(_paged(_newest_first(query), page))

    async def _fetch(self, query: Select) -> list[PropertyRecord]:
        result = await self.session.execute(query)
        return [PropertyRecord(**row._asdict()) for row in result]


class SqlLayoutRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_layout_by_property(self, property_id: int) -> LayoutRecord | None:
        query = select(
            PropertyLayout.living_room_count,
            PropertyLayout.bathroom_count,
            PropertyLayout.balcony_count,
            PropertyLayout.kitchen_count,
        ).where(PropertyLayout.property_id == property_id)
        result = await self.session.execute(query)
        row = result.first()

        if row is None:
            return None
        return LayoutRecord(**row._asdict())
