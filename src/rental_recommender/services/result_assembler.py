"""Conversion of ranked property records into response views."""

from collections.abc import Sequence

from rental_recommender.services.records import LayoutRecord, PropertyRecord
from rental_recommender.services.repositories import LayoutStore
from rental_recommender.services.views import (
    PropertyLayoutView,
    PropertyView,
    RecommendationResult,
)


class ResultAssembler:
    """Builds property views, attaching a layout where one exists."""

    def __init__(self, layouts: LayoutStore):
        self.layouts = layouts

    async def assemble(self, records: Sequence[PropertyRecord]) -> RecommendationResult:
        # One session backs every lookup, so these run one at a time
        items = []
        for record in records:
            layout = await self.layouts.find_layout_by_property(record.id)
            items.append(self._to_view(record, layout))
        return RecommendationResult(status_code=200, items=items)

    def _to_view(self, record: PropertyRecord, layout: LayoutRecord | None) -> PropertyView:
        return PropertyView(
            id=record.id,
            title=record.title,
            city_name=record.city_name,
            district_name=record.district_name,
            road_name=record.road_name,
            address=record.address,
            price=record.price,
            property_type=record.property_type,
            building_type=record.building_type,
            area=record.area,
            floor=record.floor,
            status=record.status,
            main_image=record.main_image,
            created_at=record.created_at,
            layout=self._to_layout_view(layout) if layout else None,
        )

    @staticmethod
    def _to_layout_view(layout: LayoutRecord) -> PropertyLayoutView:
        return PropertyLayoutView(
            living_room_count=layout.living_room_count,
            bathroom_count=layout.bathroom_count,
            balcony_count=layout.balcony_count,
            kitchen_count=layout.kitchen_count,
        )
