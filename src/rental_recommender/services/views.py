"""Response view models for recommended properties."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer


class PropertyLayoutView(BaseModel):
    """Room counts of a property."""

    living_room_count: int
    bathroom_count: int
    balcony_count: int
    kitchen_count: int


class PropertyView(BaseModel):
    """A recommended property.

    ``layout`` is left out of the serialized form when the property has none.
    """

    id: int
    title: str
    city_name: str
    district_name: str
    road_name: str | None = None
    address: str | None = None
    price: int
    property_type: str
    building_type: str
    area: Decimal
    floor: int
    status: str
    main_image: str
    created_at: datetime
    layout: PropertyLayoutView | None = None

    @model_serializer(mode="wrap")
    def drop_missing_layout(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        if self.layout is None:
            data.pop("layout", None)
        return data


class RecommendationResult(BaseModel):
    """Ordered recommendations with a status code."""

    status_code: int = 200
    items: list[PropertyView] = Field(default_factory=list)
