"""SQLAlchemy models for the rental marketplace tables read by the recommender.

The marketplace owns these tables; the recommender only maps the columns
it queries and never writes to them.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


# =============================================================================
# Geography
# =============================================================================


class City(Base):
    __tablename__ = "city"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    city_name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)


class District(Base):
    __tablename__ = "district"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    district_name: Mapped[str] = mapped_column(String(50), nullable=False)
    city_id: Mapped[int] = mapped_column(ForeignKey("city.id"), nullable=False)


class Road(Base):
    __tablename__ = "road"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    road_name: Mapped[str] = mapped_column(String(100), nullable=False)
    district_id: Mapped[int] = mapped_column(ForeignKey("district.id"), nullable=False)


# =============================================================================
# Properties
# =============================================================================


class Property(Base):
    """A rental listing."""

    __tablename__ = "property"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    city_id: Mapped[int] = mapped_column(ForeignKey("city.id"), nullable=False)
    district_id: Mapped[int] = mapped_column(ForeignKey("district.id"), nullable=False)
    road_id: Mapped[Optional[int]] = mapped_column(ForeignKey("road.id"))
    address: Mapped[Optional[str]] = mapped_column(String(255))

    # Monthly rent
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    deposit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    management_fee: Mapped[Optional[int]] = mapped_column(Integer)
    rent_period: Mapped[str] = mapped_column(String(50), nullable=False)

    property_type: Mapped[str] = mapped_column(String(50), nullable=False)
    building_type: Mapped[str] = mapped_column(String(50), nullable=False)
    area: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    floor: Mapped[int] = mapped_column(Integer, nullable=False)
    total_floor: Mapped[int] = mapped_column(Integer, nullable=False)
    lessor: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    main_image: Mapped[str] = mapped_column(String(500), nullable=False)

    latitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)
    longitude: Mapped[Decimal] = mapped_column(Numeric(10, 7), nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    modified_time: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_property_created_at", "created_at"),
        Index("ix_property_price", "price"),
    )


class PropertyLayout(Base):
    """Room counts of a listing (at most one per property)."""

    __tablename__ = "property_layout"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("property.id"), nullable=False, unique=True
    )
    living_room_count: Mapped[int] = mapped_column(Integer, default=0)
    bathroom_count: Mapped[int] = mapped_column(Integer, default=0)
    balcony_count: Mapped[int] = mapped_column(Integer, default=0)
    kitchen_count: Mapped[int] = mapped_column(Integer, default=0)


# =============================================================================
# User Actions
# =============================================================================


class UserAction(Base):
    """A user's interaction with a listing (VIEW, FAVORITE, CONTACT, ...)."""

    __tablename__ = "user_action"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("property.id"), nullable=False)
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
