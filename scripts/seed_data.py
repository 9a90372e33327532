#!/usr/bin/env python3
"""
Seed a development database with sample listings and user actions.

Creates the marketplace tables if they are missing, so only point this at a
local database.

Usage:
    python scripts/seed_data.py
"""

import asyncio
import os
import sys
from datetime import datetime, timedelta
from decimal import Decimal

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from rental_recommender.infrastructure.database.connection import (  # noqa: E402
    dispose_engine,
    get_db_session,
    get_engine,
)
from rental_recommender.infrastructure.database.models import (  # noqa: E402
    Base,
    City,
    District,
    Property,
    PropertyLayout,
    Road,
    UserAction,
)

LOCATIONS = {
    "Taipei City": ["Da'an", "Xinyi", "Zhongshan"],
    "New Taipei City": ["Banqiao", "Xindian"],
}

PROPERTY_TYPES = ["APARTMENT", "STUDIO", "SHARED_ROOM"]
BUILDING_TYPES = ["ELEVATOR_BUILDING", "WALK_UP", "TOWNHOUSE"]


async def seed_locations(session):
    """Seed cities, districts and one road per district."""
    districts = []
    for city_name, district_names in LOCATIONS.items():
        city = City(city_name=city_name)
        session.add(city)
        await session.flush()
        for district_name in district_names:
            district = District(district_name=district_name, city_id=city.id)
            session.add(district)
            await session.flush()
            road = Road(road_name=f"{district_name} Rd.", district_id=district.id)
            session.add(road)
            await session.flush()
            districts.append((city, district, road))

    print(f"Created {len(districts)} districts")
    return districts


async def seed_properties(session, districts, count: int = 40):
    """Seed listings spread across districts, prices and ages."""
    now = datetime.now()
    properties = []
    for i in range(count):
        city, district, road = districts[i % len(districts)]
        prop = Property(
            title=f"Sunny {PROPERTY_TYPES[i % 3].lower().replace('_', ' ')} #{i + 1}",
            user_id=1,
            city_id=city.id,
            district_id=district.id,
            road_id=road.id,
            address=f"No. {i + 1}, {road.road_name}",
            price=8000 + (i % 8) * 1500,
            deposit=16000,
            rent_period="1 year",
            property_type=PROPERTY_TYPES[i % 3],
            building_type=BUILDING_TYPES[i % 3],
            area=Decimal("8.5") + i,
            floor=1 + i % 12,
            total_floor=12,
            lessor="OWNER",
            status="AVAILABLE",
            main_image=f"https://example.com/properties/{i + 1}.jpg",
            latitude=Decimal("25.0330000"),
            longitude=Decimal("121.5654000"),
            created_at=now - timedelta(days=i),
            modified_time=now - timedelta(days=i),
        )
        session.add(prop)
        properties.append(prop)
    await session.flush()

    # Every other listing has a layout
    for prop in properties[::2]:
        session.add(
            PropertyLayout(
                property_id=prop.id,
                living_room_count=1,
                bathroom_count=1,
                balcony_count=prop.id % 2,
                kitchen_count=1,
            )
        )

    print(f"Created {len(properties)} properties")
    return properties


async def seed_actions(session, properties):
    """Seed action histories; user 3 is left without any (cold start)."""
    actions = [
        # User 1: Taipei listings, contacted one landlord
        *(UserAction(user_id=1, property_id=p.id, action_type="VIEW") for p in properties[0:12:6]),
        UserAction(user_id=1, property_id=properties[0].id, action_type="FAVORITE"),
        UserAction(user_id=1, property_id=properties[6].id, action_type="CONTACT"),
        # User 2: browsing Banqiao, plus an action type with no weight
        *(UserAction(user_id=2, property_id=p.id, action_type="VIEW") for p in properties[3:20:5]),
        UserAction(user_id=2, property_id=properties[8].id, action_type="SHARE"),
    ]
    session.add_all(actions)

    print(f"Created {len(actions)} user actions")
    return actions


async def main():
    """Run seeding."""
    print("Seeding database with test data...")
    print("=" * 50)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db_session() as session:
        districts = await seed_locations(session)
        properties = await seed_properties(session, districts)
        await seed_actions(session, properties)
        await session.commit()

    await dispose_engine()

    print("=" * 50)
    print("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
