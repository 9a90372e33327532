"""Recommendation API endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rental_recommender.config import Settings, get_settings
from rental_recommender.infrastructure.database.connection import get_session
from rental_recommender.infrastructure.redis import RecommendationCache, get_redis_client
from rental_recommender.services.recommendation_engine import RecommendationEngine
from rental_recommender.services.records import PageRequest
from rental_recommender.services.views import RecommendationResult
from shared.constants import MAX_PAGE_SIZE

logger = structlog.get_logger()

router = APIRouter()


def get_recommendation_engine(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> RecommendationEngine:
    return RecommendationEngine.from_session(session, settings)


async def get_recommendation_cache(
    settings: Settings = Depends(get_settings),
) -> RecommendationCache:
    ttl = settings.recommendation_cache_ttl_seconds
    client = await get_redis_client() if ttl > 0 else None
    return RecommendationCache(client, ttl_seconds=ttl)


@router.get("/users/{user_id}", response_model=RecommendationResult)
async def get_user_recommendations(
    user_id: Annotated[int, Path(description="User ID for personalization")],
    page: Annotated[int, Query(ge=0, description="Zero-based candidate page")] = 0,
    size: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
    cache: RecommendationCache = Depends(get_recommendation_cache),
    settings: Settings = Depends(get_settings),
) -> RecommendationResult:
    """
    Get personalized property recommendations for a user.

    **Algorithm:**
    1. Aggregate the user's VIEW / FAVORITE / CONTACT history into a profile
    2. Fetch one page of properties in the favored cities and districts,
       priced within 80%-120% of the average price seen
    3. Score by action weight, property type affinity and price match
    4. Rank (ties by ascending id) and backfill with recent in-range listings

    Users without any history get the newest listings instead.
    """
    page_request = PageRequest(page=page, size=size or settings.default_page_size)

    cached = await cache.get(user_id, page_request)
    if cached is not None:
        logger.debug("Recommendation cache hit", user_id=user_id)
        return cached

    result = await engine.recommend(user_id, page_request)
    await cache.set(user_id, page_request, result)
    return result
