"""Candidate retrieval by favored location and price band."""

import structlog

from rental_recommender.services.action_aggregator import PreferenceProfile
from rental_recommender.services.records import PageRequest, PropertyRecord
from rental_recommender.services.repositories import PropertyStore

logger = structlog.get_logger()


class CandidateRetriever:
    """Fetches one page of properties near what the user has looked at."""

    def __init__(self, properties: PropertyStore):
        self.properties = properties

    async def retrieve(
        self, profile: PreferenceProfile, page: PageRequest
    ) -> list[PropertyRecord]:
        """Return one page of properties in the profile's cities, districts and price band."""
        if not profile.cities or not profile.districts:
            return []

        bounds = profile.price_bounds
        candidates = await self.properties.find_candidates_by_location_and_price_range(
            sorted(profile.cities),
            sorted(profile.districts),
            bounds.lower,
            bounds.upper,
            page,
        )
        logger.debug(
            "Retrieved candidates",
            count=len(candidates),
            page=page.page,
            size=page.size,
        )
        return candidates
