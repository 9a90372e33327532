"""Recommendation engine service.

Provides personalized property recommendations from a user's action history,
falling back to the newest listings for users without one.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from rental_recommender.config import Settings, get_settings
from rental_recommender.services.action_aggregator import aggregate_actions
from rental_recommender.services.candidate_retriever import CandidateRetriever
from rental_recommender.services.ranker import Ranker
from rental_recommender.services.records import PageRequest
from rental_recommender.services.repositories import (
    LayoutStore,
    PropertyStore,
    UserActionStore,
)
from rental_recommender.services.result_assembler import ResultAssembler
from rental_recommender.services.scoring import ScoringEngine
from rental_recommender.services.views import RecommendationResult

logger = structlog.get_logger()


class RecommendationEngine:
    """Engine for generating property recommendations."""

    def __init__(
        self,
        actions: UserActionStore,
        properties: PropertyStore,
        layouts: LayoutStore,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.actions = actions
        self.properties = properties
        self.limit = settings.recommendation_limit
        self.lower_ratio = settings.price_lower_ratio
        self.upper_ratio = settings.price_upper_ratio

        self.retriever = CandidateRetriever(properties)
        self.scoring = ScoringEngine(settings.price_match_bonus)
        self.ranker = Ranker(properties, limit=self.limit)
        self.assembler = ResultAssembler(layouts)

    @classmethod
    def from_session(
        cls, session: AsyncSession, settings: Settings | None = None
    ) -> "RecommendationEngine":
        """Build an engine reading through SQLAlchemy repositories on ``session``."""
        from rental_recommender.infrastructure.database.repositories import (
            SqlLayoutRepository,
            SqlPropertyRepository,
            SqlUserActionRepository,
        )

        return cls(
            actions=SqlUserActionRepository(session),
            properties=SqlPropertyRepository(session),
            layouts=SqlLayoutRepository(session),
            settings=settings,
        )

    async def recommend(self, user_id: int, page: PageRequest) -> RecommendationResult:
        """
        Get personalized property recommendations for a user.

        Args:
            user_id: The user's ID
            page: Page of location/price candidates to score

        Returns:
            Up to ``limit`` unique properties, best first
        """
        actions = await self.actions.find_actions_by_user(user_id)
        profile = aggregate_actions(actions, self.lower_ratio, self.upper_ratio)

        if profile is None:
            # No history: newest listings
            logger.info("No actions for user, using recent properties", user_id=user_id)
            recent = await self.properties.find_recent_properties(PageRequest(0, self.limit))
            return await self.assembler.assemble(recent)

        candidates = await self.retriever.retrieve(profile, page)
        scores = self.scoring.score(profile, candidates)
        ranked = await self.ranker.rank(scores, profile.price_bounds)

        logger.info(
            "Generated recommendations",
            user_id=user_id,
            actions=len(actions),
            candidates=len(candidates),
            results=len(ranked),
        )
        return await self.assembler.assemble(ranked)
