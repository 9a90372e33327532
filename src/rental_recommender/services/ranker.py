"""Ranking, id resolution and backfill of scored properties."""

import structlog

from rental_recommender.services.records import PageRequest, PriceBounds, PropertyRecord
from rental_recommender.services.repositories import PropertyStore
from shared.constants import DEFAULT_RECOMMENDATION_LIMIT

logger = structlog.get_logger()


def rank_ids(scores: dict[int, int]) -> list[int]:
    """Property ids by score descending, ties broken by ascending id."""
    return [pid for pid, _ in sorted(scores.items(), key=lambda x: (-x[1], x[0]))]


class Ranker:
    """Turns a score mapping into at most ``limit`` unique property records."""

    def __init__(self, properties: PropertyStore, limit: int = DEFAULT_RECOMMENDATION_LIMIT):
        self.properties = properties
        self.limit = limit

    async def rank(
        self, scores: dict[int, int], bounds: PriceBounds
    ) -> list[PropertyRecord]:
        """
        Resolve the top-scored ids and backfill with recent in-band listings.

        Args:
            scores: Property id to accumulated score
            bounds: Price window used for backfill

        Returns:
            Up to ``limit`` property records, best first, no repeated ids
        """
        top_ids = rank_ids(scores)[: self.limit]

        ranked: list[PropertyRecord] = []
        if top_ids:
            found = await self.properties.find_properties_by_id_set(
                top_ids, PageRequest(0, len(top_ids))
            )
            by_id = {record.id: record for record in found}
            ranked = [by_id[pid] for pid in top_ids if pid in by_id]

            missing = len(top_ids) - len(ranked)
            if missing:
                logger.warning("Ranked properties no longer available", missing=missing)

        if len(ranked) < self.limit:
            ranked = await self._backfill(ranked, bounds)

        return ranked

    async def _backfill(
        self, ranked: list[PropertyRecord], bounds: PriceBounds
    ) -> list[PropertyRecord]:
        """Append recent in-band properties not already present, up to the limit."""
        recent = await self.properties.find_properties_by_price_range_recent(
            bounds.lower, bounds.upper, PageRequest(0, self.limit)
        )

        seen = {record.id for record in ranked}
        result = list(ranked)
        for record in recent:
            if len(result) >= self.limit:
                break
            if record.id in seen:
                continue
            seen.add(record.id)
            result.append(record)

        logger.info(
            "Backfilled recommendations",
            ranked=len(ranked),
            added=len(result) - len(ranked),
        )
        return result
