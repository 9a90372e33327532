"""Candidate scoring from profile signals."""

from collections.abc import Iterable

from rental_recommender.services.action_aggregator import PreferenceProfile
from rental_recommender.services.records import PropertyRecord
from shared.constants import PRICE_MATCH_BONUS


class ScoringEngine:
    """Adds type-affinity and price-band bonuses on top of the seeded scores."""

    def __init__(self, price_match_bonus: int = PRICE_MATCH_BONUS):
        self.price_match_bonus = price_match_bonus

    def score(
        self, profile: PreferenceProfile, candidates: Iterable[PropertyRecord]
    ) -> dict[int, int]:
        """
        Merge candidate bonuses into a copy of the profile's action scores.

        A candidate gains the number of times the user acted on its property
        type, plus the flat bonus when its price is inside the profile's band.
        Candidates come from a band-filtered lookup, so the bonus applies to
        every one of them. Scores accumulate; the profile is left unchanged.
        """
        scores = dict(profile.scores)
        for candidate in candidates:
            bonus = profile.type_counts.get(candidate.property_type, 0)
            if candidate.price in profile.price_bounds:
                bonus += self.price_match_bonus
            scores[candidate.id] = scores.get(candidate.id, 0) + bonus
        return scores
