"""Business logic services."""

from rental_recommender.services.action_aggregator import (
    PreferenceProfile,
    aggregate_actions,
)
from rental_recommender.services.candidate_retriever import CandidateRetriever
from rental_recommender.services.ranker import Ranker
from rental_recommender.services.recommendation_engine import RecommendationEngine
from rental_recommender.services.result_assembler import ResultAssembler
from rental_recommender.services.scoring import ScoringEngine

__all__ = [
    "CandidateRetriever",
    "PreferenceProfile",
    "Ranker",
    "RecommendationEngine",
    "ResultAssembler",
    "ScoringEngine",
    "aggregate_actions",
]
