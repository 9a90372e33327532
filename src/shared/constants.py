"""Shared constants across the application."""

# Action weights for preference scoring, one entry per action type
ACTION_WEIGHTS = {
    "VIEW": 1,
    "FAVORITE": 5,
    "CONTACT": 10,
    "OTHER": 0,
}

# Price band around the user's average observed price
PRICE_LOWER_RATIO = 0.8
PRICE_UPPER_RATIO = 1.2

# Flat bonus for candidates priced inside the band
PRICE_MATCH_BONUS = 5

# Default limits
DEFAULT_RECOMMENDATION_LIMIT = 10
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Cache
RECOMMENDATION_CACHE_PREFIX = "recommendations"
RECOMMENDATION_CACHE_TTL_SECONDS = 60
REDIS_RETRY_BACKOFF_SECONDS = 30
