"""
Application-level constants
"""

PROJECT_NAME = "Cart Uplift Worker"
VERSION = "1.0.0"
DEFAULT_PORT = 8001
HEALTH_CHECK_TIMEOUT = 5

# Similarity job
DEFAULT_SIMILARITY_LOOKBACK_DAYS = 90
DEFAULT_SIMILARITY_BATCH_SIZE = 1000
DEFAULT_JACCARD_WEIGHT = 0.6
DEFAULT_FREQUENCY_WEIGHT = 0.4
DEFAULT_MIN_OVERALL_SCORE = 0.1
DEFAULT_MIN_CO_PURCHASE_COUNT = 2

# Time-decayed association analysis
DEFAULT_DECAY_HALF_LIFE_DAYS = 90
DEFAULT_ASSOCIATION_ORDER_LIMIT = 500
DEFAULT_ASSOCIATION_RESULT_LIMIT = 10

# Attribution
DEFAULT_ATTRIBUTION_LOOKBACK_DAYS = 7
DEFAULT_ATTRIBUTION_EVENT_LIMIT = 500
DEFAULT_CLICK_WINDOW_MINUTES = 60

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "DEFAULT_PORT",
    "HEALTH_CHECK_TIMEOUT",
    "DEFAULT_SIMILARITY_LOOKBACK_DAYS",
    "DEFAULT_SIMILARITY_BATCH_SIZE",
    "DEFAULT_JACCARD_WEIGHT",
    "DEFAULT_FREQUENCY_WEIGHT",
    "DEFAULT_MIN_OVERALL_SCORE",
    "DEFAULT_MIN_CO_PURCHASE_COUNT",
    "DEFAULT_DECAY_HALF_LIFE_DAYS",
    "DEFAULT_ASSOCIATION_ORDER_LIMIT",
    "DEFAULT_ASSOCIATION_RESULT_LIMIT",
    "DEFAULT_ATTRIBUTION_LOOKBACK_DAYS",
    "DEFAULT_ATTRIBUTION_EVENT_LIMIT",
    "DEFAULT_CLICK_WINDOW_MINUTES",
]
