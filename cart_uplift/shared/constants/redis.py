"""
Redis-specific constants
"""

# Redis Configuration
DEFAULT_REDIS_PORT = 6379
DEFAULT_REDIS_DB = 0
DEFAULT_REDIS_TLS = False
DEFAULT_REDIS_HEALTH_CHECK_INTERVAL = 30

# Key prefixes
TRACKING_COUNTERS_KEY_PREFIX = "tracking:counters"

__all__ = [
    "DEFAULT_REDIS_PORT",
    "DEFAULT_REDIS_DB",
    "DEFAULT_REDIS_TLS",
    "DEFAULT_REDIS_HEALTH_CHECK_INTERVAL",
    "TRACKING_COUNTERS_KEY_PREFIX",
]
