"""
Configuration module for the Cart Uplift worker
"""

from .settings import settings, Settings
from .settings import (
    DatabaseSettings,
    RedisSettings,
    AffinitySettings,
    AttributionSettings,
    SecuritySettings,
    LoggingSettings,
)

__all__ = [
    "settings",
    "Settings",
    "DatabaseSettings",
    "RedisSettings",
    "AffinitySettings",
    "AttributionSettings",
    "SecuritySettings",
    "LoggingSettings",
]
