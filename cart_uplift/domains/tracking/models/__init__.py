"""
Tracking domain models
"""

from .metadata import (
    RecommendationMetadata,
    ClickMetadata,
    EmptyMetadata,
    TrackingMetadata,
    decode_metadata,
)
from .events import TrackEventRequest, TrackEventResponse, TrackingCounters

__all__ = [
    "RecommendationMetadata",
    "ClickMetadata",
    "EmptyMetadata",
    "TrackingMetadata",
    "decode_metadata",
    "TrackEventRequest",
    "TrackEventResponse",
    "TrackingCounters",
]
