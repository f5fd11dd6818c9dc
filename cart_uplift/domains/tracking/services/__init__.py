"""
Tracking domain services
"""

from .counter_store import TrackingCounterStore
from .ingestion_service import TrackingIngestionService

__all__ = ["TrackingCounterStore", "TrackingIngestionService"]
