"""
Recommendation signals extracted from recent tracking events
"""

from datetime import datetime, timedelta
from typing import Sequence

from cart_uplift.core.database.models import TrackingEvent
from cart_uplift.shared.constants.tracking import TrackingEventType
from cart_uplift.shared.helpers import ensure_aware
from cart_uplift.domains.tracking.models import (
    ClickMetadata,
    RecommendationMetadata,
    decode_metadata,
)
from ..models import ImpressionRef, RecommendationSignals


def build_signals(
    events: Sequence[TrackingEvent], now: datetime, click_window: timedelta
) -> RecommendationSignals:
    """
    Collect recommended products and recently clicked ids.

    `events` must be ordered newest first. Clicks older than
    `click_window` before `now` are ignored.
    """
    signals = RecommendationSignals()
    click_cutoff = now - click_window

    for event in events:
        metadata = decode_metadata(event.event, event.event_metadata)
        created_at = ensure_aware(event.created_at) or now

        if event.event in TrackingEventType.RECOMMENDATION_EVENTS:
            signals.impression_count += 1
            if not isinstance(metadata, RecommendationMetadata):
                continue

            if signals.impression_count == 1:
                signals.newest_anchors = list(metadata.anchors)

            ref = ImpressionRef(event_id=event.id, created_at=created_at)
            for product_id in metadata.recommendation_ids:
                signals.recommended.setdefault(product_id, []).append(ref)

        elif event.event == TrackingEventType.CLICK:
            signals.click_count += 1
            if created_at < click_cutoff:
                continue

            signals.recent_click_count += 1
            for clicked_id in (event.product_id, event.variant_id):
                if clicked_id:
                    signals.clicked_ids.add(str(clicked_id))
            if isinstance(metadata, ClickMetadata):
                for clicked_id in (metadata.product_id, metadata.variant_id):
                    if clicked_id:
                        signals.clicked_ids.add(clicked_id)

    return signals
