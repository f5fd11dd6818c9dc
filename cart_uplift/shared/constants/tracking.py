"""
Tracking event and line-item property names shared by ingestion and attribution
"""


class TrackingEventType:
    """Event types stored in the tracking_events table"""

    IMPRESSION = "impression"
    ML_RECOMMENDATION_SERVED = "ml_recommendation_served"
    CLICK = "click"
    ADD_TO_CART = "add_to_cart"
    PURCHASE = "purchase"

    RECOMMENDATION_EVENTS = (IMPRESSION, ML_RECOMMENDATION_SERVED)
    ATTRIBUTION_EVENTS = (IMPRESSION, ML_RECOMMENDATION_SERVED, CLICK)
    ALL = (IMPRESSION, ML_RECOMMENDATION_SERVED, CLICK, ADD_TO_CART, PURCHASE)


# Line-item custom properties written by the storefront cart
PROPERTY_SOURCE_BUNDLE_QTY = "_source_bundle_qty"
PROPERTY_SOURCE_REC_QTY = "_source_rec_qty"
PROPERTY_SOURCE_MANUAL_QTY = "_source_manual_qty"
PROPERTY_BUNDLE_ID = "_bundle_id"
PROPERTY_BUNDLE_NAME = "_bundle_name"

# Bundle id conventions used by the storefront
AI_BUNDLE_PREFIX = "ai-"
DYNAMIC_BUNDLE_PREFIX = "bundle_dynamic_"

__all__ = [
    "TrackingEventType",
    "PROPERTY_SOURCE_BUNDLE_QTY",
    "PROPERTY_SOURCE_REC_QTY",
    "PROPERTY_SOURCE_MANUAL_QTY",
    "PROPERTY_BUNDLE_ID",
    "PROPERTY_BUNDLE_NAME",
    "AI_BUNDLE_PREFIX",
    "DYNAMIC_BUNDLE_PREFIX",
]
