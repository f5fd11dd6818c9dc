"""
Tracking event model for SQLAlchemy

Storefront impressions, clicks, served recommendations and purchases.
"""

from sqlalchemy import Column, String, Index
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.types import DECIMAL
from .base import BaseModel, ShopMixin, CustomerMixin, SessionMixin


class TrackingEvent(BaseModel, ShopMixin, CustomerMixin, SessionMixin):
    """Tracking event model"""

    __tablename__ = "tracking_events"

    event = Column(String(50), nullable=False, index=True)
    product_id = Column(String(255), nullable=True, index=True)
    variant_id = Column(String(255), nullable=True)
    order_id = Column(String(255), nullable=True, index=True)
    order_value = Column(DECIMAL(10, 2), nullable=True)
    source = Column(String(100), nullable=True)
    event_metadata = Column("metadata", JSON, default=dict, nullable=True)

    __table_args__ = (
        Index("ix_tracking_event_shop_id_event", "shop_id", "event"),
        Index(
            "ix_tracking_event_shop_id_event_created_at",
            "shop_id",
            "event",
            "created_at",
        ),
        Index(
            "ix_tracking_event_shop_id_session_id_product_id",
            "shop_id",
            "session_id",
            "product_id",
        ),
    )

    def __repr__(self) -> str:
        return f"<TrackingEvent(shop_id={self.shop_id}, event={self.event}, product_id={self.product_id})>"
