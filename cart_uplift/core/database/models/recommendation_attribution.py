"""
Recommendation attribution model for SQLAlchemy

One row per (order, attributed product).
"""

from sqlalchemy import Column, String, Integer, Index
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.types import DECIMAL
from .base import BaseModel, ShopMixin, CustomerMixin


class RecommendationAttribution(BaseModel, ShopMixin, CustomerMixin):
    """Recommendation attribution model for revenue attribution"""

    __tablename__ = "recommendation_attributions"

    product_id = Column(String(255), nullable=False)
    order_id = Column(String(255), nullable=False, index=True)
    order_number = Column(String(100), nullable=True)
    order_value = Column(DECIMAL(10, 2), nullable=False)
    recommendation_event_ids = Column(JSON, default=list, nullable=False)
    attributed_revenue = Column(DECIMAL(10, 2), nullable=False)
    conversion_time_minutes = Column(Integer, nullable=True)

    __table_args__ = (
        Index(
            "ix_recommendation_attribution_shop_id_order_id_product_id",
            "shop_id",
            "order_id",
            "product_id",
            unique=True,
        ),
        Index(
            "ix_recommendation_attribution_shop_id_created_at",
            "shop_id",
            "created_at",
        ),
    )

    def __repr__(self) -> str:
        return f"<RecommendationAttribution(shop_id={self.shop_id}, order_id={self.order_id}, product_id={self.product_id})>"
