"""
Bundle purchase model for SQLAlchemy

One row per order that contained bundles; guards against redelivered webhooks.
"""

from sqlalchemy import Column, String, Integer, Index
from sqlalchemy.types import DECIMAL
from .base import BaseModel, ShopMixin


class BundlePurchase(BaseModel, ShopMixin):
    """Bundle purchase tracking model"""

    __tablename__ = "bundle_purchases"

    order_id = Column(String(255), nullable=False)
    order_number = Column(String(100), nullable=True)
    bundle_count = Column(Integer, default=0, nullable=False)
    total_value = Column(DECIMAL(12, 2), default=0, nullable=False)

    __table_args__ = (
        Index(
            "ix_bundle_purchase_shop_id_order_id", "shop_id", "order_id", unique=True
        ),
    )

    def __repr__(self) -> str:
        return f"<BundlePurchase(shop_id={self.shop_id}, order_id={self.order_id})>"
