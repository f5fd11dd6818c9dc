"""
Processed order model for SQLAlchemy

One row per order-created delivery that reached attribution; lets
redeliveries of unattributed orders skip the soft-signal writes.
"""

from sqlalchemy import Column, String, Index
from .base import BaseModel, ShopMixin


class ProcessedOrder(BaseModel, ShopMixin):
    __tablename__ = "processed_orders"

    order_id = Column(String(255), nullable=False)

    __table_args__ = (
        Index("ix_processed_order_shop_id_order_id", "shop_id", "order_id", unique=True),
    )

    def __repr__(self) -> str:
        return f"<ProcessedOrder(shop_id={self.shop_id}, order_id={self.order_id})>"
