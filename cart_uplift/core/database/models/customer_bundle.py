"""
Customer bundle model for SQLAlchemy

Log of customer actions on bundles.
"""

from sqlalchemy import Column, String, Index
from sqlalchemy.types import DECIMAL
from .base import BaseModel, ShopMixin, CustomerMixin, SessionMixin


class CustomerBundle(BaseModel, ShopMixin, CustomerMixin, SessionMixin):
    """Customer bundle action model"""

    __tablename__ = "customer_bundles"

    bundle_id = Column(String(255), nullable=False, index=True)
    action = Column(String(50), nullable=False)
    cart_value = Column(DECIMAL(12, 2), nullable=True)
    discount_applied = Column(DECIMAL(10, 2), nullable=True)

    __table_args__ = (
        Index("ix_customer_bundle_shop_id_bundle_id", "shop_id", "bundle_id"),
    )

    def __repr__(self) -> str:
        return f"<CustomerBundle(bundle_id={self.bundle_id}, action={self.action})>"
