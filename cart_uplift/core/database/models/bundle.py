"""
Bundle model for SQLAlchemy

Stored bundle definitions with purchase counters.
"""

from sqlalchemy import Column, String, Integer, Index
from sqlalchemy.dialects.postgresql import JSON
from sqlalchemy.types import DECIMAL
from .base import BaseModel, ShopMixin
from .enums import BundleType, BundleStatus, BundleAssignmentType


class Bundle(BaseModel, ShopMixin):
    """Bundle definition model"""

    __tablename__ = "bundles"

    name = Column(String(255), nullable=False)
    type = Column(String(50), default=BundleType.MANUAL.value, nullable=False)
    status = Column(String(50), default=BundleStatus.DRAFT.value, nullable=False)

    assignment_type = Column(
        String(50), default=BundleAssignmentType.SPECIFIC.value, nullable=False
    )
    assigned_products = Column(JSON, default=list, nullable=True)
    # Legacy product list kept for bundles created before assigned_products
    product_ids = Column(JSON, default=list, nullable=True)

    discount_type = Column(String(50), default="percentage", nullable=False)
    discount_value = Column(DECIMAL(10, 2), default=0, nullable=False)

    total_purchases = Column(Integer, default=0, nullable=False)
    total_revenue = Column(DECIMAL(12, 2), default=0, nullable=False)

    __table_args__ = (
        Index("ix_bundle_shop_id_status", "shop_id", "status"),
        Index("ix_bundle_shop_id_type", "shop_id", "type"),
    )

    @property
    def resolved_products(self) -> list:
        """Products the bundle is assigned to, falling back to the legacy list"""
        return list(self.assigned_products or self.product_ids or [])

    def __repr__(self) -> str:
        return f"<Bundle(shop_id={self.shop_id}, name={self.name}, type={self.type})>"
