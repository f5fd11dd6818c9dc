"""
Product similarity model for SQLAlchemy

Directional co-purchase similarity rows, fully replaced per shop on each run.
"""

from sqlalchemy import Column, String, Integer, Float, Index, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import TIMESTAMP
from .base import BaseModel, ShopMixin


class ProductSimilarity(BaseModel, ShopMixin):
    """Product similarity model"""

    __tablename__ = "product_similarities"

    product_id1 = Column(String(255), nullable=False)
    product_id2 = Column(String(255), nullable=False)

    category_score = Column(Float, default=0.0, nullable=False)
    price_score = Column(Float, default=0.0, nullable=False)
    co_view_score = Column(Float, default=0.0, nullable=False)
    co_purchase_score = Column(Float, default=0.0, nullable=False)
    overall_score = Column(Float, default=0.0, nullable=False)
    sample_size = Column(Integer, default=0, nullable=False)

    computed_at = Column(
        TIMESTAMP(timezone=True), default=func.current_timestamp(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "shop_id",
            "product_id1",
            "product_id2",
            name="uq_product_similarity_shop_id_product_ids",
        ),
        Index("ix_product_similarity_shop_id_product_id1", "shop_id", "product_id1"),
        Index(
            "ix_product_similarity_shop_id_overall_score", "shop_id", "overall_score"
        ),
    )

    def __repr__(self) -> str:
        return f"<ProductSimilarity(shop_id={self.shop_id}, {self.product_id1}->{self.product_id2}, overall={self.overall_score})>"
