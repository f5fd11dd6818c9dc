"""
Shop settings model for SQLAlchemy

Registry of installed shops.
"""

from sqlalchemy import Column, String, Boolean
from .base import BaseModel


class ShopSettings(BaseModel):
    """Shop settings model"""

    __tablename__ = "shop_settings"

    shop_id = Column(String(255), nullable=False, unique=True, index=True)
    enabled = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<ShopSettings(shop_id={self.shop_id}, enabled={self.enabled})>"
