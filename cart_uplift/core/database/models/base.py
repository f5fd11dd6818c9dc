"""
Declarative base and shared columns for the worker's tables
"""

import uuid

from sqlalchemy import Column, MetaData, String, func
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import DeclarativeBase, declared_attr

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """String UUID key plus created/updated timestamps"""

    __abstract__ = True

    id = Column(String, primary_key=True, default=new_id)
    created_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), default=func.now(), nullable=False
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class ShopMixin:
    @declared_attr
    def shop_id(cls):
        return Column(String(255), nullable=False, index=True)


class CustomerMixin:
    @declared_attr
    def customer_id(cls):
        return Column(String(255), nullable=True, index=True)


class SessionMixin:
    @declared_attr
    def session_id(cls):
        return Column(String(255), nullable=True, index=True)
