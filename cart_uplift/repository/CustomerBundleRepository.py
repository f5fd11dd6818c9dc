"""
Customer Bundle Repository

Repository for CustomerBundle table operations.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import CustomerBundle

logger = logging.getLogger(__name__)


class CustomerBundleRepository:
    """Repository for CustomerBundle operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: CustomerBundle) -> CustomerBundle:
        """Create a customer bundle log row."""
        self.session.add(entry)
        await self.session.flush()
        return entry
