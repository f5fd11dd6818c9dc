"""
Product Similarity Repository

Repository for ProductSimilarity table operations.
"""

import logging
from typing import Sequence, Tuple

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from cart_uplift.core.database.models import ProductSimilarity
from cart_uplift.core.exceptions import DatabaseQueryError
from cart_uplift.domains.affinity.models import SimilarityRecord
from cart_uplift.shared.helpers import now_utc

logger = logging.getLogger(__name__)

_CONFLICT_KEYS = ["shop_id", "product_id1", "product_id2"]


class ProductSimilarityRepository:
    """Repository for ProductSimilarity operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete_for_shop(self, shop_id: str) -> int:
        """Delete every similarity row of a shop."""
        result = await self.session.execute(
            delete(ProductSimilarity).where(ProductSimilarity.shop_id == shop_id)
        )
        return result.rowcount or 0

    async def insert_batch(self, records: Sequence[SimilarityRecord]) -> int:
        """Insert records, skipping rows whose key already exists."""
        if not records:
            return 0

        computed_at = now_utc()
        rows = [{**record.to_row(), "computed_at": computed_at} for record in records]
        stmt = (
            pg_insert(ProductSimilarity)
            .values(rows)
            .on_conflict_do_nothing(index_elements=_CONFLICT_KEYS)
        )
        result = await self.session.execute(stmt)
        return result.rowcount if result.rowcount is not None else len(rows)

    async def replace_for_shop(
        self, shop_id: str, records: Sequence[SimilarityRecord], batch_size: int
    ) -> Tuple[int, int]:
        """
        Replace the shop's similarity rows with `records`.

        Runs inside the caller's transaction so readers never see a
        half-written set. Returns (deleted, created).
        """
        try:
            deleted = await self.delete_for_shop(shop_id)

            created = 0
            for start in range(0, len(records), batch_size):
                created += await self.insert_batch(records[start : start + batch_size])
        except SQLAlchemyError as e:
            raise DatabaseQueryError(
                f"Failed to replace similarities for {shop_id}",
                query="replace_for_shop",
                details={"records": len(records)},
                cause=e,
            ) from e

        logger.info(
            f"Replaced similarities for {shop_id}: deleted={deleted} created={created}"
        )
        return deleted, created

    async def upsert_soft_signal(
        self,
        shop_id: str,
        anchor_id: str,
        product_id: str,
        co_purchase_increment: float,
        overall_increment: float,
        score_cap: float,
    ) -> None:
        """Nudge the anchor -> product similarity up by small capped increments."""
        stmt = pg_insert(ProductSimilarity).values(
            shop_id=shop_id,
            product_id1=anchor_id,
            product_id2=product_id,
            category_score=0.0,
            price_score=0.0,
            co_view_score=0.0,
            co_purchase_score=min(co_purchase_increment, score_cap),
            overall_score=min(overall_increment, score_cap),
            sample_size=1,
            computed_at=now_utc(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=_CONFLICT_KEYS,
            set_={
                "co_purchase_score": func.least(
                    ProductSimilarity.co_purchase_score + co_purchase_increment,
                    score_cap,
                ),
                "overall_score": func.least(
                    ProductSimilarity.overall_score + overall_increment, score_cap
                ),
                "sample_size": ProductSimilarity.sample_size + 1,
                "computed_at": now_utc(),
            },
        )
        await self.session.execute(stmt)
