"""
Schema bootstrap

    python -m cart_uplift.core.database.create_tables [drop]
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

from cart_uplift.core.database.engine import get_engine
from cart_uplift.core.database.models import Base
from cart_uplift.core.logging import get_logger

logger = get_logger(__name__)


async def _run_ddl(action) -> bool:
    engine = await get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(action)
    except SQLAlchemyError as e:
        logger.error(f"❌ Schema {action.__name__} failed", error=str(e))
        return False
    logger.info(f"✅ Schema {action.__name__} done", tables=len(Base.metadata.tables))
    return True


async def create_all_tables() -> bool:
    """Create missing tables; existing ones are left alone"""
    return await _run_ddl(Base.metadata.create_all)


async def drop_all_tables() -> bool:
    return await _run_ddl(Base.metadata.drop_all)


if __name__ == "__main__":
    drop = sys.argv[1:2] == ["drop"]
    ok = asyncio.run(drop_all_tables() if drop else create_all_tables())
    sys.exit(0 if ok else 1)
