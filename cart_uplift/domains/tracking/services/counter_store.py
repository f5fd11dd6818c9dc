"""
Per-shop tracking counters kept in Redis

Counters live in one hash per shop, one field per event type.
"""

from typing import Dict, Optional

from cart_uplift.core.logging import get_logger
from cart_uplift.core.redis import RedisClient, get_redis_client_instance
from cart_uplift.shared.constants.redis import TRACKING_COUNTERS_KEY_PREFIX
from cart_uplift.shared.helpers import to_int

logger = get_logger(__name__)


class TrackingCounterStore:
    def __init__(self, redis_client: Optional[RedisClient] = None):
        self.redis = redis_client or get_redis_client_instance()

    @staticmethod
    def key_for(shop_id: str) -> str:
        return f"{TRACKING_COUNTERS_KEY_PREFIX}:{shop_id}"

    async def increment(self, shop_id: str, event_type: str, amount: int = 1) -> Optional[int]:
        """Increment a counter. Failures are logged and reported as None."""
        try:
            return await self.redis.hincrby(self.key_for(shop_id), event_type, amount)
        except Exception as e:
            logger.warning(
                "Failed to increment tracking counter",
                shop_id=shop_id,
                event=event_type,
                error=str(e),
            )
            return None

    async def get_counters(self, shop_id: str) -> Dict[str, int]:
        raw = await self.redis.hgetall(self.key_for(shop_id))
        return {field: to_int(value) for field, value in (raw or {}).items()}
