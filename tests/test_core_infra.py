"""
Tests for the logging, exception, Redis and database helpers
"""

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisLibraryConnectionError
from redis.exceptions import TimeoutError as RedisLibraryTimeout

from cart_uplift.core.config import settings
from cart_uplift.core.database.engine import get_database_url
from cart_uplift.core.exceptions import (
    DataStorageError,
    DatabaseQueryError,
    RedisConnectionError,
    RedisTimeoutError,
)
from cart_uplift.core.logging import JSONFormatter, StructuredLogger
from cart_uplift.core.logging.logger import render_fields
from cart_uplift.core.redis import RedisClient, RedisConnectionConfig, check_redis_health


def _record(message="Attributed order", **fields):
    record = logging.LogRecord("cart_uplift.test", logging.INFO, __file__, 10, message, None, None)
    record.extra_fields = fields
    return record


class TestStructuredLogging:
    def test_render_fields_quotes_values_with_spaces(self):
        assert render_fields({"shop_id": "a.com", "reason": "not clicked"}) == (
            'shop_id=a.com | reason="not clicked"'
        )

    def test_bound_context_is_added_to_every_message(self, caplog):
        log = StructuredLogger(logging.getLogger("cart_uplift.test.bind")).bind(shop_id="a.com")

        with caplog.at_level(logging.WARNING, logger="cart_uplift.test.bind"):
            log.warning("Counter failed", event="click", order_id=None)

        record = caplog.records[-1]
        assert record.getMessage() == "Counter failed | shop_id=a.com | event=click"
        assert record.extra_fields == {"shop_id": "a.com", "event": "click"}

    def test_json_formatter_lifts_identifiers_into_context(self):
        entry = json.loads(
            JSONFormatter().format(_record(shop_id="a.com", order_id="1001", revenue="20.00"))
        )

        assert entry["context"] == {"shop_id": "a.com", "order_id": "1001"}
        assert entry["fields"] == {"revenue": "20.00"}
        assert "location" not in entry

    def test_json_formatter_location(self):
        entry = json.loads(JSONFormatter(include_location=True).format(_record()))
        assert entry["location"].endswith(":10")


class TestExceptions:
    def test_storage_error_details(self):
        cause = OSError("disk full")
        error = DataStorageError("Failed to store click", data_type="tracking_event", cause=cause)

        payload = error.to_dict()
        assert payload["error_code"] == "DATA_STORAGE_ERROR"
        assert payload["details"] == {"operation": "unknown", "data_type": "tracking_event"}
        assert "disk full" in payload["cause"]
        assert str(error) == "[DATA_STORAGE_ERROR] Failed to store click"

    def test_query_error_keeps_caller_details(self):
        error = DatabaseQueryError("replace failed", query="replace_for_shop", details={"records": 4})
        assert error.details == {"records": 4, "query": "replace_for_shop"}


@pytest.fixture
def redis_backend():
    backend = MagicMock()
    backend.ping = AsyncMock(return_value=True)
    backend.hincrby = AsyncMock(return_value=3)
    backend.aclose = AsyncMock()
    with patch("cart_uplift.core.redis.client.Redis", return_value=backend):
        yield backend


class TestRedisClient:
    async def test_connects_lazily_and_runs_command(self, redis_backend):
        client = RedisClient(RedisConnectionConfig())
        assert not client.connected

        assert await client.hincrby("tracking:counters:a.com", "click") == 3
        assert client.connected
        redis_backend.hincrby.assert_awaited_once_with("tracking:counters:a.com", "click", 1)

    async def test_library_timeout_is_translated(self, redis_backend):
        redis_backend.hincrby.side_effect = RedisLibraryTimeout("slow")
        client = RedisClient(RedisConnectionConfig())

        with pytest.raises(RedisTimeoutError) as exc_info:
            await client.hincrby("k", "click")
        assert exc_info.value.details["operation"] == "hincrby"

    async def test_failed_connect_is_translated(self, redis_backend):
        redis_backend.ping.side_effect = RedisLibraryConnectionError("refused")
        client = RedisClient(RedisConnectionConfig(password="secret"))

        with pytest.raises(RedisConnectionError) as exc_info:
            await client.hgetall("k")
        assert "password" not in exc_info.value.details["connection"]
        redis_backend.aclose.assert_awaited_once()
        assert not client.connected

    async def test_health_reports_error_without_raising(self, redis_backend):
        redis_backend.ping.side_effect = RedisLibraryConnectionError("refused")

        report = await check_redis_health(RedisClient(RedisConnectionConfig(host="cache")))

        assert report.is_healthy is False
        assert "refused" in report.error_message
        assert report.connection_info["host"] == "cache"

    def test_tls_is_skipped_for_local_redis(self):
        assert "ssl" not in RedisConnectionConfig(tls=True).client_kwargs()
        assert RedisConnectionConfig(host="cache", tls=True).client_kwargs()["ssl"] is True


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u:p@db/shop", "postgresql+asyncpg://u:p@db/shop"),
        ("postgresql://u:p@db/shop", "postgresql+asyncpg://u:p@db/shop"),
        ("postgresql+asyncpg://u:p@db/shop", "postgresql+asyncpg://u:p@db/shop"),
    ],
)
def test_database_url_uses_asyncpg(monkeypatch, url, expected):
    monkeypatch.setattr(settings.database, "DATABASE_URL", url)
    assert get_database_url() == expected
