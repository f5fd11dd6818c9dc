"""
Redis connection settings and health report
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel

from cart_uplift.shared.constants.redis import (
    DEFAULT_REDIS_DB,
    DEFAULT_REDIS_HEALTH_CHECK_INTERVAL,
    DEFAULT_REDIS_PORT,
)


class RedisConnectionConfig(BaseModel):
    host: str = "localhost"
    port: int = DEFAULT_REDIS_PORT
    password: Optional[str] = None
    db: int = DEFAULT_REDIS_DB
    tls: bool = False
    connect_timeout: float = 5.0
    command_timeout: float = 5.0
    health_check_interval: int = DEFAULT_REDIS_HEALTH_CHECK_INTERVAL

    @classmethod
    def from_settings(cls, redis_settings) -> "RedisConnectionConfig":
        return cls(
            host=redis_settings.REDIS_HOST,
            port=redis_settings.REDIS_PORT,
            password=redis_settings.REDIS_PASSWORD or None,
            db=redis_settings.REDIS_DB,
            tls=redis_settings.REDIS_TLS,
        )

    def client_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for redis.asyncio.Redis"""
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "password": self.password,
            "db": self.db,
            "decode_responses": True,
            "socket_connect_timeout": self.connect_timeout,
            "socket_timeout": self.command_timeout,
            "retry_on_timeout": True,
            "health_check_interval": self.health_check_interval,
        }
        # Local Redis never terminates TLS
        if self.tls and self.host not in ("localhost", "127.0.0.1"):
            kwargs.update(ssl=True, ssl_cert_reqs=None)
        return kwargs

    def describe(self) -> Dict[str, Any]:
        """Connection target without the password"""
        return {"host": self.host, "port": self.port, "db": self.db, "tls": self.tls}


class RedisHealthStatus(BaseModel):
    is_healthy: bool
    connection_info: Dict[str, Any]
    last_check: str
    error_message: Optional[str] = None
    response_time_ms: Optional[float] = None
