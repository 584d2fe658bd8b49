"""Redis connection and raw artifact get/set."""

from typing import Optional

import redis

from src.utils.config import settings
from src.utils.errors import CacheUnavailable
from src.utils.logger import get_logger

log = get_logger(__name__)


class RedisClient:
    """Thin wrapper around redis-py storing serialized artifacts by key.

    No expiry is pushed into redis; freshness is decided by the reader from
    the timestamp embedded in each artifact.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        db: int | None = None,
        client: redis.Redis | None = None,
    ):
        self.client = client or redis.Redis(
            host=host or settings.redis_host,
            port=port or settings.redis_port,
            password=password or settings.redis_password or None,
            db=db if db is not None else settings.redis_db,
            decode_responses=True,
            socket_timeout=settings.request_timeout,
        )

    # -- Artifacts ----------------------------------------------------------

    def get_artifact(self, key: str) -> Optional[str]:
        """Return the stored value for *key*, or None when absent or empty."""
        try:
            value = self.client.get(key)
        except redis.RedisError as exc:
            raise CacheUnavailable(f"redis get failed for {key}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise CacheUnavailable(f"undecodable value stored under {key}: {exc}") from exc
        return value or None

    def set_artifact(self, key: str, value: str) -> bool:
        """Store *value* under *key* in a single SET."""
        try:
            return bool(self.client.set(key, value))
        except redis.RedisError as exc:
            raise CacheUnavailable(f"redis set failed for {key}: {exc}") from exc

    # -- Utilities ----------------------------------------------------------

    def delete(self, *keys: str) -> int:
        """Remove keys (useful in tests)."""
        try:
            return self.client.delete(*keys)
        except redis.RedisError as exc:
            raise CacheUnavailable(f"redis delete failed: {exc}") from exc

    def ping(self) -> bool:
        return self.client.ping()
