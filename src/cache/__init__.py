"""Cache module -- redis artifact store and freshness-gated access."""

from src.cache.artifacts import ArtifactCache, resolve_max_age
from src.cache.redis_client import RedisClient

__all__ = ["ArtifactCache", "RedisClient", "resolve_max_age"]
