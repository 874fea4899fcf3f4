from __future__ import annotations

from pydantic import ValidationError
from redis import Redis

from signaldesk.schemas.provider import UpstreamResult


def _get_client(redis_url: str) -> Redis:
    return Redis.from_url(redis_url)


class ResultCache:
    """Short-lived redis store for live upstream results.

    Redis being unreachable is never an error for callers: reads become
    misses and writes are dropped. A ttl of zero disables the cache.
    """

    def __init__(self, redis_url: str, ttl_seconds: int) -> None:
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, cache_key: str) -> UpstreamResult | None:
        if not self.enabled:
            return None
        try:
            raw = _get_client(self.redis_url).get(cache_key)
        except Exception:
            return None
        if not raw:
            return None
        try:
            return UpstreamResult.model_validate_json(raw)
        except ValidationError:
            return None

    def put(self, result: UpstreamResult) -> None:
        if not self.enabled or not result.is_live:
            return
        try:
            _get_client(self.redis_url).setex(
                result.cache_key, self.ttl_seconds, result.model_dump_json()
            )
        except Exception:
            return
