from __future__ import annotations

import hashlib
import logging

from fastapi import HTTPException, Request
from redis.exceptions import RedisError

from task_manager.config import settings
from task_manager.redis_client import redis_client

logger = logging.getLogger(__name__)

def _hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()[:24]

def _client_ip(request: Request) -> str:
    return (request.client.host if request.client else "unknown").strip()

# fixed-window limiter keyed on client ip, using redis INCR + EXPIRE
def rate_limit(name: str, limit_per_window: int, window_seconds: int):
    def _dep(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return

        key = f"rl:{name}:{_hash(_client_ip(request))}"
        try:
            pipe = redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, window_seconds, nx=True)
            count, _ = pipe.execute()
        except RedisError as e:
            # fail-open if redis is down
            logger.warning("rate limit %s skipped, redis unavailable: %s", name, e)
            return

        if int(count) > int(limit_per_window):
            raise HTTPException(status_code=429, detail="rate_limited")

    return _dep
