import json
from typing import Any, Dict, Optional

import redis

from mobile_metrics.core.config import REDIS_URL, REDIS_QUEUE_KEY, REDIS_DLQ_KEY
from mobile_metrics.services.metrics_store import incr, set_gauge

# Singleton Redis client
_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    """Return a singleton Redis client (sync)."""
    global _client
    if _client is None:
        _client = redis.Redis.from_url(REDIS_URL, decode_responses=True)
    return _client


def enqueue(endpoint: str, payload: Dict[str, Any]) -> None:
    """
    Push the envelope the downstream pipeline reads:
    { "endpoint": "...", "payload": {...} }

    Raises redis.RedisError when the queue is unreachable.
    """
    r = get_redis()
    event = {"endpoint": endpoint, "payload": payload}
    r.rpush(REDIS_QUEUE_KEY, json.dumps(event))

    incr("queued_total", 1)
    set_gauge("queue_len", r.llen(REDIS_QUEUE_KEY))


def push_dlq(event: Dict[str, Any], error: str) -> None:
    """Push a rejected payload to the DLQ with the rejection reason."""
    r = get_redis()
    event = {**event, "_error": error}
    r.rpush(REDIS_DLQ_KEY, json.dumps(event, default=str))

    incr("dlq_total", 1)
    set_gauge("dlq_len", r.llen(REDIS_DLQ_KEY))


def queue_len() -> int:
    r = get_redis()
    return int(r.llen(REDIS_QUEUE_KEY))


def dlq_len() -> int:
    r = get_redis()
    return int(r.llen(REDIS_DLQ_KEY))
