import redis
from loguru import logger

from mobile_metrics.core.config import REDIS_URL

_client = None
PREFIX = "metrics:ingest"

def r():
    global _client
    if _client is None:
        _client = redis.Redis.from_url(REDIS_URL, decode_responses=True)
    return _client

# counters are best effort, a Redis outage must not fail ingest

def incr(name: str, n: int = 1):
    try:
        r().incrby(f"{PREFIX}:{name}", n)
    except redis.RedisError as e:
        logger.debug("counter {} not updated: {!r}", name, e)

def set_gauge(name: str, value):
    try:
        r().set(f"{PREFIX}:{name}", value)
    except redis.RedisError as e:
        logger.debug("gauge {} not updated: {!r}", name, e)

def snapshot() -> dict:
    out = {}
    try:
        for k in r().scan_iter(f"{PREFIX}:*"):
            out[k[len(PREFIX) + 1:]] = r().get(k)
    except redis.RedisError as e:
        logger.warning("counter snapshot failed: {!r}", e)
    return out
