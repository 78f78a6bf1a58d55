from typing import Any, Dict, Protocol, Tuple

from loguru import logger


class Pingable(Protocol):
    """Anything the service depends on that can answer a ping (redis.Redis does)."""

    def ping(self) -> Any: ...


def check_health(dep: Pingable) -> Tuple[bool, Dict[str, str]]:
    try:
        dep.ping()
    except Exception as e:
        logger.warning("health check ping failed: {!r}", e)
        return False, {"status": "degraded", "error": str(e)}
    return True, {"status": "ok"}
