import json
import logging
import sys
from typing import Any, Dict

from loguru import logger


class InterceptHandler(logging.Handler):
    """Route stdlib logging (uvicorn, redis) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _serialize(message, metadata: Dict[str, Any]) -> None:
    record = message.record
    payload: Dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name.lower(),
        "message": record["message"],
        "logger": record["name"],
        "service": metadata["service"],
        "env": metadata["env"],
    }
    if record["extra"]:
        payload.update(record["extra"])
    if record["exception"]:
        payload["exception"] = repr(record["exception"].value)
    sys.stdout.write(json.dumps(payload, default=str) + "\n")
    sys.stdout.flush()


def configure_logging(*, service_name: str, environment: str, level: str = "INFO") -> None:
    """One JSON object per line on stdout; stdlib loggers bridged in."""
    logger.remove()
    metadata = {"service": service_name, "env": environment}
    logger.add(lambda m: _serialize(m, metadata), level=level, backtrace=False, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
