"""
Structural validation of client metric payloads.

``validate_metric`` never raises for a parsed ``Metric``: every failure is
returned as ``(False, reason)``, and the first failing check decides the
reason. Callers reject the payload and surface the reason as-is.
"""
import re
from typing import Callable, Dict, Tuple

from mobile_metrics.schemas.metric import EventType, Metric, MetricData

CLIENT_ID_MAX_LENGTH = 128
EVENT_TYPE_MAX_LENGTH = 128
SECURITY_METRICS_MAX_LENGTH = 30

MISSING_CLIENT_ID = "missing clientId in payload"
CLIENT_ID_TOO_LONG = f"clientId exceeded maximum length of {CLIENT_ID_MAX_LENGTH}"
MISSING_EVENT_TYPE = "missing type in payload"
EVENT_TYPE_TOO_LONG = f"type exceeded maximum length of {EVENT_TYPE_MAX_LENGTH}"
INVALID_TIMESTAMP = "timestamp must be a valid number"
MISSING_DATA = "missing metrics data in payload"
UNKNOWN_TYPE = "payload type unknown"
MISSING_APP = "missing data.app in init-type payload"
MISSING_DEVICE = "missing data.device in init-type payload"
MISSING_SECURITY = "missing data.security in security-type payload"
SECURITY_EMPTY = "data.security cannot be empty"
SECURITY_TOO_LONG = f"maximum length of data.security {SECURITY_METRICS_MAX_LENGTH}"
SECURITY_ELEMENT_MISSING = "invalid element in data.security at position {index}, {field} must be included"

Result = Tuple[bool, str]

_INT64_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def is_int64(text: str) -> bool:
    """Base-10 signed 64-bit integer, no whitespace or separators."""
    if not _INT64_RE.fullmatch(text):
        return False
    return _INT64_MIN <= int(text) <= _INT64_MAX


def _validate_init(data: MetricData) -> Result:
    if data.app is None:
        return False, MISSING_APP
    if data.device is None:
        return False, MISSING_DEVICE
    return True, ""


def _validate_security(data: MetricData) -> Result:
    # security events carry the init fields too
    ok, reason = _validate_init(data)
    if not ok:
        return False, reason

    if data.security is None:
        return False, MISSING_SECURITY
    if len(data.security) == 0:
        return False, SECURITY_EMPTY
    if len(data.security) > SECURITY_METRICS_MAX_LENGTH:
        return False, SECURITY_TOO_LONG

    for i, sm in enumerate(data.security):
        for field in ("id", "name", "passed"):
            if getattr(sm, field) is None:
                return False, SECURITY_ELEMENT_MISSING.format(index=i, field=field)
    return True, ""


_RULES: Dict[EventType, Callable[[MetricData], Result]] = {
    EventType.INIT: _validate_init,
    EventType.SECURITY: _validate_security,
}


def validate_metric(metric: Metric) -> Result:
    if metric.client_id == "":
        return False, MISSING_CLIENT_ID
    if len(metric.client_id) > CLIENT_ID_MAX_LENGTH:
        return False, CLIENT_ID_TOO_LONG

    if metric.event_type == "":
        return False, MISSING_EVENT_TYPE
    if len(metric.event_type) > EVENT_TYPE_MAX_LENGTH:
        return False, EVENT_TYPE_TOO_LONG

    if metric.client_timestamp and not is_int64(metric.client_timestamp):
        return False, INVALID_TIMESTAMP

    if metric.data is None or metric.data.is_empty():
        return False, MISSING_DATA

    try:
        rule = _RULES[EventType(metric.event_type)]
    except ValueError:
        return False, UNKNOWN_TYPE
    return rule(metric.data)
