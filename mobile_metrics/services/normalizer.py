from datetime import datetime, timezone
from typing import Any, Dict

from mobile_metrics.core.config import APP_ENV
from mobile_metrics.schemas.metric import Metric

def now_iso():
    return datetime.now(timezone.utc).isoformat()

def normalize_metric(m: Metric) -> Dict[str, Any]:
    """Downstream document for a metric that passed validation."""
    data = m.data.model_dump(by_alias=True, exclude_none=True) if m.data else {}
    return {
        "@timestamp": now_iso(),
        "event": {"type": "metric", "kind": m.event_type},
        "client": {"id": m.client_id},
        "client_timestamp": int(m.client_timestamp) if m.client_timestamp else None,
        "env": APP_ENV,
        **data,
    }
