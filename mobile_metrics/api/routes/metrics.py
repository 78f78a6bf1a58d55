from typing import Any, Dict

import redis
from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from mobile_metrics.core import config
from mobile_metrics.core.security import require_api_key
from mobile_metrics.schemas.metric import Metric
from mobile_metrics.services.metrics_store import incr, snapshot
from mobile_metrics.services.normalizer import normalize_metric
from mobile_metrics.services.redis_queue import dlq_len, enqueue, push_dlq, queue_len
from mobile_metrics.services.validator import validate_metric

router = APIRouter()


def reject(body: Dict[str, Any], reason: str, counter: str) -> HTTPException:
    incr("rejected_total", 1)
    incr(counter, 1)
    logger.bind(reason=reason, client_id=body.get("clientId")).info("metric rejected")

    if config.DLQ_REJECTED:
        try:
            push_dlq({"endpoint": "/metrics", "payload": body}, reason)
        except redis.RedisError as e:
            logger.warning("dlq push failed: {!r}", e)

    return HTTPException(status_code=400, detail=reason)


@router.post("/metrics", status_code=202)
async def ingest_metric(request: Request, _=Depends(require_api_key)):
    incr("requests_total", 1)

    try:
        raw = await request.json()
    except ValueError:
        incr("bad_json_total", 1)
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if not isinstance(raw, dict):
        incr("bad_json_total", 1)
        raise HTTPException(status_code=400, detail="Invalid JSON")

    try:
        metric = Metric.model_validate(raw)
    except ValidationError as e:
        logger.bind(errors=e.errors(include_url=False)).debug("metric payload did not parse")
        raise reject(raw, "invalid metric payload", "bad_payload_total")

    ok, reason = validate_metric(metric)
    if not ok:
        raise reject(raw, reason, "invalid_total")

    payload = normalize_metric(metric)
    try:
        enqueue("/metrics", payload)
    except redis.RedisError as e:
        logger.warning("enqueue failed: {!r}", e)
        raise HTTPException(status_code=503, detail="metrics queue unavailable")

    incr("accepted_total", 1)
    return {"status": "queued"}


@router.get("/metrics/stats")
def get_stats():
    out = snapshot()
    try:
        out["queue_len"] = queue_len()
        out["dlq_len"] = dlq_len()
    except redis.RedisError as e:
        logger.warning("queue length unavailable: {!r}", e)
    return out
