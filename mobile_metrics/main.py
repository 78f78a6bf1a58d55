# mobile_metrics/main.py
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from mobile_metrics.api.routes import metrics
from mobile_metrics.core import config
from mobile_metrics.core.logging import configure_logging
from mobile_metrics.services.health import Pingable, check_health
from mobile_metrics.services.redis_queue import get_redis

app = FastAPI(title="Mobile Metrics Ingest Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(metrics.router)


def get_pingable() -> Pingable:
    return get_redis()


@app.on_event("startup")
async def startup():
    configure_logging(
        service_name=config.SERVICE_NAME, environment=config.APP_ENV, level=config.LOG_LEVEL
    )
    logger.info("ingest service started, queue={}", config.REDIS_QUEUE_KEY)


@app.get("/healthz")
def healthz(dep: Pingable = Depends(get_pingable)):
    ok, body = check_health(dep)
    return JSONResponse(status_code=200 if ok else 503, content=body)
