import os

def env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")

APP_ENV = os.getenv("APP_ENV", "dev")
SERVICE_NAME = os.getenv("SERVICE_NAME", "mobile-metrics")

# empty key disables the X-API-Key check
API_KEY = os.getenv("INGEST_API_KEY", "")

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

# Redis queue keys (List)
REDIS_QUEUE_KEY = os.getenv("REDIS_QUEUE_KEY", "metrics:queue")
REDIS_DLQ_KEY = os.getenv("REDIS_DLQ_KEY", "metrics:dlq")

# push rejected payloads to the DLQ for inspection
DLQ_REJECTED = env_bool("DLQ_REJECTED", "false")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if o.strip()
]
