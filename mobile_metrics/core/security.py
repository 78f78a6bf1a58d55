from typing import Optional

from fastapi import Header, HTTPException
from mobile_metrics.core import config

def require_api_key(x_api_key: Optional[str] = Header(default=None, alias="X-API-Key")):
    if config.API_KEY and x_api_key != config.API_KEY:
        raise HTTPException(status_code=401, detail="Unauthorized (invalid API key)")
    return True
