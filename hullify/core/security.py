from fastapi import Header, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_429_TOO_MANY_REQUESTS
from datetime import datetime, timezone
from .config import settings
from .cache import cache

def require_api_key(x_api_key: str | None = Header(default=None, alias="x-api-key")):
    """
    Header-based API key check. Unset API_KEY means open access (dev).
    """
    if not settings.API_KEY:
        return
    if x_api_key != settings.API_KEY:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid API key")

def rate_limit(request: Request):
    """
    Per-minute request cap keyed by API key (if present) and client IP.
    Best-effort: counters live in this process only.
    """
    rpm = max(1, settings.RATE_LIMIT_RPM)
    client_ip = request.client.host if request.client else "unknown"
    api_key = request.headers.get("x-api-key") or "anon"
    minute_bucket = datetime.now(timezone.utc).strftime("%Y%m%d%H%M")
    key = f"rate:{api_key}:{client_ip}:{minute_bucket}"

    current = cache.get(key)
    if current is None:
        cache.set(key, "1")  # first hit
        return
    try:
        count = int(current) + 1
    except ValueError:
        count = 1
    if count > rpm:
        raise HTTPException(status_code=HTTP_429_TOO_MANY_REQUESTS, detail="Rate limit exceeded")
    cache.set(key, str(count))
