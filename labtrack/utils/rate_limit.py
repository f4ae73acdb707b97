# labtrack/utils/rate_limit.py
import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from labtrack.middleware.tracing import TRACE_ID_CTX_VAR

logger = logging.getLogger("labtrack")

limiter = Limiter(key_func=get_remote_address, default_limits=[])


def user_rate_key(request: Request) -> str:
    """Return a per-user key when available; otherwise fall back to IP.

    ``get_current_user`` sets request.state.user_id for authenticated routes.
    """
    uid = getattr(request.state, "user_id", None)
    if uid:
        return str(uid)
    return get_remote_address(request)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    reset_time = getattr(exc, "reset_time", None)
    retry_after = max(1, int(reset_time - time.time())) if reset_time else 60
    logger.info({
        "function": "rate_limit",
        "path": str(request.url.path),
        "client": get_remote_address(request),
    })
    return JSONResponse(
        status_code=429,
        headers={"Retry-After": str(retry_after)},
        content={
            "code": "TOO_MANY_REQUESTS",
            "message": "Too many requests. Please wait a bit and try again.",
            "details": str(getattr(exc, "detail", "") or ""),
            "trace_id": TRACE_ID_CTX_VAR.get(),
        },
    )
