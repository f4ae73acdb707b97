import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_HEADER = "x-trace-id"
TRACE_ID_CTX_VAR: ContextVar[str] = ContextVar("trace_id", default="")


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add a trace_id to every request and response.
    An incoming x-trace-id is reused so a caller can follow one request
    across services; otherwise a new id is generated. The id is also stored
    in a context variable for logging and error envelopes.
    """
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = (request.headers.get(TRACE_ID_HEADER) or "").strip()
        trace_id = incoming[:64] if incoming else str(uuid.uuid4())
        TRACE_ID_CTX_VAR.set(trace_id)
        request.state.trace_id = trace_id

        response = await call_next(request)

        # header names are case-insensitive
        response.headers[TRACE_ID_HEADER] = trace_id
        return response
