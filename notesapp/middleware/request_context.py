"""
Request Context Middleware

Assigns every request an id (or reuses a sane incoming X-Request-ID),
exposes it to logging, and reports it back with the processing time.

This middleware deliberately does not resolve tenants. The tenant is
derived from the verified bearer token in notesapp.api.deps, never from
hosts, headers or paths supplied by the client.
"""
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from notesapp.utils.logging import get_logger, request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Per-request id and timing headers."""

    async def dispatch(self, request: Request, call_next):
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        request_id = incoming if _VALID_REQUEST_ID.match(incoming) else str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        process_time = time.perf_counter() - start_time
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.6f}"

        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code} ({process_time:.3f}s)"
        )
        return response
