"""HTTP middleware for request correlation and rate limit headers.

The middleware:
- Accepts an incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars for log correlation
- Adds request id and duration headers to the response, including on
  unhandled errors, which are turned into the generic 500 body here
- Echoes the caller's remaining budget on successful throttled requests

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from app.core.config import settings
from app.core.exception_handlers import general_exception_handler
from app.core.logging import clear_request_id, set_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """Attach a correlation id to the request/response pair.

    If the client provides the configured request id header (default
    ``X-Request-ID``) that value is reused, otherwise a UUID4 is generated.
    The id lives in contextvars for the duration of the request and is cleared
    afterwards.

    When a rate limited endpoint admitted the request, ``X-RateLimit-Limit``
    and ``X-RateLimit-Remaining`` are added so clients can pace themselves.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response: The downstream response with correlation headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception as exc:
        # The fallback handler runs outside this middleware, after the id is cleared
        response = await general_exception_handler(request, exc)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")

    rate_limit = getattr(request.state, "rate_limit", None)
    if rate_limit is not None and rate_limit.allowed and settings.app.rate_limit_include_headers:
        response.headers.setdefault("X-RateLimit-Limit", str(rate_limit.limit))
        response.headers.setdefault("X-RateLimit-Remaining", str(rate_limit.remaining))

    return response
