"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on ``enforce_rate_limit`` only.
- Injectable: the limiter comes from ``get_rate_limiter`` via ``Depends``, so
  tests or other deployments override it with ``app.dependency_overrides``.
- One shared budget per client identity (best-effort client IP).
"""

from __future__ import annotations

import logging
import threading
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import FixedWindowRateLimiter, InMemoryRateLimitStore
from app.core.client_identity import UNKNOWN_IDENTITY, resolve_client_identity
from app.core.config import settings
from app.core.logging import hash_for_log

logger = logging.getLogger(__name__)

RATE_LIMIT_DETAIL = "Too many requests. Please try again later."

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None
_limiter_lock = threading.Lock()


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt
    with an empty store.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_max_requests,
        settings.app.rate_limit_window_ms,
    )

    limiter = _limiter
    if limiter is not None and _limiter_config == config:
        return limiter

    # Sync dependencies run in the threadpool; only one thread may build
    with _limiter_lock:
        if _limiter is None or _limiter_config != config:
            _limiter = FixedWindowRateLimiter(
                InMemoryRateLimitStore(),
                max_requests=config[0],
                window_ms=config[1],
            )
            _limiter_config = config
            logger.info(
                "rate_limit.configured",
                extra={"limit": config[0], "window_ms": config[1]},
            )
        return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next request starts with an empty store."""

    global _limiter, _limiter_config
    with _limiter_lock:
        _limiter = None
        _limiter_config = None


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
    }
    if result.retry_after_seconds is not None:
        headers["Retry-After"] = str(result.retry_after_seconds)
    return headers


async def enforce_rate_limit(
    request: Request,
    limiter: Annotated[AbstractRateLimiter, Depends(get_rate_limiter)],
) -> RateLimitResult | None:
    """FastAPI dependency enforcing the per-client budget.

    When enabled, consumes one unit from the caller's budget and stores the
    result on ``request.state.rate_limit``. If the budget is exhausted,
    raises HTTP 429.

    Args:
        request: FastAPI request.
        limiter: Limiter resolved through dependency injection.

    Returns:
        The RateLimitResult, or None when rate limiting is disabled.

    Raises:
        HTTPException: 429 Too Many Requests when the budget is exhausted.
    """

    if not settings.app.rate_limit_enabled:
        request.state.rate_limit = None
        return None

    identity = resolve_client_identity(request.headers)
    log_fields = {
        "identity_hash": hash_for_log(identity),
        "identity_known": identity != UNKNOWN_IDENTITY,
        "request_path": request.url.path,
    }

    result = limiter.check_and_consume(identity)
    request.state.rate_limit = result

    if result.allowed:
        logger.info(
            "rate_limit.allowed",
            extra={**log_fields, "limit": result.limit, "remaining": result.remaining},
        )
        return result

    logger.warning(
        "rate_limit.exceeded",
        extra={
            **log_fields,
            "limit": result.limit,
            "retry_after_s": result.retry_after_seconds,
        },
    )

    headers = None
    if settings.app.rate_limit_include_headers:
        headers = _rate_limit_headers(result)

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=RATE_LIMIT_DETAIL,
        headers=headers,
    )
