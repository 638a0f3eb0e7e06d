from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe for load balancers and monitors.

    Never rate limited, so probes cannot exhaust a client budget.

    Returns:
        dict: ``status`` set to "ok" and whether rate limiting is active.
    """

    return {"status": "ok", "rate_limit_enabled": settings.app.rate_limit_enabled}
