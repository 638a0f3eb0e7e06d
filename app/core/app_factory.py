"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import contact_router, health_router, image_search_router
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Dealership Intake API",
        description=(
            "Public intake endpoints for a car dealership site: contact form "
            "submissions and AI image search quota. Each client (best-effort "
            "IP from X-Forwarded-For / X-Real-IP) gets a fixed-window budget; "
            "exhausted budgets return 429 with Retry-After."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(contact_router, prefix="/v1")
    app.include_router(image_search_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
