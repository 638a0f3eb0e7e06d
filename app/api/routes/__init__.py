from __future__ import annotations

from app.api.routes.contact import router as contact_router
from app.api.routes.health import router as health_router
from app.api.routes.image_search import router as image_search_router

__all__ = ["contact_router", "health_router", "image_search_router"]
