"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata
- A shared ``TooManyRequests`` response documented on every rate limited
  operation

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

RATE_LIMITED_PATH_SUFFIXES = ("/contact", "/image-search/quota")


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and 429 documentation."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        responses = components.setdefault("responses", {})
        responses.setdefault(
            "TooManyRequests",
            {
                "description": "The client has used up its budget for the current window.",
                "headers": {
                    "Retry-After": {
                        "description": "Seconds until the window resets.",
                        "schema": {"type": "integer"},
                    },
                    "X-RateLimit-Limit": {
                        "description": "Actions allowed per window.",
                        "schema": {"type": "integer"},
                    },
                    "X-RateLimit-Remaining": {
                        "description": "Actions left in the current window.",
                        "schema": {"type": "integer"},
                    },
                },
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Contact",
                "description": "Visitor contact form intake (rate limited per client).",
            },
            {
                "name": "Image search",
                "description": "Quota for AI-assisted car image searches (rate limited per client).",
            },
            {
                "name": "Health",
                "description": "Liveness checks.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            if not path.endswith(RATE_LIMITED_PATH_SUFFIXES):
                continue
            for method_obj in methods.values():
                if isinstance(method_obj, dict):
                    method_obj.setdefault("responses", {}).setdefault(
                        "429", {"$ref": "#/components/responses/TooManyRequests"}
                    )

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
