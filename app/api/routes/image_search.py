from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.adapters.rate_limit.base import RateLimitResult
from app.core.rate_limit import enforce_rate_limit

router = APIRouter(tags=["Image search"])


class ImageSearchQuotaResponse(BaseModel):
    """Outcome of reserving one image search from the caller's budget."""

    allowed: bool = True
    remaining: int | None = Field(
        default=None,
        description="Searches left in the current window (null when rate limiting is off).",
    )
    limit: int | None = None


@router.post("/image-search/quota", response_model=ImageSearchQuotaResponse)
async def reserve_image_search(
    result: Annotated[RateLimitResult | None, Depends(enforce_rate_limit)],
) -> ImageSearchQuotaResponse:
    """Reserve one AI image search for the calling client.

    Must be called before an image is sent to the vision provider; a 429
    means the client has used up its searches for the current window.
    """

    if result is None:
        return ImageSearchQuotaResponse()
    return ImageSearchQuotaResponse(remaining=result.remaining, limit=result.limit)
