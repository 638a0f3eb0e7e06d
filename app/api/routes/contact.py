from fastapi import APIRouter, Depends, Request, status

from app.core.rate_limit import enforce_rate_limit
from app.schemas.contact import ContactSubmissionRequest, ContactSubmissionResponse
from app.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])

_contact_service = ContactService()


@router.post(
    "/contact",
    response_model=ContactSubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
async def submit_contact_form(
    payload: ContactSubmissionRequest,
    request: Request,
) -> ContactSubmissionResponse:
    """Accept a contact form submission.

    Rate limited per client. Screening failures surface as 400 through the
    global AppError handler.

    Args:
        payload: Contact form fields.
        request: Incoming request (carries the rate limit result).

    Returns:
        ContactSubmissionResponse with the pending submission.
    """
    submission = _contact_service.submit(payload)

    rate_limit = getattr(request.state, "rate_limit", None)
    return ContactSubmissionResponse(
        submission=submission,
        rate_limit_remaining=rate_limit.remaining if rate_limit else None,
    )
