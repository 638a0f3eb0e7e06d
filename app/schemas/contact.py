"""Pydantic schemas for contact form submissions."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ContactMethod = Literal["email", "phone", "whatsapp"]
InquiryType = Literal["general", "sales", "service", "test_drive", "financing", "other"]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ContactSubmissionRequest(BaseModel):
    """Contact form payload as submitted by a site visitor."""

    name: str = Field(..., min_length=2, max_length=120, description="Visitor's full name.")
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254, description="Reply-to e-mail address.")
    phone: str = Field(..., min_length=10, max_length=32, description="Phone number, free format.")
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, description="Message body (multi-line allowed).")
    contact_method: ContactMethod = Field(
        "email",
        description="How the visitor prefers to be contacted back.",
    )
    inquiry_type: InquiryType = Field(
        "general",
        description="Topic used to route the inquiry to the right team.",
    )


class ContactSubmission(BaseModel):
    """Accepted submission, awaiting follow-up by the dealership."""

    id: str
    status: Literal["PENDING"] = "PENDING"
    created_at: datetime
    name: str
    email: str
    phone: str
    subject: str
    message: str
    contact_method: ContactMethod
    inquiry_type: InquiryType


class ContactSubmissionResponse(BaseModel):
    """Response returned once a submission is accepted."""

    success: bool = True
    message: str = "Message sent successfully."
    submission: ContactSubmission
    rate_limit_remaining: int | None = Field(
        default=None,
        description="Submissions left in the current window (null when rate limiting is off).",
    )
