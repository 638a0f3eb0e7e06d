"""Contact form intake.

Normalizes and screens visitor submissions before they are handed to the
dealership's follow-up pipeline. Storage and e-mail notification happen
outside this service; an accepted submission is logged with its id so those
collaborators can pick it up.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from app.core.config import settings
from app.core.errors import ValidationAppError
from app.core.logging import hash_for_log
from app.schemas.contact import ContactSubmission, ContactSubmissionRequest
from app.utils.content_screening import find_suspicious_field
from app.utils.text_normalizer import normalize_line, normalize_text

logger = logging.getLogger(__name__)


class ContactService:
    """Validates contact submissions and turns them into pending records."""

    def __init__(self, max_message_chars: int | None = None) -> None:
        if max_message_chars is None:
            max_message_chars = settings.app.contact_max_message_chars
        self._max_message_chars = max_message_chars

    def _normalized_fields(self, request: ContactSubmissionRequest) -> dict[str, str]:
        return {
            "name": normalize_line(request.name),
            "email": request.email.strip(),
            "phone": normalize_line(request.phone),
            "subject": normalize_line(request.subject),
            "message": normalize_text(request.message),
        }

    def submit(self, request: ContactSubmissionRequest) -> ContactSubmission:
        """Accept a contact form submission.

        Args:
            request: Schema-validated submission payload.

        Returns:
            ContactSubmission in PENDING status.

        Raises:
            ValidationAppError: If a field carries markup/script content, or
                the message is empty or too long after normalization.
        """
        fields = self._normalized_fields(request)

        suspicious = find_suspicious_field(fields)
        if suspicious:
            logger.warning("contact.rejected", extra={"reason": "suspicious_content", "field": suspicious})
            raise ValidationAppError(
                code="suspicious_content",
                message=f"Suspicious pattern detected in field: {suspicious}",
                details={"field": suspicious},
            )

        if not fields["message"]:
            raise ValidationAppError(code="empty_message", message="Message must not be empty")

        if len(fields["message"]) > self._max_message_chars:
            raise ValidationAppError(
                code="message_too_long",
                message=f"Message exceeds {self._max_message_chars} characters",
                details={
                    "field": "message",
                    "max_value": self._max_message_chars,
                    "actual_value": len(fields["message"]),
                },
            )

        submission = ContactSubmission(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            contact_method=request.contact_method,
            inquiry_type=request.inquiry_type,
            **fields,
        )

        logger.info(
            "contact.submitted",
            extra={
                "submission_id": submission.id,
                "inquiry_type": submission.inquiry_type,
                "contact_method": submission.contact_method,
                "email_hash": hash_for_log(submission.email.lower()),
                "message_chars": len(submission.message),
            },
        )
        return submission
