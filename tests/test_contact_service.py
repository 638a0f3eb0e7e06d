"""Unit tests for ContactService."""

import logging

import pytest

from app.core.errors import ValidationAppError
from app.schemas.contact import ContactSubmissionRequest
from app.services.contact_service import ContactService


def _request(**overrides) -> ContactSubmissionRequest:
    data = {
        "name": "Amina Wanjiru",
        "email": "amina@example.com",
        "phone": "+254 700 000 000",
        "subject": "Financing question",
        "message": "Do you offer financing for the 2018 Subaru Forester?",
        "contact_method": "whatsapp",
        "inquiry_type": "financing",
    }
    data.update(overrides)
    return ContactSubmissionRequest(**data)


@pytest.fixture
def service() -> ContactService:
    return ContactService(max_message_chars=200)


class TestSubmit:
    def test_returns_pending_submission(self, service: ContactService) -> None:
        submission = service.submit(_request())

        assert submission.status == "PENDING"
        assert submission.id
        assert submission.created_at.tzinfo is not None
        assert submission.inquiry_type == "financing"
        assert submission.contact_method == "whatsapp"

    def test_ids_are_unique(self, service: ContactService) -> None:
        assert service.submit(_request()).id != service.submit(_request()).id

    def test_normalizes_free_text(self, service: ContactService) -> None:
        submission = service.submit(
            _request(
                name="  Amina   Wanjiru ",
                subject="Financing\t\tquestion",
                message="Hello,\r\n\r\n\r\n\r\nIs the   Forester still available?  ",
            )
        )

        assert submission.name == "Amina Wanjiru"
        assert submission.subject == "Financing question"
        assert submission.message == "Hello,\n\nIs the Forester still available?"

    def test_rejects_script_content(self, service: ContactService) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            service.submit(_request(message="Nice car <script>alert('x')</script>"))

        assert exc_info.value.code == "suspicious_content"
        assert exc_info.value.details == {"field": "message"}
        assert "message" in exc_info.value.message

    def test_rejects_suspicious_subject(self, service: ContactService) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            service.submit(_request(subject="<iframe src=x>"))

        assert exc_info.value.details == {"field": "subject"}

    def test_rejects_whitespace_only_message(self, service: ContactService) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            service.submit(_request(message=" \n\t \r\n      "))

        assert exc_info.value.code == "empty_message"

    def test_rejects_overlong_message(self, service: ContactService) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            service.submit(_request(message="a" * 201))

        assert exc_info.value.code == "message_too_long"
        assert exc_info.value.details["max_value"] == 200
        assert exc_info.value.details["actual_value"] == 201

    def test_default_limit_comes_from_settings(self) -> None:
        from app.core.config import settings

        service = ContactService()
        service.submit(_request(message="b" * settings.app.contact_max_message_chars))

    def test_explicit_zero_limit_is_not_replaced_by_default(self) -> None:
        service = ContactService(max_message_chars=0)

        with pytest.raises(ValidationAppError) as exc_info:
            service.submit(_request())

        assert exc_info.value.code == "message_too_long"
        assert exc_info.value.details["max_value"] == 0

    def test_logs_without_contact_details(self, service: ContactService, caplog) -> None:
        caplog.set_level(logging.INFO, logger="app.services.contact_service")

        submission = service.submit(_request())

        records = [r for r in caplog.records if r.getMessage() == "contact.submitted"]
        assert len(records) == 1
        assert records[0].submission_id == submission.id
        assert "amina@example.com" not in str(records[0].__dict__)
        assert "+254 700 000 000" not in str(records[0].__dict__)
