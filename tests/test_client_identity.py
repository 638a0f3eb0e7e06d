"""Tests for client identity resolution from proxy headers."""

import pytest
from starlette.datastructures import Headers

from app.core.client_identity import UNKNOWN_IDENTITY, resolve_client_identity


class TestResolveClientIdentity:
    """Fallback order: X-Forwarded-For, X-Real-IP, "unknown"."""

    def test_uses_first_forwarded_for_entry(self) -> None:
        headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.1, 10.0.0.2"}
        assert resolve_client_identity(headers) == "203.0.113.7"

    def test_trims_forwarded_for_entry(self) -> None:
        assert resolve_client_identity({"x-forwarded-for": "  203.0.113.7  ,10.0.0.1"}) == "203.0.113.7"

    def test_forwarded_for_wins_over_real_ip(self) -> None:
        headers = {"x-forwarded-for": "1.1.1.1", "x-real-ip": "2.2.2.2"}
        assert resolve_client_identity(headers) == "1.1.1.1"

    def test_falls_back_to_real_ip(self) -> None:
        assert resolve_client_identity({"x-real-ip": "198.51.100.4"}) == "198.51.100.4"

    def test_empty_forwarded_for_falls_back_to_real_ip(self) -> None:
        headers = {"x-forwarded-for": " , 10.0.0.1", "x-real-ip": "198.51.100.4"}
        assert resolve_client_identity(headers) == "198.51.100.4"

    @pytest.mark.parametrize(
        "headers",
        [
            {},
            {"x-forwarded-for": ""},
            {"x-real-ip": "   "},
            {"x-forwarded-for": "", "x-real-ip": ""},
            {"user-agent": "curl/8.0"},
        ],
    )
    def test_missing_or_blank_headers_resolve_to_unknown(self, headers: dict) -> None:
        assert resolve_client_identity(headers) == UNKNOWN_IDENTITY == "unknown"

    def test_malformed_value_is_not_validated(self) -> None:
        assert resolve_client_identity({"x-forwarded-for": "not-an-ip"}) == "not-an-ip"

    def test_plain_dict_lookup_is_case_insensitive(self) -> None:
        assert resolve_client_identity({"X-Forwarded-For": "1.2.3.4"}) == "1.2.3.4"
        assert resolve_client_identity({"X-Real-IP": "5.6.7.8"}) == "5.6.7.8"

    def test_starlette_headers(self) -> None:
        headers = Headers(raw=[(b"x-real-ip", b"5.6.7.8")])
        assert resolve_client_identity(headers) == "5.6.7.8"
