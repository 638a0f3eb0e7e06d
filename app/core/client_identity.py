"""Best-effort client identity derived from proxy headers.

Fallback order:
1. First entry of ``X-Forwarded-For``
2. ``X-Real-IP``
3. ``"unknown"``

Every request without usable headers shares the ``"unknown"`` identity, so
clients behind a header-stripping proxy throttle each other. Values are not
validated as IP addresses.
"""

from __future__ import annotations

from typing import Mapping

FORWARDED_FOR_HEADER = "x-forwarded-for"
REAL_IP_HEADER = "x-real-ip"
UNKNOWN_IDENTITY = "unknown"


def _header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    # Plain dicts are case-sensitive; Starlette Headers are not.
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def resolve_client_identity(headers: Mapping[str, str]) -> str:
    """Resolve the rate limit identity for a request.

    Args:
        headers: Request headers (Starlette ``Headers`` or a plain mapping).

    Returns:
        Client identity string, ``"unknown"`` when nothing usable is present.

    Examples:
        >>> resolve_client_identity({"X-Forwarded-For": "1.2.3.4, 10.0.0.1"})
        '1.2.3.4'
        >>> resolve_client_identity({"X-Real-IP": "5.6.7.8"})
        '5.6.7.8'
        >>> resolve_client_identity({})
        'unknown'
    """
    forwarded = _header(headers, FORWARDED_FOR_HEADER)
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = _header(headers, REAL_IP_HEADER)
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_IDENTITY
