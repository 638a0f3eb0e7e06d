import re
from typing import Mapping

SUSPICIOUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"eval\(", re.IGNORECASE),
    re.compile(r"expression\(", re.IGNORECASE),
)


def find_suspicious_field(fields: Mapping[str, str]) -> str | None:
    """Return the first field whose value looks like markup or script injection.

    Args:
        fields: Field name to submitted value.

    Returns:
        The offending field name, or None if every value is clean.
    """
    for key, value in fields.items():
        for pattern in SUSPICIOUS_PATTERNS:
            if pattern.search(value):
                return key
    return None
