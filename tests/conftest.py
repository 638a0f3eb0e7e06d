"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that builds settings, so
every test module sees the same baseline configuration.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_MAX_REQUESTS", "10")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_MS", "3600000")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from app.core.rate_limit import reset_rate_limiter  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Give every test an empty process-wide limiter."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()
