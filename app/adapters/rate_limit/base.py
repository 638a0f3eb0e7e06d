"""Rate limiter interfaces.

The API should depend on these abstractions (not the concrete implementation)
so the in-process store can later be swapped for a shared one (e.g., Redis)
with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class RateLimitEntry:
    """Per-identity budget state.

    Attributes:
        tokens: Remaining permitted actions in the current window.
        last_refill: Epoch milliseconds at which the window last reset.
    """

    tokens: int
    last_refill: int


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a check-and-consume operation.

    Attributes:
        allowed: Whether the action may proceed.
        remaining: Remaining actions in the current window (0 when blocked).
        limit: Max actions per window.
        retry_after_seconds: Seconds until the window resets, set only when blocked.
    """

    allowed: bool
    remaining: int
    limit: int
    retry_after_seconds: int | None = None


class RateLimitStore(ABC):
    """Mapping from client identity to its ``RateLimitEntry``."""

    @abstractmethod
    def get(self, identity: str) -> RateLimitEntry | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, identity: str, entry: RateLimitEntry) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check_and_consume(self, identity: str) -> RateLimitResult:
        """Consume one unit of budget for ``identity`` if any is left.

        Args:
            identity: Client identity (typically a best-effort client IP).

        Returns:
            RateLimitResult describing whether the action was allowed.
        """
        raise NotImplementedError
