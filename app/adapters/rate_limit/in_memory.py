"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Entries live for the process lifetime; nothing sweeps idle identities.
- Thread-safe: the limiter holds a lock around each read-modify-write.
"""

from __future__ import annotations

import math
import threading
import time
from typing import Callable

from app.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitEntry,
    RateLimitResult,
    RateLimitStore,
)

DEFAULT_WINDOW_MS = 60 * 60 * 1000
DEFAULT_MAX_REQUESTS = 10


def ms_clock() -> int:
    """Current UNIX time in milliseconds."""
    return int(time.time() * 1000)


class InMemoryRateLimitStore(RateLimitStore):
    """Dict-backed store; entries are created lazily and never evicted."""

    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def get(self, identity: str) -> RateLimitEntry | None:
        return self._entries.get(identity)

    def set(self, identity: str, entry: RateLimitEntry) -> None:
        self._entries[identity] = entry

    def clear(self) -> None:
        self._entries.clear()


class FixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting down a token budget per identity.

    Each identity gets ``max_requests`` actions per window. The window starts
    on the identity's first request and is reset lazily on the first request
    made at least ``window_ms`` after the last reset. Windows are not aligned
    to wall-clock boundaries, and a client may spend up to twice the budget in
    a short span straddling a reset.
    """

    def __init__(
        self,
        store: RateLimitStore | None = None,
        *,
        window_ms: int = DEFAULT_WINDOW_MS,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        clock: Callable[[], int] = ms_clock,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Backing store; a fresh in-memory store when omitted.
            window_ms: Window length in milliseconds.
            max_requests: Maximum accepted actions per window.
            clock: Time source returning UNIX time in milliseconds.

        Raises:
            ValueError: If window_ms or max_requests are invalid.
        """
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        self._store = store if store is not None else InMemoryRateLimitStore()
        self._window_ms = window_ms
        self._max_requests = max_requests
        self._clock = clock
        self._lock = threading.RLock()

    @property
    def store(self) -> RateLimitStore:
        return self._store

    @property
    def window_ms(self) -> int:
        return self._window_ms

    @property
    def max_requests(self) -> int:
        return self._max_requests

    def _allowed(self, remaining: int) -> RateLimitResult:
        return RateLimitResult(allowed=True, remaining=remaining, limit=self._max_requests)

    def _blocked(self, entry: RateLimitEntry, now: int) -> RateLimitResult:
        wait_ms = max(0, entry.last_refill + self._window_ms - now)
        return RateLimitResult(
            allowed=False,
            remaining=0,
            limit=self._max_requests,
            retry_after_seconds=int(math.ceil(wait_ms / 1000)),
        )

    def check_and_consume(self, identity: str) -> RateLimitResult:
        """Check the budget for ``identity`` and consume one unit if allowed.

        A rejected call leaves the stored entry untouched.

        Args:
            identity: Client identity; any string, including "unknown".

        Returns:
            RateLimitResult with the admission decision.
        """
        with self._lock:
            now = self._clock()
            entry = self._store.get(identity)

            if entry is None:
                entry = RateLimitEntry(tokens=self._max_requests - 1, last_refill=now)
                self._store.set(identity, entry)
                return self._allowed(entry.tokens)

            if now - entry.last_refill >= self._window_ms:
                # This call spends the first token of the new window
                entry.tokens = self._max_requests - 1
                entry.last_refill = now
                self._store.set(identity, entry)
                return self._allowed(entry.tokens)

            if entry.tokens <= 0:
                return self._blocked(entry, now)

            entry.tokens -= 1
            self._store.set(identity, entry)
            return self._allowed(entry.tokens)
