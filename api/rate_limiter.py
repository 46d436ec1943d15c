"""
Rate Limit Snapshot
-------------------
Last observed X-Ratelimit-* counters reported by the API.
Advisory only: nothing throttles on these numbers.
"""

from dataclasses import dataclass
from threading import Lock
from typing import Mapping, Optional

REMAINING_HEADER = "X-Ratelimit-Remaining"
LIMIT_HEADER = "X-Ratelimit-Limit"


def _parse_counter(value: Optional[str]) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


@dataclass(frozen=True)
class RateLimitState:
    """Immutable copy of the counters."""
    remaining: int = 0
    limit: int = 0


class RateLimitSnapshot:
    """
    Thread-safe holder for the rate-limit counters.

    Updates are last-writer-wins; a delayed update from an earlier
    response may overwrite a newer one.
    """

    def __init__(self):
        self._remaining = 0
        self._limit = 0
        self._lock = Lock()

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Replace both counters; missing or garbled headers read as 0."""
        with self._lock:
            self._remaining = _parse_counter(headers.get(REMAINING_HEADER))
            self._limit = _parse_counter(headers.get(LIMIT_HEADER))

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    @property
    def limit(self) -> int:
        with self._lock:
            return self._limit

    def state(self) -> RateLimitState:
        """Read both counters under one lock acquisition."""
        with self._lock:
            return RateLimitState(remaining=self._remaining, limit=self._limit)

