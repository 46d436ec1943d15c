"""
Rate Limit Snapshot Tests
-------------------------
Parsing of X-Ratelimit-* headers and thread safety.
"""

from pathlib import Path
import sys
import threading

import httpx

sys.path.insert(0, str(Path(__file__).parent.parent))

from api.rate_limiter import RateLimitSnapshot, RateLimitState


class TestRateLimitSnapshot:
    """Counter updates."""

    def test_initial_state_zero(self):
        snapshot = RateLimitSnapshot()

        assert snapshot.remaining == 0
        assert snapshot.limit == 0
        assert snapshot.state() == RateLimitState(0, 0)

    def test_update_from_headers(self):
        snapshot = RateLimitSnapshot()
        snapshot.update_from_headers({"X-Ratelimit-Remaining": "42", "X-Ratelimit-Limit": "60"})

        assert snapshot.state() == RateLimitState(remaining=42, limit=60)

    def test_header_names_case_insensitive(self):
        snapshot = RateLimitSnapshot()
        headers = httpx.Headers({"x-ratelimit-remaining": "5", "x-ratelimit-limit": "10"})
        snapshot.update_from_headers(headers)

        assert snapshot.remaining == 5
        assert snapshot.limit == 10

    def test_missing_headers_read_as_zero(self):
        snapshot = RateLimitSnapshot()
        snapshot.update_from_headers({"X-Ratelimit-Remaining": "5", "X-Ratelimit-Limit": "10"})
        snapshot.update_from_headers({})

        assert snapshot.state() == RateLimitState(0, 0)

    def test_garbage_reads_as_zero(self):
        snapshot = RateLimitSnapshot()
        snapshot.update_from_headers({"X-Ratelimit-Remaining": "lots", "X-Ratelimit-Limit": "60"})

        assert snapshot.remaining == 0
        assert snapshot.limit == 60

    def test_concurrent_updates_stay_paired(self):
        """Each update writes both counters together."""
        snapshot = RateLimitSnapshot()

        def writer(n: int) -> None:
            for _ in range(200):
                snapshot.update_from_headers({
                    "X-Ratelimit-Remaining": str(n),
                    "X-Ratelimit-Limit": str(n),
                })

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(1, 9)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        state = snapshot.state()
        assert state.remaining == state.limit
        assert 1 <= state.remaining <= 8
