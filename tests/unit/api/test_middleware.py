"""Tests for the rate limiter and the rate-limit middleware."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from searchproxy.api.app import build_registry, create_app
from searchproxy.api.deps import set_dispatcher
from searchproxy.api.middleware import RATE_LIMIT_MESSAGE, SlidingWindowRateLimiter
from searchproxy.config.settings import Settings
from searchproxy.core.dispatcher import SearchDispatcher


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


# ── Limiter ──────────────────────────────────────────────────────────────────


class TestSlidingWindowRateLimiter:
    def test_allows_up_to_limit(self) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=3, window_seconds=60, clock=FakeClock())
        decisions = [limiter.hit("1.2.3.4") for _ in range(3)]
        assert all(d.allowed for d in decisions)
        assert [d.remaining for d in decisions] == [2, 1, 0]

    def test_rejects_over_limit_with_retry_after(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=clock)
        limiter.hit("a")
        clock.now += 10
        limiter.hit("a")
        clock.now += 5

        decision = limiter.hit("a")
        assert not decision.allowed
        assert decision.remaining == 0
        assert decision.retry_after == pytest.approx(45.0)

    def test_window_rolls(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        assert limiter.hit("a").allowed
        assert not limiter.hit("a").allowed
        clock.now += 60
        assert limiter.hit("a").allowed

    def test_rejected_requests_do_not_extend_window(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        limiter.hit("a")
        for _ in range(5):
            clock.now += 10
            limiter.hit("a")
        clock.now += 10
        assert limiter.hit("a").allowed

    def test_keys_are_independent(self) -> None:
        limiter = SlidingWindowRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
        assert limiter.hit("a").allowed
        assert limiter.hit("b").allowed
        assert not limiter.hit("a").allowed

    def test_stale_keys_swept(self) -> None:
        clock = FakeClock()
        limiter = SlidingWindowRateLimiter(max_requests=5, window_seconds=60, clock=clock)
        limiter.hit("old")
        clock.now += 120
        limiter.hit("new")
        assert set(limiter._hits) == {"new"}


# ── Middleware ───────────────────────────────────────────────────────────────


@pytest.fixture
def limited_client() -> TestClient:
    settings = Settings(
        _env_file=None,  # type: ignore[call-arg]
        rate_limit={"max_requests": 2, "window_seconds": 900},
    )
    app = create_app(settings)
    set_dispatcher(SearchDispatcher(build_registry(settings)))
    yield TestClient(app)
    set_dispatcher(None)


class TestRateLimitMiddleware:
    def test_third_request_rejected(self, limited_client: TestClient) -> None:
        first = limited_client.get("/api/search", params={"q": "rust"})
        second = limited_client.get("/api/search", params={"q": "rust"})
        third = limited_client.get("/api/search", params={"q": "rust"})

        assert first.status_code == second.status_code == 200
        assert first.headers["RateLimit-Limit"] == "2"
        assert first.headers["RateLimit-Remaining"] == "1"
        assert second.headers["RateLimit-Remaining"] == "0"

        assert third.status_code == 429
        assert third.json() == {"error": RATE_LIMIT_MESSAGE}
        assert int(third.headers["Retry-After"]) > 0

    def test_rejected_before_validation(self, limited_client: TestClient) -> None:
        limited_client.get("/api/search")
        limited_client.get("/api/search")
        assert limited_client.get("/api/search").status_code == 429

    def test_health_not_counted(self, limited_client: TestClient) -> None:
        for _ in range(5):
            assert limited_client.get("/health").status_code == 200
        assert limited_client.get("/api/search", params={"q": "rust"}).status_code == 200

    def test_disabled(self) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            rate_limit={"enabled": False, "max_requests": 1},
        )
        app = create_app(settings)
        set_dispatcher(SearchDispatcher(build_registry(settings)))
        try:
            client = TestClient(app)
            statuses = [client.get("/api/search", params={"q": "rust"}).status_code for _ in range(3)]
        finally:
            set_dispatcher(None)
        assert statuses == [200, 200, 200]
