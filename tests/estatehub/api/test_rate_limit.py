"""
Tests for request rate limiting.
"""
import pytest

from config.settings import settings
from src.estatehub.api import rate_limit
from src.estatehub.api.rate_limit import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestRateLimiter:
    """Tests for the fixed-window counter."""

    def test_allows_up_to_limit(self):
        limiter = RateLimiter(limit=3, window_seconds=60, clock=FakeClock())

        results = [limiter.hit("1.2.3.4") for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]

    def test_window_resets(self):
        clock = FakeClock()
        limiter = RateLimiter(limit=1, window_seconds=60, clock=clock)

        assert limiter.hit("a").allowed
        clock.now += 30
        blocked = limiter.hit("a")
        assert not blocked.allowed
        assert blocked.retry_after == 30

        clock.now += 30
        assert limiter.hit("a").allowed

    def test_keys_are_independent(self):
        limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())

        assert limiter.hit("a").allowed
        assert limiter.hit("b").allowed
        assert not limiter.hit("a").allowed

    def test_reset(self):
        limiter = RateLimiter(limit=1, window_seconds=60, clock=FakeClock())
        limiter.hit("a")

        limiter.reset()

        assert limiter.hit("a").allowed


class TestRateLimitMiddleware:
    """Tests for the limits wired into the app."""

    def test_general_limit_returns_429(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "general_limiter", RateLimiter(limit=2, window_seconds=900))

        origin = {"Origin": settings.cors_origins[0]}
        assert client.get("/api/properties", headers=origin).status_code == 200
        assert client.get("/api/properties", headers=origin).status_code == 200
        response = client.get("/api/properties", headers=origin)

        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) > 0
        assert response.headers["access-control-allow-origin"] == settings.cors_origins[0]

    def test_general_limit_skips_non_api_paths(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "general_limiter", RateLimiter(limit=1, window_seconds=900))

        for _ in range(3):
            assert client.get("/health").status_code == 200

    def test_login_limit_returns_429(self, client, admin, monkeypatch):
        monkeypatch.setattr(rate_limit, "auth_limiter", RateLimiter(limit=2, window_seconds=900))

        for _ in range(2):
            response = client.post("/api/admin/login", json={"username": "ops", "password": "wrong"})
            assert response.status_code == 401

        response = client.post("/api/admin/login", json={"username": "ops", "password": "wrong"})
        assert response.status_code == 429
        assert "Retry-After" in response.headers

    def test_disabled(self, client, monkeypatch):
        monkeypatch.setattr(rate_limit, "general_limiter", RateLimiter(limit=1, window_seconds=900))
        monkeypatch.setattr(rate_limit.settings, "rate_limit_enabled", False)

        for _ in range(3):
            assert client.get("/api/properties").status_code == 200
