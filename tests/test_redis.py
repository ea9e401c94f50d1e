"""Tests for Redis client module (src/delivery/core/redis.py)."""

from unittest.mock import AsyncMock, patch

import pytest
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from src.delivery.core import redis as redis_module
from src.delivery.core.config import get_settings
from src.delivery.core.redis import close_redis, get_redis, reset_redis_state


class MockClock:
    """Callable stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.current_time = start

    def __call__(self) -> float:
        return self.current_time


@pytest.fixture
def no_redis_url(monkeypatch: pytest.MonkeyPatch):
    """Make sure settings see no REDIS_URL."""
    monkeypatch.delenv("REDIS_URL", raising=False)
    get_settings.cache_clear()
    reset_redis_state()
    yield
    reset_redis_state()
    get_settings.cache_clear()


@pytest.fixture
def configured_redis_url(monkeypatch: pytest.MonkeyPatch):
    """Point settings at a Redis URL; pings are patched per test."""
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    monkeypatch.setenv("REDIS_RETRY_SECONDS", "5")
    get_settings.cache_clear()
    reset_redis_state()
    yield
    reset_redis_state()
    get_settings.cache_clear()


class TestGetRedis:
    """Tests for get_redis() function."""

    async def test_get_redis_returns_none_when_not_configured(self, no_redis_url) -> None:
        """When REDIS_URL is not set, get_redis() should return None."""
        result = await get_redis()
        assert result is None

    async def test_unreachable_server_returns_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A configured but unreachable server degrades to None instead of raising."""
        monkeypatch.setenv("REDIS_URL", "redis://127.0.0.1:1/0")
        get_settings.cache_clear()
        reset_redis_state()
        try:
            assert await get_redis() is None
            assert redis_module._pool is None
        finally:
            reset_redis_state()
            get_settings.cache_clear()

    async def test_reconnects_after_failed_ping(self, configured_redis_url) -> None:
        """A failed first ping does not pin the process to 'unavailable'."""
        clock = MockClock()
        ping = AsyncMock(side_effect=[RedisConnectionError("loading"), True])

        with (
            patch("src.delivery.core.redis.time.monotonic", clock),
            patch.object(Redis, "ping", ping),
        ):
            assert await get_redis() is None

            clock.current_time += 6
            client = await get_redis()

        assert isinstance(client, Redis)
        assert ping.await_count == 2
        assert await get_redis() is client

    async def test_no_reconnect_inside_backoff_window(self, configured_redis_url) -> None:
        """Calls within redis_retry_seconds of a failure return None without pinging."""
        clock = MockClock()
        ping = AsyncMock(side_effect=RedisConnectionError("refused"))

        with (
            patch("src.delivery.core.redis.time.monotonic", clock),
            patch.object(Redis, "ping", ping),
        ):
            assert await get_redis() is None
            clock.current_time += 1
            assert await get_redis() is None

        assert ping.await_count == 1

    async def test_reset_redis_state_clears_connection(self) -> None:
        """reset_redis_state() should clear all module-level state."""
        redis_module._next_attempt_at = 5000.0
        redis_module._redis = "dummy"  # type: ignore[assignment]
        redis_module._pool = "dummy"  # type: ignore[assignment]

        reset_redis_state()

        assert redis_module._next_attempt_at == 0.0
        assert redis_module._redis is None
        assert redis_module._pool is None


class TestCloseRedis:
    """Tests for close_redis() function."""

    async def test_close_redis_when_not_connected(self) -> None:
        """close_redis() should not error when nothing is connected."""
        reset_redis_state()

        await close_redis()

        assert redis_module._redis is None
        assert redis_module._pool is None
        assert redis_module._next_attempt_at == 0.0

    async def test_close_redis_clears_backoff(self, no_redis_url) -> None:
        """close_redis() lets the next call attempt a connection immediately."""
        await get_redis()
        assert redis_module._next_attempt_at > 0.0

        await close_redis()

        assert redis_module._next_attempt_at == 0.0


class TestRedisWithFakeredis:
    """Tests using fakeredis for realistic Redis operations."""

    async def test_mock_redis_fixture_works(self, mock_redis) -> None:
        """Verify the mock_redis fixture replaces get_redis()."""
        result = await redis_module.get_redis()
        assert result is mock_redis

        await mock_redis.set("project:ABCD1234", "{}")
        assert await mock_redis.get("project:ABCD1234") == "{}"

    async def test_mock_redis_unavailable_returns_none(self, mock_redis_unavailable) -> None:
        """Verify mock_redis_unavailable fixture makes get_redis() return None."""
        result = await redis_module.get_redis()
        assert result is None
