"""Root test fixtures shared across all test types.

Redis is replaced by fakeredis and both notification transports by in-memory
fakes, so the whole engine runs without network access.
"""

import os

# Set APP_ENV to testing and disable real transports before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("VAPID_PRIVATE_KEY", None)
os.environ.setdefault("DEVELOPER_EMAIL", "dev@agency.example")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.delivery.core import redis as redis_core
from src.delivery.core.config import get_settings
from src.delivery.core.health import reset_health_cache
from src.delivery.core.store import KeyValueStore, reset_locks
from src.delivery.repositories import (
    EmailLogRepository,
    ProjectRepository,
    PushSubscriptionRepository,
    ReceiptRepository,
)
from src.delivery.services import (
    ActivityService,
    ChangeRequestService,
    EmailLogService,
    MessageService,
    NotificationService,
    PhaseService,
    ProjectService,
    PushService,
)
from tests.helpers import RecordingEmailTransport, RecordingPushTransport

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_key_locks() -> None:
    """Key locks are bound to the event loop that first awaited them."""
    reset_locks()
    yield
    reset_locks()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return fakeredis client.

    Patches every module that imports get_redis so the API and the health
    check both see the fake.
    """
    redis_core.reset_redis_state()
    reset_health_cache()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.delivery.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.delivery.api.dependencies.store.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.delivery.core.health.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()
    reset_health_cache()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()
    reset_health_cache()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.delivery.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.delivery.api.dependencies.store.get_redis", _get_none)
    monkeypatch.setattr("src.delivery.core.health.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()
    reset_health_cache()


# --- Store, repositories and services ---


@pytest.fixture
def store(fake_redis: Redis) -> KeyValueStore:
    return KeyValueStore(fake_redis)


@pytest.fixture
def project_repo(store: KeyValueStore) -> ProjectRepository:
    return ProjectRepository(store)


@pytest.fixture
def push_repo(store: KeyValueStore) -> PushSubscriptionRepository:
    return PushSubscriptionRepository(store)


@pytest.fixture
def email_log_repo(store: KeyValueStore) -> EmailLogRepository:
    return EmailLogRepository(store)


@pytest.fixture
def receipt_repo(store: KeyValueStore) -> ReceiptRepository:
    return ReceiptRepository(store)


@pytest.fixture
def email_transport() -> RecordingEmailTransport:
    return RecordingEmailTransport()


@pytest.fixture
def push_transport() -> RecordingPushTransport:
    return RecordingPushTransport()


@pytest.fixture
def email_log_service(email_log_repo: EmailLogRepository) -> EmailLogService:
    return EmailLogService(email_log_repo)


@pytest.fixture
def push_service(
    push_repo: PushSubscriptionRepository,
    project_repo: ProjectRepository,
    push_transport: RecordingPushTransport,
) -> PushService:
    return PushService(push_repo, project_repo, push_transport)


@pytest.fixture
def notification_service(
    project_repo: ProjectRepository,
    push_service: PushService,
    email_log_service: EmailLogService,
    email_transport: RecordingEmailTransport,
) -> NotificationService:
    return NotificationService(project_repo, push_service, email_log_service, email_transport)


@pytest.fixture
def project_service(
    project_repo: ProjectRepository, notification_service: NotificationService
) -> ProjectService:
    return ProjectService(project_repo, notification_service)


@pytest.fixture
def phase_service(
    project_repo: ProjectRepository, notification_service: NotificationService
) -> PhaseService:
    return PhaseService(project_repo, notification_service)


@pytest.fixture
def change_request_service(
    project_repo: ProjectRepository, notification_service: NotificationService
) -> ChangeRequestService:
    return ChangeRequestService(project_repo, notification_service)


@pytest.fixture
def message_service(
    project_repo: ProjectRepository, notification_service: NotificationService
) -> MessageService:
    return MessageService(project_repo, notification_service)


@pytest.fixture
def activity_service(
    project_repo: ProjectRepository,
    receipt_repo: ReceiptRepository,
    message_service: MessageService,
) -> ActivityService:
    return ActivityService(project_repo, receipt_repo, message_service, "http://localhost:3000")
