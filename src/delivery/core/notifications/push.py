"""Web push transport using pywebpush (VAPID)."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

from pywebpush import WebPushException, webpush

from src.delivery.core.config import get_settings
from src.delivery.core.logging import get_logger
from src.delivery.models.notifications import PushSubscription

logger = get_logger(__name__)

# Push service answers meaning the endpoint no longer exists
GONE_STATUS_CODES = frozenset({404, 410})


@dataclass(frozen=True)
class PushSendResult:
    success: bool
    status_code: int | None = None
    error: str | None = None

    @property
    def endpoint_gone(self) -> bool:
        return not self.success and self.status_code in GONE_STATUS_CODES


class PushTransport(Protocol):
    async def send(self, subscription: PushSubscription, payload: str) -> PushSendResult: ...


class WebPushTransport:
    """Delivers one payload to one subscription. Never raises for delivery errors."""

    def __init__(
        self,
        vapid_private_key: str,
        vapid_subject: str,
        ttl_seconds: int,
        timeout_seconds: int,
    ):
        self.vapid_private_key = vapid_private_key
        self.vapid_subject = vapid_subject
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds

    async def send(self, subscription: PushSubscription, payload: str) -> PushSendResult:
        def _send() -> None:
            webpush(
                subscription_info=subscription.model_dump(),
                data=payload,
                vapid_private_key=self.vapid_private_key,
                vapid_claims={"sub": self.vapid_subject},
                ttl=self.ttl_seconds,
                timeout=self.timeout_seconds,
            )

        try:
            await asyncio.to_thread(_send)
            return PushSendResult(success=True)
        except WebPushException as e:
            status_code = e.response.status_code if e.response is not None else None
            return PushSendResult(success=False, status_code=status_code, error=str(e))
        except Exception as e:
            return PushSendResult(success=False, error=str(e))


def get_push_transport() -> PushTransport | None:
    """Build the configured push transport, or None when VAPID keys are unset."""
    settings = get_settings()
    if not settings.push_enabled or settings.vapid_private_key is None:
        return None
    return WebPushTransport(
        vapid_private_key=settings.vapid_private_key,
        vapid_subject=settings.vapid_subject,
        ttl_seconds=settings.push_ttl_seconds,
        timeout_seconds=settings.push_send_timeout_seconds,
    )
