"""Notification transports - email and web push."""

from src.delivery.core.notifications.email import (
    EmailSendResult,
    EmailTransport,
    ResendEmailTransport,
    get_email_transport,
    render_notification_email,
)
from src.delivery.core.notifications.push import (
    PushSendResult,
    PushTransport,
    WebPushTransport,
    get_push_transport,
)

__all__ = [
    "EmailSendResult",
    "EmailTransport",
    "PushSendResult",
    "PushTransport",
    "ResendEmailTransport",
    "WebPushTransport",
    "get_email_transport",
    "get_push_transport",
    "render_notification_email",
]
