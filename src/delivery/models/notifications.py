"""Records persisted by the notification channels."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.delivery.models.base import generate_id, utc_now
from src.delivery.models.enums import EmailType


class PushSubscriptionKeys(BaseModel):
    p256dh: str
    auth: str


class PushSubscription(BaseModel):
    """A browser/device web-push endpoint. ``endpoint`` is the unique key."""

    endpoint: str
    keys: PushSubscriptionKeys


class EmailLogEntry(BaseModel):
    """Audit record of one email attempt, sent or not."""

    id: str = Field(default_factory=lambda: generate_id("email"))
    timestamp: datetime = Field(default_factory=utc_now)
    project_id: str
    project_name: str = "Unknown project"
    recipient_email: str
    recipient_name: str = ""
    type: EmailType = EmailType.OTHER
    subject: str
    details: str | None = None
    success: bool
    error: str | None = None


class NotificationReceipt(BaseModel):
    """Durable read-state for a derived customer feed item."""

    project_id: str
    item_key: str
    read_at: datetime = Field(default_factory=utc_now)
