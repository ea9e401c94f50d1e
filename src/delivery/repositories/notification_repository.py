"""Storage for push subscriptions, the email audit log and feed read receipts."""

import asyncio

from src.delivery.core.store import EMAIL_LOG_KEY, push_key, receipts_key
from src.delivery.models.notifications import (
    EmailLogEntry,
    NotificationReceipt,
    PushSubscription,
)
from src.delivery.repositories.base import BaseRepository


class PushSubscriptionRepository(BaseRepository[PushSubscription]):
    """Subscriber list per project at ``push:{projectId}``."""

    model = PushSubscription

    async def list_for_project(self, project_id: str) -> list[PushSubscription]:
        return await self._load_list(push_key(project_id))

    async def replace(self, project_id: str, subscriptions: list[PushSubscription]) -> None:
        """Store the subscriber list; an empty list deletes the key."""
        if subscriptions:
            await self._save_list(push_key(project_id), subscriptions)
        else:
            await self.store.delete(push_key(project_id))

    def lock_project(self, project_id: str) -> asyncio.Lock:
        return self.lock(push_key(project_id))


class EmailLogRepository(BaseRepository[EmailLogEntry]):
    """The global email audit log, newest first, at ``email_log``."""

    model = EmailLogEntry

    async def load(self) -> list[EmailLogEntry]:
        return await self._load_list(EMAIL_LOG_KEY)

    async def replace(self, entries: list[EmailLogEntry]) -> None:
        await self._save_list(EMAIL_LOG_KEY, entries)

    def lock_log(self) -> asyncio.Lock:
        return self.lock(EMAIL_LOG_KEY)


class ReceiptRepository(BaseRepository[NotificationReceipt]):
    """Read receipts for derived customer feed items at ``receipts:{projectId}``."""

    model = NotificationReceipt

    async def list_for_project(self, project_id: str) -> list[NotificationReceipt]:
        return await self._load_list(receipts_key(project_id))

    async def add(self, receipt: NotificationReceipt) -> bool:
        """Store a receipt. Returns False if the item was already marked read."""
        key = receipts_key(receipt.project_id)
        async with self.lock(key):
            receipts = await self._load_list(key)
            if any(existing.item_key == receipt.item_key for existing in receipts):
                return False
            receipts.append(receipt)
            await self._save_list(key, receipts)
            return True
