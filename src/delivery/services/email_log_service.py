"""Email audit log - bounded, newest-first record of every email attempt."""

from collections import deque
from collections.abc import Iterable
from typing import Generic, TypeVar

from src.delivery.core.logging import get_logger, loggable_email
from src.delivery.models.enums import EmailType
from src.delivery.models.notifications import EmailLogEntry
from src.delivery.repositories import EmailLogRepository

logger = get_logger(__name__)

MAX_LOG_ENTRIES = 200
DEFAULT_QUERY_LIMIT = 50

DEFAULT_SUBJECTS = {
    EmailType.PHASE_CHANGE: "Your project is moving to the next phase",
    EmailType.DESIGN_LINK: "Your design preview is ready",
    EmailType.PAYMENT_LINK: "Payment link for your website",
    EmailType.LIVE_LINK: "Your website is live!",
    EmailType.MESSAGE: "New message about your project",
    EmailType.CHANGE_REQUEST: "New change request",
    EmailType.REMINDER: "Reminder: action required for your project",
    EmailType.WELCOME: "Welcome!",
    EmailType.OTHER: "Message about your project",
}


T = TypeVar("T")


class BoundedLog(Generic[T]):
    """Newest-first sequence capped at ``capacity`` items.

    Pushing onto a full log evicts the oldest item.
    """

    def __init__(self, items: Iterable[T], capacity: int):
        self._items: deque[T] = deque(items, maxlen=capacity)

    def push_front(self, item: T) -> None:
        self._items.appendleft(item)

    def items(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class EmailLogService:
    """Global append-only audit log of notification emails.

    Kept for operational visibility, not as a source of truth.
    """

    def __init__(self, email_log_repo: EmailLogRepository):
        self.email_log_repo = email_log_repo

    async def append(self, entry: EmailLogEntry) -> EmailLogEntry:
        """Push an entry to the front of the log and truncate to the cap."""
        async with self.email_log_repo.lock_log():
            log = BoundedLog(await self.email_log_repo.load(), MAX_LOG_ENTRIES)
            log.push_front(entry)
            await self.email_log_repo.replace(log.items())

        logger.info(
            "Email attempt logged",
            email_type=entry.type.value,
            project_id=entry.project_id,
            to=loggable_email(entry.recipient_email),
            success=entry.success,
        )
        return entry

    async def record(
        self,
        project_id: str,
        recipient_email: str,
        email_type: EmailType,
        success: bool,
        subject: str | None = None,
        project_name: str | None = None,
        recipient_name: str | None = None,
        details: str | None = None,
        error: str | None = None,
    ) -> EmailLogEntry:
        """Build an entry with defaults filled in and append it."""
        entry = EmailLogEntry(
            project_id=project_id,
            project_name=project_name or "Unknown project",
            recipient_email=recipient_email,
            recipient_name=recipient_name or "",
            type=email_type,
            subject=subject or DEFAULT_SUBJECTS[email_type],
            details=details,
            success=success,
            error=error,
        )
        return await self.append(entry)

    async def query(
        self,
        project_id: str | None = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[EmailLogEntry]:
        """Return entries newest first, optionally for one project.

        Re-sorts by timestamp because concurrent writers can interleave pushes.
        """
        entries = await self.email_log_repo.load()
        if project_id:
            entries = [entry for entry in entries if entry.project_id == project_id]
        entries.sort(key=lambda entry: entry.timestamp, reverse=True)
        return entries[: min(max(limit, 0), MAX_LOG_ENTRIES)]
