"""Activity feeds for the developer dashboard and the customer portal.

Feeds are projected at read time from project messages, change requests and
status fields. Nothing about an item is stored except its read state: messages
carry their own ``read`` flag, and derived customer items are acknowledged
through ``NotificationReceipt`` records keyed by a hash of the fact they show.
"""

import hashlib
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Literal

from src.delivery.core.exceptions import NotFoundError
from src.delivery.core.logging import get_logger
from src.delivery.models.enums import (
    ActivityType,
    ChangeRequestCategory,
    ChangeRequestStatus,
    MessageSender,
    Priority,
    ProjectPhase,
)
from src.delivery.models.notifications import NotificationReceipt
from src.delivery.models.project import Project
from src.delivery.repositories import ProjectRepository, ReceiptRepository
from src.delivery.services.message_service import MessageService

logger = get_logger(__name__)

DESCRIPTION_LENGTH = 100
DEFAULT_DEVELOPER_LIMIT = 50
MAX_DEVELOPER_LIMIT = 100
MAX_CUSTOMER_ITEMS = 20
MAX_COMPLETED_PER_PROJECT = 3

ActivityFilter = Literal["all", "message", "change_request"]
CustomerLevel = Literal["info", "success", "warning", "action"]

CATEGORY_LABELS = {
    ChangeRequestCategory.TEXT: "Text",
    ChangeRequestCategory.DESIGN: "Design",
    ChangeRequestCategory.IMAGES: "Images",
    ChangeRequestCategory.FUNCTIONALITY: "Functionality",
    ChangeRequestCategory.OTHER: "Other",
}


@dataclass(frozen=True)
class ActivityItem:
    id: str
    type: ActivityType
    project_id: str
    project_name: str
    title: str
    description: str
    created_at: datetime
    read: bool
    action_required: bool
    contact_name: str = ""
    contact_email: str = ""
    priority: Priority | None = None
    category: ChangeRequestCategory | None = None
    status: ChangeRequestStatus | None = None


@dataclass(frozen=True)
class ActivitySummary:
    total: int
    unread: int
    action_required: int
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CustomerNotification:
    id: str
    level: CustomerLevel
    title: str
    message: str
    link: str
    created_at: datetime
    project_id: str
    read: bool = False


def _shorten(text: str, length: int = DESCRIPTION_LENGTH) -> str:
    return text if len(text) <= length else f"{text[:length]}..."


def fact_key(project_id: str, *parts: str | None) -> str:
    """Stable receipt key for a derived fact.

    The key changes when the underlying value changes, so a new link or a new
    response surfaces again as unread.
    """
    raw = "|".join([project_id, *(part or "" for part in parts)])
    return hashlib.sha256(raw.encode()).hexdigest()


def messages_item_id(project_id: str) -> str:
    return f"messages-{project_id}"


def developer_items(project: Project) -> list[ActivityItem]:
    """Unread client messages and open change requests of one project."""
    contact = project.customer
    items: list[ActivityItem] = []

    for message in project.messages:
        if message.sender != MessageSender.CLIENT or message.read:
            continue
        items.append(
            ActivityItem(
                id=f"msg-{message.id}",
                type=ActivityType.MESSAGE,
                project_id=project.id,
                project_name=project.display_name,
                contact_name=contact.name,
                contact_email=contact.email,
                title=f"New message from {contact.name or 'customer'}",
                description=_shorten(message.text),
                created_at=message.created_at,
                read=False,
                action_required=True,
            )
        )

    for cr in project.change_requests:
        match cr.status:
            case ChangeRequestStatus.PENDING:
                title, read, action_required = "Change request", False, True
            case ChangeRequestStatus.IN_PROGRESS:
                title, read, action_required = "In progress", True, False
            case _:
                continue
        items.append(
            ActivityItem(
                id=f"cr-{cr.id}",
                type=ActivityType.CHANGE_REQUEST,
                project_id=project.id,
                project_name=project.display_name,
                contact_name=contact.name,
                contact_email=contact.email,
                title=f"{title}: {CATEGORY_LABELS[cr.category]}",
                description=_shorten(cr.request),
                created_at=cr.created_at,
                read=read,
                action_required=action_required,
                priority=cr.priority,
                category=cr.category,
                status=cr.status,
            )
        )
    return items


def customer_items(project: Project, app_url: str) -> list[CustomerNotification]:
    """Notifications derived from one project's messages, requests and status."""
    link = f"{app_url}/status/{project.id}"
    items: list[CustomerNotification] = []

    unread = [
        m for m in project.messages if m.sender == MessageSender.DEVELOPER and not m.read
    ]
    if unread:
        count = len(unread)
        items.append(
            CustomerNotification(
                id=messages_item_id(project.id),
                level="action",
                title="New message",
                message=f"You have {count} unread message{'s' if count > 1 else ''} from the team.",
                link=link,
                created_at=max(m.created_at for m in unread),
                project_id=project.id,
            )
        )

    completed = [
        cr
        for cr in project.change_requests
        if cr.status == ChangeRequestStatus.COMPLETED and cr.response
    ]
    for cr in completed[:MAX_COMPLETED_PER_PROJECT]:
        items.append(
            CustomerNotification(
                id=fact_key(project.id, "change_request", cr.id, cr.response),
                level="success",
                title="Change completed",
                message=cr.response or "",
                link=link,
                created_at=cr.completed_at or cr.created_at,
                project_id=project.id,
            )
        )

    name = project.display_name
    match project.phase:
        case ProjectPhase.FEEDBACK if project.design_preview_url:
            items.append(
                CustomerNotification(
                    id=fact_key(project.id, "design_ready", project.design_preview_url),
                    level="action",
                    title="Design ready!",
                    message=f"The design for {name} is ready to view.",
                    link=link,
                    created_at=project.updated_at,
                    project_id=project.id,
                )
            )
        case ProjectPhase.PAYMENT if project.payment_url:
            items.append(
                CustomerNotification(
                    id=fact_key(project.id, "payment_due", project.payment_url),
                    level="warning",
                    title="Payment due",
                    message=f"The payment for {name} is still open.",
                    link=link,
                    created_at=project.updated_at,
                    project_id=project.id,
                )
            )
        case ProjectPhase.LIVE if project.live_url:
            items.append(
                CustomerNotification(
                    id=fact_key(project.id, "website_live", project.live_url),
                    level="success",
                    title="Website live!",
                    message=f"{name} is now online!",
                    link=project.live_url,
                    created_at=project.updated_at,
                    project_id=project.id,
                )
            )
    return items


class ActivityService:
    """Builds per-viewer activity feeds across all projects."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        receipt_repo: ReceiptRepository,
        message_service: MessageService,
        app_url: str,
    ):
        self.project_repo = project_repo
        self.receipt_repo = receipt_repo
        self.message_service = message_service
        self.app_url = app_url

    async def developer_feed(
        self,
        filter: ActivityFilter = "all",
        unread_only: bool = False,
        limit: int = DEFAULT_DEVELOPER_LIMIT,
    ) -> tuple[list[ActivityItem], ActivitySummary]:
        """Newest-first feed of what needs the developer's attention.

        The summary covers every item before filtering and limiting.
        """
        items: list[ActivityItem] = []
        for project in await self.project_repo.list_all():
            items.extend(developer_items(project))
        items.sort(key=lambda item: item.created_at, reverse=True)

        summary = ActivitySummary(
            total=len(items),
            unread=sum(1 for item in items if not item.read),
            action_required=sum(1 for item in items if item.action_required),
            by_type={
                "messages": sum(1 for item in items if item.type == ActivityType.MESSAGE),
                "change_requests": sum(
                    1 for item in items if item.type == ActivityType.CHANGE_REQUEST
                ),
            },
        )

        if filter != "all":
            items = [item for item in items if item.type.value == filter]
        if unread_only:
            items = [item for item in items if not item.read]
        return items[: min(max(limit, 0), MAX_DEVELOPER_LIMIT)], summary

    async def mark_developer_read(self, project_id: str, activity_id: str) -> bool:
        """Mark a client message as read.

        Change request items are acknowledged by moving their status, so only
        ``msg-`` ids change anything. Returns True if a message was updated.
        """
        if not activity_id.startswith("msg-"):
            await self.project_repo.require(project_id)
            return False

        message_id = activity_id.removeprefix("msg-")
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            message = next((m for m in project.messages if m.id == message_id), None)
            if message is None:
                raise NotFoundError(f"Message {message_id} not found")
            if message.read:
                return False
            message.read = True
            project.touch()
            await self.project_repo.save(project)

        logger.info("Activity marked read", project_id=project_id, activity_id=activity_id)
        return True

    async def customer_feed(self, email: str) -> list[CustomerNotification]:
        """Up to 20 newest notifications for every project of ``email``."""
        email = email.strip().lower()
        items: list[CustomerNotification] = []
        for project in await self.project_repo.list_all():
            if project.customer.email.lower() != email:
                continue
            read_keys = {r.item_key for r in await self.receipt_repo.list_for_project(project.id)}
            for item in customer_items(project, self.app_url):
                if item.id in read_keys:
                    item = replace(item, read=True)
                items.append(item)

        items.sort(key=lambda item: item.created_at, reverse=True)
        return items[:MAX_CUSTOMER_ITEMS]

    async def mark_customer_read(self, project_id: str, item_id: str) -> bool:
        """Acknowledge a customer notification.

        The messages item flips the developer messages' read flags; any other
        item gets a receipt. Returns True if anything changed.
        """
        project = await self.project_repo.require(project_id)

        if item_id == messages_item_id(project_id):
            changed = await self.message_service.mark_read(project_id, MessageSender.CLIENT)
            return changed > 0

        if not any(item.id == item_id for item in customer_items(project, self.app_url)):
            raise NotFoundError(f"Notification {item_id} not found")

        added = await self.receipt_repo.add(
            NotificationReceipt(project_id=project_id, item_key=item_id)
        )
        if added:
            logger.info("Customer notification read", project_id=project_id)
        return added
