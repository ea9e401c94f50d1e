"""Notification fan-out: one lifecycle event -> push, email + audit.

Dispatch is synchronous and best-effort. Each channel is isolated: an
exception in one is caught and logged and never reaches the caller or the
other channel. There is no queue and no retry loop; a failed attempt is
terminal and visible only through the email audit log and the logs.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from src.delivery.core.config import get_settings
from src.delivery.core.exceptions import ChannelUnavailableError
from src.delivery.core.logging import get_logger, loggable_email
from src.delivery.core.notifications import (
    EmailSendResult,
    EmailTransport,
    render_notification_email,
)
from src.delivery.models.enums import Audience
from src.delivery.models.events import (
    ChangeRequestCreated,
    MessagePosted,
    NotificationEvent,
)
from src.delivery.models.notifications import EmailLogEntry
from src.delivery.models.project import Project
from src.delivery.repositories import ProjectRepository
from src.delivery.services.email_log_service import EmailLogService
from src.delivery.services.push_service import PushDeliveryReport, PushService
from src.delivery.services.templates import NotificationTemplate, resolve_template

logger = get_logger(__name__)

PUSH_ICON = "/favicon.svg"


@dataclass
class DispatchReport:
    """What happened on each channel for one event."""

    kind: str
    template_key: str
    push: PushDeliveryReport | None = None
    email: EmailLogEntry | None = None
    errors: dict[str, str] = field(default_factory=dict)


def build_push_payload(
    project_id: str,
    key: str,
    title: str,
    body: str,
    url: str,
    require_interaction: bool,
    timestamp: str,
) -> dict[str, Any]:
    return {
        "title": title,
        "body": body,
        "icon": PUSH_ICON,
        "badge": PUSH_ICON,
        "tag": f"{key}-{project_id}",
        "data": {
            "project_id": project_id,
            "type": key,
            "url": url,
            "timestamp": timestamp,
        },
        "actions": [
            {"action": "open", "title": "View"},
            {"action": "dismiss", "title": "Later"},
        ],
        "requireInteraction": require_interaction,
    }


class NotificationService:
    """Dispatches lifecycle events to every notification channel."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        push_service: PushService,
        email_log_service: EmailLogService,
        email_transport: EmailTransport | None,
    ):
        self.project_repo = project_repo
        self.push_service = push_service
        self.email_log_service = email_log_service
        self.email_transport = email_transport

    async def dispatch(self, event: NotificationEvent) -> DispatchReport:
        """Fan one event out. Never raises."""
        template = resolve_template(event)
        report = DispatchReport(kind=event.kind, template_key=template.key)

        # Activity feed needs nothing here: it projects the message/change request
        # the caller already persisted.
        await asyncio.gather(
            self._run_channel("push", report, self._push_channel(event, template, report)),
            self._run_channel("email", report, self._email_channel(event, template, report)),
        )

        logger.info(
            "Notification dispatched",
            kind=event.kind,
            template=template.key,
            project_id=event.project_id,
            push_sent=report.push.sent if report.push else None,
            push_total=report.push.total if report.push else None,
            email_success=report.email.success if report.email else None,
            failed_channels=sorted(report.errors),
        )
        return report

    async def _run_channel(self, channel: str, report: DispatchReport, work: Any) -> None:
        try:
            await work
        except Exception as e:
            report.errors[channel] = str(e)
            logger.error(
                "Notification channel failed",
                channel=channel,
                kind=report.kind,
                error=str(e),
            )

    async def _push_channel(
        self,
        event: NotificationEvent,
        template: NotificationTemplate,
        report: DispatchReport,
    ) -> None:
        # Push endpoints belong to the customer's devices
        if event.audience != Audience.CUSTOMER:
            return
        payload = build_push_payload(
            project_id=event.project_id,
            key=template.key,
            title=template.title,
            body=template.body,
            url=template.url,
            require_interaction=template.require_interaction,
            timestamp=event.timestamp.isoformat(),
        )
        report.push = await self.push_service.send(event.project_id, payload)

    async def _email_channel(
        self,
        event: NotificationEvent,
        template: NotificationTemplate,
        report: DispatchReport,
    ) -> None:
        settings = get_settings()
        project = await self.project_repo.get_by_id(event.project_id)

        if event.audience == Audience.DEVELOPER:
            recipient_email, recipient_name = settings.developer_email, "Developer"
        elif project is not None:
            recipient_email, recipient_name = project.customer.email, project.customer.name
        else:
            recipient_email, recipient_name = "", ""

        subject = self._subject(template, project)
        try:
            result = await self._send_email(event, template, project, recipient_email, subject)
        except ChannelUnavailableError as e:
            result = EmailSendResult(success=False, error=e.reason)
            logger.warning(
                "Email channel unavailable",
                project_id=event.project_id,
                to=loggable_email(recipient_email),
                reason=e.reason,
            )
        except Exception as e:
            result = EmailSendResult(success=False, error=str(e))
            logger.error(
                "Email transport raised",
                project_id=event.project_id,
                to=loggable_email(recipient_email),
                error=str(e),
            )

        # Every attempt is audited, sent or not
        report.email = await self.email_log_service.record(
            project_id=event.project_id,
            project_name=project.display_name if project else None,
            recipient_email=recipient_email,
            recipient_name=recipient_name,
            email_type=template.email_type,
            subject=subject,
            details=template.key,
            success=result.success,
            error=result.error,
        )

    async def _send_email(
        self,
        event: NotificationEvent,
        template: NotificationTemplate,
        project: Project | None,
        recipient_email: str,
        subject: str,
    ) -> EmailSendResult:
        if project is None:
            raise ChannelUnavailableError("email", f"project {event.project_id} not found")
        if not recipient_email:
            raise ChannelUnavailableError("email", "no recipient address")
        if self.email_transport is None:
            raise ChannelUnavailableError("email", "email transport not configured")

        html_body = render_notification_email(
            title=template.title,
            body=template.body,
            action_url=template.url,
            action_label="Open dashboard" if event.audience == Audience.DEVELOPER else "View",
            recipient_name=project.customer.name if event.audience == Audience.CUSTOMER else None,
            quote=self._quote(event),
            footer=f"Project ID: {project.id}",
        )
        return await self.email_transport.send(recipient_email, subject, html_body)

    @staticmethod
    def _subject(template: NotificationTemplate, project: Project | None) -> str:
        if project is None:
            return template.title
        return f"{template.title} - {project.display_name}"

    @staticmethod
    def _quote(event: NotificationEvent) -> str | None:
        match event:
            case ChangeRequestCreated(request=request):
                return request
            case MessagePosted(preview=text):
                return text or None
            case _:
                return None
