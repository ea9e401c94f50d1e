"""Notification templates: event -> title/body/requireInteraction.

``require_interaction`` is a fixed policy: only design-ready, payment-due and
website-live notifications demand an explicit click from the customer.
"""

from dataclasses import dataclass
from typing import assert_never

from src.delivery.core.config import get_settings
from src.delivery.models.enums import Audience, EmailType, Priority, ProjectPhase
from src.delivery.models.events import (
    ChangeRequestCreated,
    DesignReady,
    MessagePosted,
    NotificationEvent,
    PaymentRequired,
    PhaseChanged,
    ProjectCreated,
    ReminderDue,
    WebsiteLive,
)

PREVIEW_LENGTH = 50

REQUIRE_INTERACTION = frozenset(
    {"design_ready", "phase_payment", "payment_required", "phase_live", "website_live"}
)

PRIORITY_LABELS = {
    Priority.LOW: "Low",
    Priority.NORMAL: "Normal",
    Priority.URGENT: "Urgent",
}


@dataclass(frozen=True)
class NotificationTemplate:
    key: str
    title: str
    body: str
    email_type: EmailType
    url: str

    @property
    def require_interaction(self) -> bool:
        return self.key in REQUIRE_INTERACTION


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    text = text.strip()
    if len(text) <= length:
        return text
    return f"{text[:length]}..."


def event_url(event: NotificationEvent) -> str:
    """Where the recipient should land when opening the notification."""
    settings = get_settings()
    if event.audience == Audience.DEVELOPER:
        return f"{settings.app_url}/developer"
    return f"{settings.app_url}/status/{event.project_id}"


def _phase_template(phase: ProjectPhase) -> tuple[str, str, str]:
    match phase:
        case ProjectPhase.ONBOARDING:
            return (
                "welcome",
                "Welcome aboard",
                "Your project has been created. Complete the onboarding to get started.",
            )
        case ProjectPhase.DESIGN:
            return (
                "phase_design",
                "Design phase started",
                "We have started designing your website!",
            )
        case ProjectPhase.FEEDBACK:
            return (
                "design_ready",
                "Design ready for review",
                "Your design preview is ready to view!",
            )
        case ProjectPhase.REVISIE:
            return (
                "phase_revisie",
                "Feedback received",
                "We are processing your feedback. You will hear from us soon!",
            )
        case ProjectPhase.PAYMENT:
            return (
                "phase_payment",
                "Payment required",
                "Your design is approved! Complete the payment to go live.",
            )
        case ProjectPhase.REVIEW:
            return (
                "phase_review",
                "Final review",
                "We are doing the final checks before your website goes live.",
            )
        case ProjectPhase.LIVE:
            return (
                "phase_live",
                "Your website is live!",
                "Congratulations! Your website is now online.",
            )
        case _:
            assert_never(phase)


def resolve_template(event: NotificationEvent) -> NotificationTemplate:
    """Resolve the template for an event."""
    url = event_url(event)
    match event:
        case ProjectCreated():
            key, title, body = _phase_template(ProjectPhase.ONBOARDING)
            return NotificationTemplate(key, title, body, EmailType.WELCOME, url)
        case PhaseChanged(phase=phase):
            key, title, body = _phase_template(phase)
            return NotificationTemplate(key, title, body, EmailType.PHASE_CHANGE, url)
        case MessagePosted(preview=text):
            body = f'"{preview(text)}"' if text else "You have received a new message."
            return NotificationTemplate("new_message", "New message", body, EmailType.MESSAGE, url)
        case DesignReady():
            return NotificationTemplate(
                "design_ready",
                "Design ready!",
                "Your design preview is ready to view!",
                EmailType.DESIGN_LINK,
                url,
            )
        case PaymentRequired():
            return NotificationTemplate(
                "payment_required",
                "Payment required",
                "Complete the payment to put your website live.",
                EmailType.PAYMENT_LINK,
                url,
            )
        case WebsiteLive():
            return NotificationTemplate(
                "website_live",
                "Your website is live!",
                "Congratulations! Your website is now online.",
                EmailType.LIVE_LINK,
                url,
            )
        case ChangeRequestCreated(priority=priority, revisions_used=used, revisions_total=total):
            return NotificationTemplate(
                "change_request_created",
                f"New change request ({PRIORITY_LABELS[priority]})",
                f"Revisions used: {used} / {total}",
                EmailType.CHANGE_REQUEST,
                url,
            )
        case ReminderDue(reminder=reminder):
            title, body = _reminder_text(reminder)
            return NotificationTemplate(f"{reminder}_reminder", title, body, EmailType.REMINDER, url)
        case _:
            assert_never(event)


def _reminder_text(reminder: str) -> tuple[str, str]:
    match reminder:
        case "deadline":
            return "Action required", "There is an open action for your project."
        case "onboarding":
            return "Onboarding reminder", "Don't forget to finish your onboarding!"
        case "feedback":
            return "Feedback reminder", "Your design is waiting for your feedback!"
        case "payment":
            return "Payment reminder", "Complete your payment to put your website live!"
        case _:
            raise ValueError(f"Unknown reminder kind: {reminder}")
