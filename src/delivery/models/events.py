"""Lifecycle events handed to the notification dispatcher.

Events are ephemeral: they are built by the service that performed the
mutation, dispatched once and never stored. ``NotificationEvent`` is a closed
union discriminated by ``kind``; consumers resolve it with ``match``.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from src.delivery.models.base import utc_now
from src.delivery.models.enums import Audience, MessageSender, Priority, ProjectPhase

ReminderKind = Literal["deadline", "onboarding", "feedback", "payment"]


class _EventBase(BaseModel):
    project_id: str
    timestamp: datetime = Field(default_factory=utc_now)

    @property
    def audience(self) -> Audience:
        return Audience.CUSTOMER


class ProjectCreated(_EventBase):
    kind: Literal["project_created"] = "project_created"


class PhaseChanged(_EventBase):
    kind: Literal["phase_change"] = "phase_change"
    phase: ProjectPhase
    previous_phase: ProjectPhase


class MessagePosted(_EventBase):
    kind: Literal["new_message"] = "new_message"
    sender: MessageSender
    preview: str = ""

    @property
    def audience(self) -> Audience:
        # A client message is news for the developer and vice versa
        if self.sender == MessageSender.CLIENT:
            return Audience.DEVELOPER
        return Audience.CUSTOMER


class DesignReady(_EventBase):
    kind: Literal["design_ready"] = "design_ready"
    preview_url: str


class PaymentRequired(_EventBase):
    kind: Literal["payment_required"] = "payment_required"
    payment_url: str


class WebsiteLive(_EventBase):
    kind: Literal["website_live"] = "website_live"
    live_url: str


class ChangeRequestCreated(_EventBase):
    kind: Literal["change_request_created"] = "change_request_created"
    change_request_id: str
    priority: Priority
    request: str
    revisions_used: int
    revisions_total: int

    @property
    def audience(self) -> Audience:
        return Audience.DEVELOPER


class ReminderDue(_EventBase):
    kind: Literal["reminder"] = "reminder"
    reminder: ReminderKind


NotificationEvent = Annotated[
    ProjectCreated
    | PhaseChanged
    | MessagePosted
    | DesignReady
    | PaymentRequired
    | WebsiteLive
    | ChangeRequestCreated
    | ReminderDue,
    Field(discriminator="kind"),
]
