"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.delivery.models.enums import (
    MessageSender,
    PackageType,
    PaymentStatus,
    ProjectPhase,
    ServiceType,
)
from src.delivery.models.events import ReminderKind
from src.delivery.schemas.change_request import ChangeRequestRead


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Value cannot be empty or whitespace only")
    return v


class CustomerIn(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)
    company_name: str | None = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _strip_required(v)


class ProjectCreate(BaseModel):
    """Schema for onboarding a project."""

    customer: CustomerIn
    service_type: ServiceType = ServiceType.WEBSITE
    package_type: PackageType = PackageType.STARTER
    revisions_total: int | None = Field(default=None, ge=0, le=100)


class LinksUpdate(BaseModel):
    """Deliverable links. Omitted fields are left unchanged."""

    design_preview_url: str | None = Field(default=None, max_length=2000)
    payment_url: str | None = Field(default=None, max_length=2000)
    live_url: str | None = Field(default=None, max_length=2000)


class PhaseAdvance(BaseModel):
    phase: ProjectPhase


class ReminderRequest(BaseModel):
    reminder: ReminderKind = "deadline"


class CustomerRead(BaseModel):
    name: str
    email: str
    phone: str | None
    company_name: str | None

    model_config = {"from_attributes": True}


class MessageRead(BaseModel):
    id: str
    created_at: datetime
    sender: MessageSender
    text: str
    read: bool

    model_config = {"from_attributes": True}


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: str
    phase: ProjectPhase
    service_type: ServiceType
    package_type: PackageType
    payment_status: PaymentStatus
    customer: CustomerRead
    revisions_used: int
    revisions_total: int
    revisions_remaining: int
    messages: list[MessageRead]
    change_requests: list[ChangeRequestRead]
    design_preview_url: str | None
    payment_url: str | None
    live_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PhaseDeadlinesRead(BaseModel):
    onboarding: datetime
    design: datetime
    feedback: datetime
    payment: datetime
    live: datetime

    model_config = {"from_attributes": True}


class CurrentDeadlineRead(BaseModel):
    phase: ProjectPhase
    deadline: datetime
    days_remaining: int
    is_overdue: bool
    is_urgent: bool

    model_config = {"from_attributes": True}


class DeadlinesResponse(BaseModel):
    project_id: str
    package_type: PackageType
    deadlines: PhaseDeadlinesRead
    current: CurrentDeadlineRead | None


class MessageCreate(BaseModel):
    sender: MessageSender
    text: str = Field(min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _strip_required(v)


class MessagesRead(BaseModel):
    """Marks the other side's messages as read for ``reader``."""

    reader: MessageSender


class MarkedReadResponse(BaseModel):
    updated: int


class DispatchResponse(BaseModel):
    """Outcome of an on-demand notification."""

    kind: str
    template: str
    push_sent: int
    push_total: int
    email_success: bool | None
    failed_channels: list[str]
