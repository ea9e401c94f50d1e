"""Project aggregate and the records it owns.

A project is stored as a single JSON document at ``project:{id}``; messages and
change requests live inside it and cannot outlive it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.delivery.models.base import generate_id, generate_project_id, utc_now
from src.delivery.models.enums import (
    ChangeRequestCategory,
    ChangeRequestStatus,
    MessageSender,
    PackageType,
    PaymentStatus,
    Priority,
    ProjectPhase,
    ServiceType,
)

DEFAULT_REVISIONS_TOTAL = 5


class Customer(BaseModel):
    name: str
    email: str
    phone: str | None = None
    company_name: str | None = None


class Message(BaseModel):
    id: str = Field(default_factory=lambda: generate_id("msg"))
    created_at: datetime = Field(default_factory=utc_now)
    sender: MessageSender
    text: str
    read: bool = False


class ChangeRequest(BaseModel):
    id: str = Field(default_factory=lambda: generate_id("cr"))
    created_at: datetime = Field(default_factory=utc_now)
    request: str
    priority: Priority = Priority.NORMAL
    category: ChangeRequestCategory = ChangeRequestCategory.OTHER
    status: ChangeRequestStatus = ChangeRequestStatus.PENDING
    response: str | None = None
    completed_at: datetime | None = None


class Project(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_project_id)
    phase: ProjectPhase = ProjectPhase.ONBOARDING
    service_type: ServiceType = ServiceType.WEBSITE
    package_type: PackageType = PackageType.STARTER
    payment_status: PaymentStatus = PaymentStatus.PENDING
    customer: Customer
    revisions_used: int = Field(default=0, ge=0)
    revisions_total: int = Field(default=DEFAULT_REVISIONS_TOTAL, ge=0)
    messages: list[Message] = Field(default_factory=list)
    change_requests: list[ChangeRequest] = Field(default_factory=list)
    design_preview_url: str | None = None
    payment_url: str | None = None
    live_url: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def check_revision_budget(self) -> "Project":
        if self.revisions_used > self.revisions_total:
            raise ValueError("revisions_used cannot exceed revisions_total")
        return self

    @property
    def display_name(self) -> str:
        return self.customer.company_name or self.customer.name or self.id

    @property
    def revisions_remaining(self) -> int:
        return self.revisions_total - self.revisions_used

    @property
    def has_revision_budget(self) -> bool:
        return self.revisions_used < self.revisions_total

    def find_change_request(self, change_request_id: str) -> ChangeRequest | None:
        return next((cr for cr in self.change_requests if cr.id == change_request_id), None)

    def touch(self) -> None:
        self.updated_at = utc_now()
