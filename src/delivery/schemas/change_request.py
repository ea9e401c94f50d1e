"""Change request schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.delivery.models.enums import (
    ChangeRequestCategory,
    ChangeRequestStatus,
    Priority,
    ProjectPhase,
)


class ChangeRequestCreate(BaseModel):
    request: str = Field(min_length=1, max_length=5000)
    priority: Priority = Priority.NORMAL
    category: ChangeRequestCategory = ChangeRequestCategory.OTHER

    @field_validator("request")
    @classmethod
    def validate_request(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Request cannot be empty or whitespace only")
        return v


class ChangeRequestUpdate(BaseModel):
    status: ChangeRequestStatus
    response: str | None = Field(default=None, max_length=5000)


class ChangeRequestRead(BaseModel):
    id: str
    created_at: datetime
    request: str
    priority: Priority
    category: ChangeRequestCategory
    status: ChangeRequestStatus
    response: str | None
    completed_at: datetime | None

    model_config = {"from_attributes": True}


class ChangeRequestSubmitted(BaseModel):
    change_request: ChangeRequestRead
    revisions_used: int
    revisions_total: int
    revisions_remaining: int


class RevisionGrant(BaseModel):
    extra: int = Field(ge=1, le=100)


class LedgerEntryRead(BaseModel):
    change_request: ChangeRequestRead
    project_id: str
    project_name: str
    customer_email: str
    phase: ProjectPhase
    revisions_used: int
    revisions_total: int

    model_config = {"from_attributes": True}


class LedgerStatsRead(BaseModel):
    total: int
    pending: int
    in_progress: int
    completed: int

    model_config = {"from_attributes": True}


class LedgerResponse(BaseModel):
    items: list[LedgerEntryRead]
    stats: LedgerStatsRead
