"""Activity feed schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr

from src.delivery.models.enums import (
    ActivityType,
    ChangeRequestCategory,
    ChangeRequestStatus,
    Priority,
)


class ActivityItemRead(BaseModel):
    id: str
    type: ActivityType
    project_id: str
    project_name: str
    contact_name: str
    contact_email: str
    title: str
    description: str
    priority: Priority | None
    category: ChangeRequestCategory | None
    status: ChangeRequestStatus | None
    created_at: datetime
    read: bool
    action_required: bool

    model_config = {"from_attributes": True}


class ActivitySummaryRead(BaseModel):
    total: int
    unread: int
    action_required: int
    by_type: dict[str, int]

    model_config = {"from_attributes": True}


class DeveloperFeedResponse(BaseModel):
    activities: list[ActivityItemRead]
    summary: ActivitySummaryRead


class DeveloperMarkRead(BaseModel):
    project_id: str
    activity_id: str


class CustomerNotificationRead(BaseModel):
    id: str
    level: Literal["info", "success", "warning", "action"]
    title: str
    message: str
    link: str
    created_at: datetime
    project_id: str
    read: bool

    model_config = {"from_attributes": True}


class CustomerFeedResponse(BaseModel):
    email: EmailStr
    notifications: list[CustomerNotificationRead]


class CustomerMarkRead(BaseModel):
    project_id: str
    notification_id: str


class MarkReadResponse(BaseModel):
    updated: bool
