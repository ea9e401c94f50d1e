"""Email audit log schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from src.delivery.models.enums import EmailType


class EmailLogCreate(BaseModel):
    """Record an email sent outside the dispatcher (e.g. by the frontend mailer)."""

    project_id: str
    recipient_email: EmailStr
    type: EmailType = EmailType.OTHER
    success: bool = True
    subject: str | None = Field(default=None, max_length=500)
    project_name: str | None = Field(default=None, max_length=200)
    recipient_name: str | None = Field(default=None, max_length=200)
    details: str | None = Field(default=None, max_length=2000)
    error: str | None = Field(default=None, max_length=2000)


class EmailLogRead(BaseModel):
    id: str
    timestamp: datetime
    project_id: str
    project_name: str
    recipient_email: str
    recipient_name: str
    type: EmailType
    subject: str
    details: str | None
    success: bool
    error: str | None

    model_config = {"from_attributes": True}


class EmailLogResponse(BaseModel):
    entries: list[EmailLogRead]
    total: int
