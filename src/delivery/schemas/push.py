"""Web push schemas."""

from pydantic import BaseModel, Field

from src.delivery.models.notifications import PushSubscription


class VapidKeyResponse(BaseModel):
    public_key: str | None
    enabled: bool


class SubscribeRequest(BaseModel):
    project_id: str
    subscription: PushSubscription


class SubscribeResponse(BaseModel):
    added: bool
    total: int


class UnsubscribeRequest(BaseModel):
    project_id: str
    endpoint: str


class UnsubscribeResponse(BaseModel):
    removed: bool


class PushSendRequest(BaseModel):
    """Ad-hoc push to every device of a project."""

    project_id: str
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1, max_length=1000)
    url: str | None = None
    type: str = "custom"
    require_interaction: bool = False


class PushSendResponse(BaseModel):
    sent: int
    total: int
    pruned: int

    model_config = {"from_attributes": True}
