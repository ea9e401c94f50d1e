"""Activity feeds for the developer dashboard and the customer portal."""

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import EmailStr

from src.delivery.api.dependencies import ActivityServiceDep
from src.delivery.schemas import (
    CustomerFeedResponse,
    CustomerMarkRead,
    DeveloperFeedResponse,
    DeveloperMarkRead,
    MarkReadResponse,
)
from src.delivery.schemas.activity import (
    ActivityItemRead,
    ActivitySummaryRead,
    CustomerNotificationRead,
)
from src.delivery.services.activity_service import (
    DEFAULT_DEVELOPER_LIMIT,
    MAX_DEVELOPER_LIMIT,
    ActivityFilter,
)

router = APIRouter(prefix="/activity", tags=["activity"])

# Query parameter types
FilterQuery = Annotated[ActivityFilter, Query(description="Item type filter")]
UnreadOnlyQuery = Annotated[bool, Query(description="Only unread items")]
LimitQuery = Annotated[int, Query(ge=1, le=MAX_DEVELOPER_LIMIT, description="Max items")]
EmailQuery = Annotated[EmailStr, Query(description="Customer email address")]


@router.get(
    "/developer",
    response_model=DeveloperFeedResponse,
    summary="Developer activity feed",
    description="Unread client messages and open change requests across all projects.",
)
async def developer_feed(
    activity_service: ActivityServiceDep,
    filter: FilterQuery = "all",
    unread_only: UnreadOnlyQuery = False,
    limit: LimitQuery = DEFAULT_DEVELOPER_LIMIT,
) -> DeveloperFeedResponse:
    items, summary = await activity_service.developer_feed(
        filter=filter, unread_only=unread_only, limit=limit
    )
    return DeveloperFeedResponse(
        activities=[ActivityItemRead.model_validate(item) for item in items],
        summary=ActivitySummaryRead.model_validate(summary),
    )


@router.post(
    "/developer/read",
    response_model=MarkReadResponse,
    summary="Mark developer activity read",
    responses={404: {"description": "Project or message not found"}},
)
async def mark_developer_read(
    request: DeveloperMarkRead, activity_service: ActivityServiceDep
) -> MarkReadResponse:
    updated = await activity_service.mark_developer_read(request.project_id, request.activity_id)
    return MarkReadResponse(updated=updated)


@router.get(
    "/customer",
    response_model=CustomerFeedResponse,
    summary="Customer notifications",
    description="Notifications for every project registered to the email address.",
)
async def customer_feed(email: EmailQuery, activity_service: ActivityServiceDep) -> CustomerFeedResponse:
    notifications = await activity_service.customer_feed(email)
    return CustomerFeedResponse(
        email=email,
        notifications=[CustomerNotificationRead.model_validate(n) for n in notifications],
    )


@router.post(
    "/customer/read",
    response_model=MarkReadResponse,
    summary="Mark customer notification read",
    responses={404: {"description": "Project or notification not found"}},
)
async def mark_customer_read(
    request: CustomerMarkRead, activity_service: ActivityServiceDep
) -> MarkReadResponse:
    updated = await activity_service.mark_customer_read(
        request.project_id, request.notification_id
    )
    return MarkReadResponse(updated=updated)
