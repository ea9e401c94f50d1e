"""Web push subscription endpoints."""

from fastapi import APIRouter, status

from src.delivery.api.dependencies import PushServiceDep
from src.delivery.core.config import get_settings
from src.delivery.models.base import utc_now
from src.delivery.schemas import (
    PushSendRequest,
    PushSendResponse,
    SubscribeRequest,
    SubscribeResponse,
    UnsubscribeRequest,
    UnsubscribeResponse,
    VapidKeyResponse,
)
from src.delivery.services.notification_service import build_push_payload

router = APIRouter(prefix="/push", tags=["push"])


@router.get(
    "/vapid-key",
    response_model=VapidKeyResponse,
    summary="VAPID public key",
    description="Public key browsers need to create a subscription.",
)
async def get_vapid_key(push_service: PushServiceDep) -> VapidKeyResponse:
    return VapidKeyResponse(
        public_key=push_service.vapid_public_key(),
        enabled=push_service.enabled,
    )


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe device",
    description="Register a push endpoint for a project. Known endpoints are not duplicated.",
    responses={404: {"description": "Project not found"}},
)
async def subscribe(request: SubscribeRequest, push_service: PushServiceDep) -> SubscribeResponse:
    added = await push_service.subscribe(request.project_id, request.subscription)
    subscriptions = await push_service.list_subscriptions(request.project_id)
    return SubscribeResponse(added=added, total=len(subscriptions))


@router.post(
    "/unsubscribe",
    response_model=UnsubscribeResponse,
    summary="Unsubscribe device",
)
async def unsubscribe(
    request: UnsubscribeRequest, push_service: PushServiceDep
) -> UnsubscribeResponse:
    removed = await push_service.unsubscribe(request.project_id, request.endpoint)
    return UnsubscribeResponse(removed=removed)


@router.post(
    "/send",
    response_model=PushSendResponse,
    summary="Send push",
    description="Send a custom notification to every device of a project. "
    "Gone endpoints are pruned.",
)
async def send_push(request: PushSendRequest, push_service: PushServiceDep) -> PushSendResponse:
    url = request.url or f"{get_settings().app_url}/status/{request.project_id}"
    payload = build_push_payload(
        project_id=request.project_id,
        key=request.type,
        title=request.title,
        body=request.body,
        url=url,
        require_interaction=request.require_interaction,
        timestamp=utc_now().isoformat(),
    )
    report = await push_service.send(request.project_id, payload)
    return PushSendResponse.model_validate(report)
