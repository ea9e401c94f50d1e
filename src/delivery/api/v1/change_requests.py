"""Cross-project change request ledger."""

from typing import Annotated

from fastapi import APIRouter, Query

from src.delivery.api.dependencies import ChangeRequestServiceDep
from src.delivery.models.enums import ChangeRequestStatus
from src.delivery.schemas import LedgerResponse
from src.delivery.schemas.change_request import LedgerEntryRead, LedgerStatsRead

router = APIRouter(prefix="/change-requests", tags=["change-requests"])

StatusQuery = Annotated[ChangeRequestStatus | None, Query(description="Filter by status")]


@router.get(
    "",
    response_model=LedgerResponse,
    summary="List change requests",
    description="Every change request across projects, open items first, newest first.",
)
async def list_change_requests(
    change_request_service: ChangeRequestServiceDep,
    status: StatusQuery = None,
) -> LedgerResponse:
    entries, stats = await change_request_service.list_all(status)
    return LedgerResponse(
        items=[LedgerEntryRead.model_validate(e) for e in entries],
        stats=LedgerStatsRead.model_validate(stats),
    )
