"""Email audit log endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.delivery.api.dependencies import EmailLogServiceDep
from src.delivery.schemas import EmailLogCreate, EmailLogRead, EmailLogResponse
from src.delivery.services.email_log_service import DEFAULT_QUERY_LIMIT, MAX_LOG_ENTRIES

router = APIRouter(prefix="/email-log", tags=["email-log"])

ProjectIdQuery = Annotated[str | None, Query(description="Filter by project ID")]
# Larger limits are accepted and capped to the log size
LimitQuery = Annotated[int, Query(ge=1, description="Max entries")]


@router.get(
    "",
    response_model=EmailLogResponse,
    summary="Query email log",
    description=f"Most recent email attempts, newest first. At most {MAX_LOG_ENTRIES} are kept.",
)
async def query_email_log(
    email_log_service: EmailLogServiceDep,
    project_id: ProjectIdQuery = None,
    limit: LimitQuery = DEFAULT_QUERY_LIMIT,
) -> EmailLogResponse:
    entries = await email_log_service.query(project_id=project_id, limit=limit)
    return EmailLogResponse(
        entries=[EmailLogRead.model_validate(e) for e in entries],
        total=len(entries),
    )


@router.post(
    "",
    response_model=EmailLogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Append email log entry",
)
async def append_email_log(
    request: EmailLogCreate, email_log_service: EmailLogServiceDep
) -> EmailLogRead:
    entry = await email_log_service.record(
        project_id=request.project_id,
        recipient_email=request.recipient_email,
        email_type=request.type,
        success=request.success,
        subject=request.subject,
        project_name=request.project_name,
        recipient_name=request.recipient_name,
        details=request.details,
        error=request.error,
    )
    return EmailLogRead.model_validate(entry)
