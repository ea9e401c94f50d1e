"""Project endpoints: onboarding, phase moves, links, messages and change requests."""

from fastapi import APIRouter, status

from src.delivery.api.dependencies import (
    ChangeRequestServiceDep,
    MessageServiceDep,
    NotificationServiceDep,
    PhaseServiceDep,
    ProjectRepo,
    ProjectServiceDep,
)
from src.delivery.core.logging import bind_project_context
from src.delivery.models.events import ReminderDue
from src.delivery.models.project import Customer
from src.delivery.schemas import (
    ChangeRequestCreate,
    ChangeRequestRead,
    ChangeRequestSubmitted,
    ChangeRequestUpdate,
    DeadlinesResponse,
    DispatchResponse,
    LinksUpdate,
    MarkedReadResponse,
    MessageCreate,
    MessageRead,
    MessagesRead,
    PhaseAdvance,
    ProjectCreate,
    ProjectRead,
    ReminderRequest,
    RevisionGrant,
)
from src.delivery.schemas.project import CurrentDeadlineRead, PhaseDeadlinesRead
from src.delivery.services.phase_service import current_deadline, derive_deadlines

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Register a new project in the onboarding phase.",
    responses={
        201: {"description": "Project created"},
        503: {"description": "Store unavailable"},
    },
)
async def create_project(
    request: ProjectCreate,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    """Create a new project."""
    project = await project_service.create(
        customer=Customer(**request.customer.model_dump()),
        service_type=request.service_type,
        package_type=request.package_type,
        revisions_total=request.revisions_total,
    )
    return ProjectRead.model_validate(project)


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List every project, newest first.",
)
async def list_projects(project_service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await project_service.list_all()
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: str, project_service: ProjectServiceDep) -> ProjectRead:
    bind_project_context(project_id)
    project = await project_service.get(project_id)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}/links",
    response_model=ProjectRead,
    summary="Update deliverable links",
    description="Set design preview, payment or live URLs. New links notify the customer.",
    responses={
        200: {"description": "Links updated"},
        404: {"description": "Project not found"},
    },
)
async def update_links(
    project_id: str,
    request: LinksUpdate,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    bind_project_context(project_id)
    project = await project_service.update_links(
        project_id,
        design_preview_url=request.design_preview_url,
        payment_url=request.payment_url,
        live_url=request.live_url,
    )
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/phase",
    response_model=ProjectRead,
    summary="Advance phase",
    description="Move the project to an adjacent phase of the delivery pipeline.",
    responses={
        200: {"description": "Phase changed (or already in that phase)"},
        404: {"description": "Project not found"},
        409: {"description": "Target phase not reachable from the current phase"},
    },
)
async def advance_phase(
    project_id: str,
    request: PhaseAdvance,
    phase_service: PhaseServiceDep,
) -> ProjectRead:
    bind_project_context(project_id)
    project = await phase_service.advance(project_id, request.phase)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}/deadlines",
    response_model=DeadlinesResponse,
    summary="Phase deadlines",
    description="Estimated per-phase target dates in workdays for the project's package.",
    responses={404: {"description": "Project not found"}},
)
async def get_deadlines(project_id: str, project_repo: ProjectRepo) -> DeadlinesResponse:
    project = await project_repo.require(project_id)
    current = current_deadline(project)
    return DeadlinesResponse(
        project_id=project.id,
        package_type=project.package_type,
        deadlines=PhaseDeadlinesRead.model_validate(derive_deadlines(project)),
        current=CurrentDeadlineRead.model_validate(current) if current else None,
    )


@router.post(
    "/{project_id}/reminders",
    response_model=DispatchResponse,
    summary="Send reminder",
    description="Notify the customer about an open action. Channel failures are reported, "
    "not raised.",
    responses={404: {"description": "Project not found"}},
)
async def send_reminder(
    project_id: str,
    request: ReminderRequest,
    project_repo: ProjectRepo,
    notification_service: NotificationServiceDep,
) -> DispatchResponse:
    bind_project_context(project_id)
    await project_repo.require(project_id)
    report = await notification_service.dispatch(
        ReminderDue(project_id=project_id, reminder=request.reminder)
    )
    return DispatchResponse(
        kind=report.kind,
        template=report.template_key,
        push_sent=report.push.sent if report.push else 0,
        push_total=report.push.total if report.push else 0,
        email_success=report.email.success if report.email else None,
        failed_channels=sorted(report.errors),
    )


@router.post(
    "/{project_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post message",
    responses={404: {"description": "Project not found"}},
)
async def post_message(
    project_id: str,
    request: MessageCreate,
    message_service: MessageServiceDep,
) -> MessageRead:
    bind_project_context(project_id)
    message = await message_service.post(project_id, request.sender, request.text)
    return MessageRead.model_validate(message)


@router.post(
    "/{project_id}/messages/read",
    response_model=MarkedReadResponse,
    summary="Mark messages read",
    description="Mark every message from the other side as read for the given reader.",
    responses={404: {"description": "Project not found"}},
)
async def mark_messages_read(
    project_id: str,
    request: MessagesRead,
    message_service: MessageServiceDep,
) -> MarkedReadResponse:
    updated = await message_service.mark_read(project_id, request.reader)
    return MarkedReadResponse(updated=updated)


@router.post(
    "/{project_id}/change-requests",
    response_model=ChangeRequestSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Submit change request",
    description="Spend one revision on a change request. The developer is notified.",
    responses={
        201: {"description": "Change request recorded"},
        404: {"description": "Project not found"},
        409: {"description": "Revision budget exhausted"},
    },
)
async def submit_change_request(
    project_id: str,
    request: ChangeRequestCreate,
    change_request_service: ChangeRequestServiceDep,
) -> ChangeRequestSubmitted:
    bind_project_context(project_id)
    change_request, project = await change_request_service.submit(
        project_id,
        request.request,
        priority=request.priority,
        category=request.category,
    )
    return ChangeRequestSubmitted(
        change_request=ChangeRequestRead.model_validate(change_request),
        revisions_used=project.revisions_used,
        revisions_total=project.revisions_total,
        revisions_remaining=project.revisions_remaining,
    )


@router.patch(
    "/{project_id}/change-requests/{change_request_id}",
    response_model=ChangeRequestRead,
    summary="Update change request",
    description="Move a change request forward (pending, in_progress, completed).",
    responses={
        404: {"description": "Project or change request not found"},
        409: {"description": "Status cannot move backwards"},
    },
)
async def update_change_request(
    project_id: str,
    change_request_id: str,
    request: ChangeRequestUpdate,
    change_request_service: ChangeRequestServiceDep,
) -> ChangeRequestRead:
    bind_project_context(project_id)
    change_request = await change_request_service.transition(
        project_id, change_request_id, request.status, response=request.response
    )
    return ChangeRequestRead.model_validate(change_request)


@router.post(
    "/{project_id}/revisions",
    response_model=ProjectRead,
    summary="Grant revisions",
    description="Raise the revision budget after an out-of-band agreement.",
    responses={404: {"description": "Project not found"}},
)
async def grant_revisions(
    project_id: str,
    request: RevisionGrant,
    change_request_service: ChangeRequestServiceDep,
) -> ProjectRead:
    bind_project_context(project_id)
    project = await change_request_service.grant_revisions(project_id, request.extra)
    return ProjectRead.model_validate(project)
