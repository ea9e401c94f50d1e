"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.delivery.api.dependencies.repositories import (
    EmailLogRepo,
    ProjectRepo,
    PushSubscriptionRepo,
    ReceiptRepo,
)
from src.delivery.api.dependencies.store import EmailTransportDep, PushTransportDep
from src.delivery.core.config import get_settings
from src.delivery.services import (
    ActivityService,
    ChangeRequestService,
    EmailLogService,
    MessageService,
    NotificationService,
    PhaseService,
    ProjectService,
    PushService,
)


def get_email_log_service(email_log_repo: EmailLogRepo) -> EmailLogService:
    return EmailLogService(email_log_repo)


def get_push_service(
    push_repo: PushSubscriptionRepo,
    project_repo: ProjectRepo,
    transport: PushTransportDep,
) -> PushService:
    return PushService(push_repo, project_repo, transport)


EmailLogServiceDep = Annotated[EmailLogService, Depends(get_email_log_service)]
PushServiceDep = Annotated[PushService, Depends(get_push_service)]


def get_notification_service(
    project_repo: ProjectRepo,
    push_service: PushServiceDep,
    email_log_service: EmailLogServiceDep,
    email_transport: EmailTransportDep,
) -> NotificationService:
    """Get the notification dispatcher wired to the configured transports."""
    return NotificationService(project_repo, push_service, email_log_service, email_transport)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_project_service(
    project_repo: ProjectRepo, notification_service: NotificationServiceDep
) -> ProjectService:
    return ProjectService(project_repo, notification_service)


def get_phase_service(
    project_repo: ProjectRepo, notification_service: NotificationServiceDep
) -> PhaseService:
    return PhaseService(project_repo, notification_service)


def get_change_request_service(
    project_repo: ProjectRepo, notification_service: NotificationServiceDep
) -> ChangeRequestService:
    return ChangeRequestService(project_repo, notification_service)


def get_message_service(
    project_repo: ProjectRepo, notification_service: NotificationServiceDep
) -> MessageService:
    return MessageService(project_repo, notification_service)


MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]


def get_activity_service(
    project_repo: ProjectRepo,
    receipt_repo: ReceiptRepo,
    message_service: MessageServiceDep,
) -> ActivityService:
    return ActivityService(project_repo, receipt_repo, message_service, get_settings().app_url)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
PhaseServiceDep = Annotated[PhaseService, Depends(get_phase_service)]
ChangeRequestServiceDep = Annotated[ChangeRequestService, Depends(get_change_request_service)]
ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]
