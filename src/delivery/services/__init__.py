from src.delivery.services.activity_service import ActivityService
from src.delivery.services.change_request_service import ChangeRequestService
from src.delivery.services.email_log_service import EmailLogService
from src.delivery.services.message_service import MessageService
from src.delivery.services.notification_service import NotificationService
from src.delivery.services.phase_service import PhaseService
from src.delivery.services.project_service import ProjectService
from src.delivery.services.push_service import PushService

__all__ = [
    "ActivityService",
    "ChangeRequestService",
    "EmailLogService",
    "MessageService",
    "NotificationService",
    "PhaseService",
    "ProjectService",
    "PushService",
]
