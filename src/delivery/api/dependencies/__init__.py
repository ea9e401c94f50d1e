"""FastAPI dependency injection definitions.

Re-exports all dependencies.
"""

# Repositories
from src.delivery.api.dependencies.repositories import (
    EmailLogRepo,
    ProjectRepo,
    PushSubscriptionRepo,
    ReceiptRepo,
    get_email_log_repository,
    get_project_repository,
    get_push_subscription_repository,
    get_receipt_repository,
)

# Services
from src.delivery.api.dependencies.services import (
    ActivityServiceDep,
    ChangeRequestServiceDep,
    EmailLogServiceDep,
    MessageServiceDep,
    NotificationServiceDep,
    PhaseServiceDep,
    ProjectServiceDep,
    PushServiceDep,
    get_activity_service,
    get_change_request_service,
    get_email_log_service,
    get_message_service,
    get_notification_service,
    get_phase_service,
    get_project_service,
    get_push_service,
)

# Store and transports
from src.delivery.api.dependencies.store import (
    EmailTransportDep,
    PushTransportDep,
    Store,
    get_email_transport_dep,
    get_push_transport_dep,
    get_store,
)

__all__ = [
    # Store and transports
    "EmailTransportDep",
    "PushTransportDep",
    "Store",
    "get_email_transport_dep",
    "get_push_transport_dep",
    "get_store",
    # Repositories
    "EmailLogRepo",
    "ProjectRepo",
    "PushSubscriptionRepo",
    "ReceiptRepo",
    "get_email_log_repository",
    "get_project_repository",
    "get_push_subscription_repository",
    "get_receipt_repository",
    # Services
    "ActivityServiceDep",
    "ChangeRequestServiceDep",
    "EmailLogServiceDep",
    "MessageServiceDep",
    "NotificationServiceDep",
    "PhaseServiceDep",
    "ProjectServiceDep",
    "PushServiceDep",
    "get_activity_service",
    "get_change_request_service",
    "get_email_log_service",
    "get_message_service",
    "get_notification_service",
    "get_phase_service",
    "get_project_service",
    "get_push_service",
]
