from src.delivery.schemas.activity import (
    CustomerFeedResponse,
    CustomerMarkRead,
    DeveloperFeedResponse,
    DeveloperMarkRead,
    MarkReadResponse,
)
from src.delivery.schemas.change_request import (
    ChangeRequestCreate,
    ChangeRequestRead,
    ChangeRequestSubmitted,
    ChangeRequestUpdate,
    LedgerResponse,
    RevisionGrant,
)
from src.delivery.schemas.email_log import EmailLogCreate, EmailLogRead, EmailLogResponse
from src.delivery.schemas.project import (
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
)
from src.delivery.schemas.push import (
    PushSendRequest,
    PushSendResponse,
    SubscribeRequest,
    SubscribeResponse,
    UnsubscribeRequest,
    UnsubscribeResponse,
    VapidKeyResponse,
)

__all__ = [
    # Activity
    "CustomerFeedResponse",
    "CustomerMarkRead",
    "DeveloperFeedResponse",
    "DeveloperMarkRead",
    "MarkReadResponse",
    # Change requests
    "ChangeRequestCreate",
    "ChangeRequestRead",
    "ChangeRequestSubmitted",
    "ChangeRequestUpdate",
    "LedgerResponse",
    "RevisionGrant",
    # Email log
    "EmailLogCreate",
    "EmailLogRead",
    "EmailLogResponse",
    # Projects
    "DeadlinesResponse",
    "DispatchResponse",
    "LinksUpdate",
    "MarkedReadResponse",
    "MessageCreate",
    "MessageRead",
    "MessagesRead",
    "PhaseAdvance",
    "ProjectCreate",
    "ProjectRead",
    "ReminderRequest",
    # Push
    "PushSendRequest",
    "PushSendResponse",
    "SubscribeRequest",
    "SubscribeResponse",
    "UnsubscribeRequest",
    "UnsubscribeResponse",
    "VapidKeyResponse",
]
