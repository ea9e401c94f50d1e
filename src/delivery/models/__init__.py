from src.delivery.models.enums import (
    ActivityType,
    Audience,
    ChangeRequestCategory,
    ChangeRequestStatus,
    EmailType,
    MessageSender,
    PackageType,
    PaymentStatus,
    Priority,
    ProjectPhase,
    ServiceType,
)
from src.delivery.models.events import (
    ChangeRequestCreated,
    DesignReady,
    MessagePosted,
    NotificationEvent,
    PaymentRequired,
    PhaseChanged,
    ProjectCreated,
    ReminderDue,
    WebsiteLive,
)
from src.delivery.models.notifications import (
    EmailLogEntry,
    NotificationReceipt,
    PushSubscription,
    PushSubscriptionKeys,
)
from src.delivery.models.project import ChangeRequest, Customer, Message, Project

__all__ = [
    "ActivityType",
    "Audience",
    "ChangeRequest",
    "ChangeRequestCategory",
    "ChangeRequestCreated",
    "ChangeRequestStatus",
    "Customer",
    "DesignReady",
    "EmailLogEntry",
    "EmailType",
    "Message",
    "MessagePosted",
    "MessageSender",
    "NotificationEvent",
    "NotificationReceipt",
    "PackageType",
    "PaymentRequired",
    "PaymentStatus",
    "PhaseChanged",
    "Priority",
    "Project",
    "ProjectCreated",
    "ProjectPhase",
    "PushSubscription",
    "PushSubscriptionKeys",
    "ReminderDue",
    "ServiceType",
    "WebsiteLive",
]
