"""Shared enums for models."""

from enum import Enum


class ProjectPhase(str, Enum):
    """Stage of a project in the delivery pipeline."""

    ONBOARDING = "onboarding"
    DESIGN = "design"
    FEEDBACK = "feedback"
    REVISIE = "revisie"
    PAYMENT = "payment"
    REVIEW = "review"
    LIVE = "live"


class PackageType(str, Enum):
    STARTER = "starter"
    PROFESSIONAL = "professional"
    BUSINESS = "business"
    WEBSHOP = "webshop"


class ServiceType(str, Enum):
    WEBSITE = "website"
    WEBSHOP = "webshop"
    LOGO = "logo"
    DRONE = "drone"


class PaymentStatus(str, Enum):
    """Populated by the payment gateway integration; read-only here."""

    NOT_REQUIRED = "not_required"
    PENDING = "pending"
    AWAITING_PAYMENT = "awaiting_payment"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class ChangeRequestStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    ChangeRequestStatus.PENDING: 0,
    ChangeRequestStatus.IN_PROGRESS: 1,
    ChangeRequestStatus.COMPLETED: 2,
}


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    URGENT = "urgent"


class ChangeRequestCategory(str, Enum):
    TEXT = "text"
    DESIGN = "design"
    IMAGES = "images"
    FUNCTIONALITY = "functionality"
    OTHER = "other"


class MessageSender(str, Enum):
    CLIENT = "client"
    DEVELOPER = "developer"


class Audience(str, Enum):
    """Who a notification event is addressed to."""

    CUSTOMER = "customer"
    DEVELOPER = "developer"


class EmailType(str, Enum):
    """Category recorded on each email audit entry."""

    PHASE_CHANGE = "phase_change"
    DESIGN_LINK = "design_link"
    PAYMENT_LINK = "payment_link"
    LIVE_LINK = "live_link"
    MESSAGE = "message"
    CHANGE_REQUEST = "change_request"
    REMINDER = "reminder"
    WELCOME = "welcome"
    OTHER = "other"


class ActivityType(str, Enum):
    MESSAGE = "message"
    CHANGE_REQUEST = "change_request"
    STATUS_UPDATE = "status_update"
    PAYMENT = "payment"
