from src.delivery.repositories.base import BaseRepository
from src.delivery.repositories.notification_repository import (
    EmailLogRepository,
    PushSubscriptionRepository,
    ReceiptRepository,
)
from src.delivery.repositories.project_repository import ProjectRepository

__all__ = [
    "BaseRepository",
    "EmailLogRepository",
    "ProjectRepository",
    "PushSubscriptionRepository",
    "ReceiptRepository",
]
