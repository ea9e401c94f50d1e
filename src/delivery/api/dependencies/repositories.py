"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.delivery.api.dependencies.store import Store
from src.delivery.repositories import (
    EmailLogRepository,
    ProjectRepository,
    PushSubscriptionRepository,
    ReceiptRepository,
)


def get_project_repository(store: Store) -> ProjectRepository:
    return ProjectRepository(store)


def get_push_subscription_repository(store: Store) -> PushSubscriptionRepository:
    return PushSubscriptionRepository(store)


def get_email_log_repository(store: Store) -> EmailLogRepository:
    return EmailLogRepository(store)


def get_receipt_repository(store: Store) -> ReceiptRepository:
    return ReceiptRepository(store)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
PushSubscriptionRepo = Annotated[
    PushSubscriptionRepository, Depends(get_push_subscription_repository)
]
EmailLogRepo = Annotated[EmailLogRepository, Depends(get_email_log_repository)]
ReceiptRepo = Annotated[ReceiptRepository, Depends(get_receipt_repository)]
