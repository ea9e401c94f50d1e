"""Web push subscription registry with prune-on-gone delivery."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any

from src.delivery.core.config import get_settings
from src.delivery.core.logging import get_logger
from src.delivery.core.notifications import PushTransport
from src.delivery.models.notifications import PushSubscription
from src.delivery.repositories import ProjectRepository, PushSubscriptionRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class PushDeliveryReport:
    sent: int
    total: int
    pruned: int = 0


class PushService:
    """Stores web-push endpoints per project and fans payloads out to them."""

    def __init__(
        self,
        push_repo: PushSubscriptionRepository,
        project_repo: ProjectRepository,
        transport: PushTransport | None,
    ):
        self.push_repo = push_repo
        self.project_repo = project_repo
        self.transport = transport

    @property
    def enabled(self) -> bool:
        return self.transport is not None

    def vapid_public_key(self) -> str | None:
        return get_settings().vapid_public_key

    async def list_subscriptions(self, project_id: str) -> list[PushSubscription]:
        return await self.push_repo.list_for_project(project_id)

    async def subscribe(self, project_id: str, subscription: PushSubscription) -> bool:
        """Register an endpoint. Re-subscribing a known endpoint is a no-op.

        Returns True if the subscription was added.
        """
        await self.project_repo.require(project_id)

        async with self.push_repo.lock_project(project_id):
            subscriptions = await self.push_repo.list_for_project(project_id)
            if any(s.endpoint == subscription.endpoint for s in subscriptions):
                return False
            subscriptions.append(subscription)
            await self.push_repo.replace(project_id, subscriptions)

        logger.info("Push subscription added", project_id=project_id, total=len(subscriptions))
        return True

    async def unsubscribe(self, project_id: str, endpoint: str) -> bool:
        """Remove an endpoint. The registry key is deleted when nothing is left.

        Returns True if an endpoint was removed.
        """
        async with self.push_repo.lock_project(project_id):
            removed = await self._remove_endpoints(project_id, {endpoint})

        if removed:
            logger.info("Push subscription removed", project_id=project_id)
        return removed > 0

    async def send(self, project_id: str, payload: dict[str, Any]) -> PushDeliveryReport:
        """Deliver ``payload`` to every subscription of the project.

        Endpoints answered with 404/410 are pruned. Any other failure is treated
        as transient and the subscription is kept. Never raises for individual
        subscriber failures.
        """
        subscriptions = await self.push_repo.list_for_project(project_id)
        total = len(subscriptions)
        if total == 0:
            logger.debug("No push subscriptions", project_id=project_id)
            return PushDeliveryReport(sent=0, total=0)

        if self.transport is None:
            logger.info("Push not configured (VAPID keys not set)", project_id=project_id)
            return PushDeliveryReport(sent=0, total=total)

        body = json.dumps(payload)
        results = await asyncio.gather(
            *(self.transport.send(subscription, body) for subscription in subscriptions),
            return_exceptions=True,
        )

        sent = 0
        gone: set[str] = set()
        for subscription, result in zip(subscriptions, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(
                    "Push transport raised", project_id=project_id, error=str(result)
                )
                continue
            if result.success:
                sent += 1
            elif result.endpoint_gone:
                gone.add(subscription.endpoint)
            else:
                logger.warning(
                    "Push send failed",
                    project_id=project_id,
                    status_code=result.status_code,
                    error=result.error,
                )

        pruned = 0
        if gone:
            async with self.push_repo.lock_project(project_id):
                pruned = await self._remove_endpoints(project_id, gone)
            logger.info("Pruned gone push endpoints", project_id=project_id, pruned=pruned)

        logger.info("Push notifications sent", project_id=project_id, sent=sent, total=total)
        return PushDeliveryReport(sent=sent, total=total, pruned=pruned)

    async def _remove_endpoints(self, project_id: str, endpoints: set[str]) -> int:
        # Caller holds the project's push lock; re-read so concurrent subscribes survive
        subscriptions = await self.push_repo.list_for_project(project_id)
        remaining = [s for s in subscriptions if s.endpoint not in endpoints]
        removed = len(subscriptions) - len(remaining)
        if removed:
            await self.push_repo.replace(project_id, remaining)
        return removed
