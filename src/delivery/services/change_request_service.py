"""Change request ledger: revision budget and request lifecycle."""

from dataclasses import dataclass

from src.delivery.core.exceptions import (
    BudgetExhaustedError,
    InvalidTransitionError,
    NotFoundError,
)
from src.delivery.core.logging import get_logger
from src.delivery.models.base import utc_now
from src.delivery.models.enums import (
    ChangeRequestCategory,
    ChangeRequestStatus,
    Priority,
    ProjectPhase,
)
from src.delivery.models.events import ChangeRequestCreated
from src.delivery.models.project import ChangeRequest, Project
from src.delivery.repositories import ProjectRepository
from src.delivery.services.notification_service import NotificationService

logger = get_logger(__name__)


@dataclass(frozen=True)
class LedgerEntry:
    """A change request with the context of the project it belongs to."""

    change_request: ChangeRequest
    project_id: str
    project_name: str
    customer_email: str
    phase: ProjectPhase
    revisions_used: int
    revisions_total: int


@dataclass(frozen=True)
class LedgerStats:
    total: int
    pending: int
    in_progress: int
    completed: int


def ledger_sort_key(entry: LedgerEntry) -> tuple[int, float]:
    """Open items first, newest first within a status."""
    cr = entry.change_request
    return cr.status.rank, -cr.created_at.timestamp()


class ChangeRequestService:
    """Records change requests against a project's revision budget."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        notification_service: NotificationService,
    ):
        self.project_repo = project_repo
        self.notification_service = notification_service

    async def submit(
        self,
        project_id: str,
        text: str,
        priority: Priority = Priority.NORMAL,
        category: ChangeRequestCategory = ChangeRequestCategory.OTHER,
    ) -> tuple[ChangeRequest, Project]:
        """Append a pending change request and spend one revision.

        Raises BudgetExhaustedError (state untouched) when no revisions are left.
        The developer is notified after the record is saved; notification
        failures do not affect the result.
        """
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            if not project.has_revision_budget:
                raise BudgetExhaustedError(project.revisions_used, project.revisions_total)

            change_request = ChangeRequest(request=text, priority=priority, category=category)
            project.change_requests.append(change_request)
            project.revisions_used += 1
            project.touch()
            await self.project_repo.save(project)

        logger.info(
            "Change request submitted",
            project_id=project_id,
            change_request_id=change_request.id,
            priority=priority.value,
            revisions_used=project.revisions_used,
            revisions_total=project.revisions_total,
        )
        await self.notification_service.dispatch(
            ChangeRequestCreated(
                project_id=project_id,
                change_request_id=change_request.id,
                priority=priority,
                request=text,
                revisions_used=project.revisions_used,
                revisions_total=project.revisions_total,
            )
        )
        return change_request, project

    async def transition(
        self,
        project_id: str,
        change_request_id: str,
        new_status: ChangeRequestStatus,
        response: str | None = None,
    ) -> ChangeRequest:
        """Move a change request forward and optionally attach a response.

        Status never regresses. Repeating the current status only updates the
        response. Completed requests cannot change status again.
        """
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            change_request = project.find_change_request(change_request_id)
            if change_request is None:
                raise NotFoundError(f"Change request {change_request_id} not found")

            current = change_request.status
            if new_status.rank < current.rank:
                raise InvalidTransitionError(current.value, new_status.value)

            change_request.status = new_status
            if response is not None:
                change_request.response = response
            if new_status == ChangeRequestStatus.COMPLETED and change_request.completed_at is None:
                change_request.completed_at = utc_now()
            project.touch()
            await self.project_repo.save(project)

        logger.info(
            "Change request updated",
            project_id=project_id,
            change_request_id=change_request_id,
            previous_status=current.value,
            status=new_status.value,
        )
        return change_request

    async def grant_revisions(self, project_id: str, extra: int) -> Project:
        """Raise the revision budget after an out-of-band agreement."""
        if extra < 1:
            raise ValueError("extra must be at least 1")

        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            project.revisions_total += extra
            project.touch()
            await self.project_repo.save(project)

        logger.info(
            "Revisions granted",
            project_id=project_id,
            extra=extra,
            revisions_total=project.revisions_total,
        )
        return project

    async def list_all(
        self, status: ChangeRequestStatus | None = None
    ) -> tuple[list[LedgerEntry], LedgerStats]:
        """All change requests across projects, open items first.

        Stats count every request regardless of the status filter.
        """
        entries: list[LedgerEntry] = []
        for project in await self.project_repo.list_all():
            for cr in project.change_requests:
                entries.append(
                    LedgerEntry(
                        change_request=cr,
                        project_id=project.id,
                        project_name=project.display_name,
                        customer_email=project.customer.email,
                        phase=project.phase,
                        revisions_used=project.revisions_used,
                        revisions_total=project.revisions_total,
                    )
                )

        stats = LedgerStats(
            total=len(entries),
            pending=_count(entries, ChangeRequestStatus.PENDING),
            in_progress=_count(entries, ChangeRequestStatus.IN_PROGRESS),
            completed=_count(entries, ChangeRequestStatus.COMPLETED),
        )
        if status is not None:
            entries = [e for e in entries if e.change_request.status == status]
        entries.sort(key=ledger_sort_key)
        return entries, stats


def _count(entries: list[LedgerEntry], status: ChangeRequestStatus) -> int:
    return sum(1 for e in entries if e.change_request.status == status)
