"""Project phase state machine and deadline estimates."""

from dataclasses import dataclass
from datetime import datetime

from src.delivery.core.calendar import add_workdays
from src.delivery.core.exceptions import InvalidTransitionError
from src.delivery.core.logging import get_logger
from src.delivery.models.base import utc_now
from src.delivery.models.enums import PackageType, ProjectPhase
from src.delivery.models.events import PhaseChanged
from src.delivery.models.project import Project
from src.delivery.repositories import ProjectRepository
from src.delivery.services.notification_service import NotificationService

logger = get_logger(__name__)

# Moves into or back out of the revision loop spend design time and are only
# allowed while the project still has revision budget.
TRANSITIONS: dict[ProjectPhase, frozenset[ProjectPhase]] = {
    ProjectPhase.ONBOARDING: frozenset({ProjectPhase.DESIGN}),
    ProjectPhase.DESIGN: frozenset({ProjectPhase.FEEDBACK, ProjectPhase.REVISIE}),
    ProjectPhase.FEEDBACK: frozenset({ProjectPhase.REVISIE, ProjectPhase.PAYMENT}),
    ProjectPhase.REVISIE: frozenset({ProjectPhase.DESIGN, ProjectPhase.FEEDBACK}),
    ProjectPhase.PAYMENT: frozenset({ProjectPhase.REVIEW}),
    ProjectPhase.REVIEW: frozenset({ProjectPhase.LIVE}),
    ProjectPhase.LIVE: frozenset(),
}

BUDGET_GUARDED: frozenset[tuple[ProjectPhase, ProjectPhase]] = frozenset(
    {
        (ProjectPhase.DESIGN, ProjectPhase.REVISIE),
        (ProjectPhase.FEEDBACK, ProjectPhase.REVISIE),
        (ProjectPhase.REVISIE, ProjectPhase.DESIGN),
    }
)


@dataclass(frozen=True)
class PackageDurations:
    """Workdays per phase for a package."""

    design: int
    feedback: int
    payment: int
    total: int
    onboarding: int = 1


PACKAGE_DURATIONS: dict[PackageType, PackageDurations] = {
    PackageType.STARTER: PackageDurations(design=3, feedback=5, payment=2, total=10),
    PackageType.PROFESSIONAL: PackageDurations(design=4, feedback=7, payment=3, total=14),
    PackageType.BUSINESS: PackageDurations(design=5, feedback=10, payment=3, total=18),
    PackageType.WEBSHOP: PackageDurations(design=5, feedback=14, payment=4, total=23),
}

URGENT_WITHIN_DAYS = 2


@dataclass(frozen=True)
class PhaseDeadlines:
    onboarding: datetime
    design: datetime
    feedback: datetime
    payment: datetime
    live: datetime

    def for_phase(self, phase: ProjectPhase) -> datetime | None:
        """Deadline shown while the project sits in ``phase``; None after payment."""
        match phase:
            case ProjectPhase.ONBOARDING:
                return self.onboarding
            case ProjectPhase.DESIGN:
                return self.design
            case ProjectPhase.FEEDBACK | ProjectPhase.REVISIE:
                return self.feedback
            case ProjectPhase.PAYMENT:
                return self.payment
            case _:
                return None


@dataclass(frozen=True)
class DeadlineStatus:
    phase: ProjectPhase
    deadline: datetime
    days_remaining: int
    is_overdue: bool
    is_urgent: bool


def can_transition(project: Project, target: ProjectPhase) -> bool:
    current = project.phase
    if target not in TRANSITIONS[current]:
        return False
    if (current, target) in BUDGET_GUARDED:
        return project.has_revision_budget
    return True


def derive_deadlines(project: Project) -> PhaseDeadlines:
    """Estimated per-phase target dates counted in workdays from project creation.

    For display only; deadlines never gate transitions.
    """
    durations = PACKAGE_DURATIONS.get(project.package_type, PACKAGE_DURATIONS[PackageType.STARTER])
    onboarding_end = add_workdays(project.created_at, durations.onboarding)
    design_end = add_workdays(onboarding_end, durations.design)
    feedback_end = add_workdays(design_end, durations.feedback)
    payment_end = add_workdays(feedback_end, durations.payment)
    return PhaseDeadlines(
        onboarding=onboarding_end,
        design=design_end,
        feedback=feedback_end,
        payment=payment_end,
        live=payment_end,
    )


def current_deadline(project: Project, now: datetime | None = None) -> DeadlineStatus | None:
    deadline = derive_deadlines(project).for_phase(project.phase)
    if deadline is None:
        return None
    now = now or utc_now()
    delta = deadline - now
    is_overdue = delta.total_seconds() < 0
    days = abs(delta).days
    return DeadlineStatus(
        phase=project.phase,
        deadline=deadline,
        days_remaining=-days if is_overdue else days,
        is_overdue=is_overdue,
        is_urgent=not is_overdue and days < URGENT_WITHIN_DAYS,
    )


class PhaseService:
    """Validates and applies phase transitions."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        notification_service: NotificationService,
    ):
        self.project_repo = project_repo
        self.notification_service = notification_service

    async def advance(self, project_id: str, target: ProjectPhase) -> Project:
        """Move a project to ``target``.

        Moving to the current phase is a no-op: nothing is written and no
        event is emitted. Raises NotFoundError or InvalidTransitionError.
        """
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            previous = project.phase

            if target == previous:
                return project

            if target not in TRANSITIONS[previous]:
                raise InvalidTransitionError(previous.value, target.value)
            if not can_transition(project, target):
                raise InvalidTransitionError(
                    previous.value,
                    target.value,
                    reason=(
                        f"revision budget exhausted "
                        f"({project.revisions_used}/{project.revisions_total})"
                    ),
                )

            project.phase = target
            project.touch()
            await self.project_repo.save(project)

        logger.info(
            "Project phase changed",
            project_id=project_id,
            previous_phase=previous.value,
            phase=target.value,
        )
        await self.notification_service.dispatch(
            PhaseChanged(project_id=project_id, phase=target, previous_phase=previous)
        )
        return project
