"""Project onboarding and deliverable links."""

from src.delivery.core.config import get_settings
from src.delivery.core.logging import bind_project_context, get_logger
from src.delivery.models.enums import PackageType, ServiceType
from src.delivery.models.events import (
    DesignReady,
    NotificationEvent,
    PaymentRequired,
    ProjectCreated,
    WebsiteLive,
)
from src.delivery.models.project import Customer, Project
from src.delivery.repositories import ProjectRepository
from src.delivery.services.notification_service import NotificationService

logger = get_logger(__name__)

# Regenerating on collision; the id space is 36^8
MAX_ID_ATTEMPTS = 5


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        notification_service: NotificationService,
    ):
        self.project_repo = project_repo
        self.notification_service = notification_service

    async def create(
        self,
        customer: Customer,
        service_type: ServiceType = ServiceType.WEBSITE,
        package_type: PackageType = PackageType.STARTER,
        revisions_total: int | None = None,
    ) -> Project:
        """Register a new project in the onboarding phase and welcome the customer."""
        if revisions_total is None:
            revisions_total = get_settings().default_revisions_total

        for _ in range(MAX_ID_ATTEMPTS):
            project = Project(
                customer=customer,
                service_type=service_type,
                package_type=package_type,
                revisions_total=revisions_total,
            )
            if not await self.project_repo.exists(project.id):
                break
        else:
            raise RuntimeError("Could not allocate a unique project id")

        await self.project_repo.add(project)
        bind_project_context(project.id)
        logger.info(
            "Project created",
            project_id=project.id,
            service_type=service_type.value,
            package_type=package_type.value,
            revisions_total=revisions_total,
        )
        await self.notification_service.dispatch(ProjectCreated(project_id=project.id))
        return project

    async def get(self, project_id: str) -> Project:
        return await self.project_repo.require(project_id)

    async def list_all(self) -> list[Project]:
        projects = await self.project_repo.list_all()
        return sorted(projects, key=lambda p: p.created_at, reverse=True)

    async def update_links(
        self,
        project_id: str,
        design_preview_url: str | None = None,
        payment_url: str | None = None,
        live_url: str | None = None,
    ) -> Project:
        """Set deliverable links. Each newly set or changed link notifies the customer."""
        events: list[NotificationEvent] = []
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)

            if design_preview_url and design_preview_url != project.design_preview_url:
                project.design_preview_url = design_preview_url
                events.append(DesignReady(project_id=project_id, preview_url=design_preview_url))
            if payment_url and payment_url != project.payment_url:
                project.payment_url = payment_url
                events.append(PaymentRequired(project_id=project_id, payment_url=payment_url))
            if live_url and live_url != project.live_url:
                project.live_url = live_url
                events.append(WebsiteLive(project_id=project_id, live_url=live_url))

            if events:
                project.touch()
                await self.project_repo.save(project)

        for event in events:
            logger.info("Project link updated", project_id=project_id, kind=event.kind)
            await self.notification_service.dispatch(event)
        return project
