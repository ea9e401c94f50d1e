import asyncio

from src.delivery.core.exceptions import NotFoundError
from src.delivery.core.store import PROJECTS_SET, project_key
from src.delivery.models.project import Project
from src.delivery.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Project records at ``project:{id}``, enumerated by the ``projects`` set."""

    model = Project

    async def get_by_id(self, project_id: str) -> Project | None:
        return await self._load(project_key(project_id))

    async def require(self, project_id: str) -> Project:
        """Get a project or raise NotFoundError."""
        project = await self.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def exists(self, project_id: str) -> bool:
        return await self.get_by_id(project_id) is not None

    async def add(self, project: Project) -> None:
        await self._save(project_key(project.id), project)
        await self.store.add_member(PROJECTS_SET, project.id)

    async def save(self, project: Project) -> None:
        await self._save(project_key(project.id), project)

    async def list_all(self) -> list[Project]:
        """Load every project listed in the ``projects`` set.

        Ids whose record has disappeared are skipped.
        """
        ids = await self.store.members(PROJECTS_SET)
        projects = await asyncio.gather(*(self.get_by_id(project_id) for project_id in ids))
        return [project for project in projects if project is not None]

    def lock_project(self, project_id: str) -> asyncio.Lock:
        """Mutex for read-modify-write on one project record."""
        return self.lock(project_key(project_id))
