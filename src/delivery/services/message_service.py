"""Project message thread between customer and developer."""

from src.delivery.core.logging import get_logger
from src.delivery.models.enums import MessageSender
from src.delivery.models.events import MessagePosted
from src.delivery.models.project import Message
from src.delivery.repositories import ProjectRepository
from src.delivery.services.notification_service import NotificationService

logger = get_logger(__name__)


class MessageService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        notification_service: NotificationService,
    ):
        self.project_repo = project_repo
        self.notification_service = notification_service

    async def post(self, project_id: str, sender: MessageSender, text: str) -> Message:
        """Append a message and notify the other side.

        A developer's own message needs no read receipt, so it is stored read.
        """
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            message = Message(sender=sender, text=text, read=sender == MessageSender.DEVELOPER)
            project.messages.append(message)
            project.touch()
            await self.project_repo.save(project)

        logger.info(
            "Message posted",
            project_id=project_id,
            message_id=message.id,
            sender=sender.value,
        )
        await self.notification_service.dispatch(
            MessagePosted(project_id=project_id, sender=sender, preview=text)
        )
        return message

    async def mark_read(self, project_id: str, reader: MessageSender) -> int:
        """Mark every message written by the other side as read.

        Returns the number of messages that changed.
        """
        author = MessageSender.CLIENT if reader == MessageSender.DEVELOPER else MessageSender.DEVELOPER
        async with self.project_repo.lock_project(project_id):
            project = await self.project_repo.require(project_id)
            changed = 0
            for message in project.messages:
                if message.sender == author and not message.read:
                    message.read = True
                    changed += 1
            if changed:
                await self.project_repo.save(project)

        if changed:
            logger.info(
                "Messages marked read",
                project_id=project_id,
                reader=reader.value,
                count=changed,
            )
        return changed
