"""Unit tests for the project message thread."""

import pytest

from src.delivery.core.exceptions import NotFoundError
from src.delivery.models.enums import MessageSender
from tests.factories import MessageFactory
from tests.helpers import create_project


class TestPost:
    async def test_client_message_is_unread(self, message_service, project_repo):
        project = await create_project(project_repo)

        message = await message_service.post(project.id, MessageSender.CLIENT, "Question about fonts")

        stored = await project_repo.get_by_id(project.id)
        assert stored.messages[-1].id == message.id
        assert message.read is False

    async def test_developer_message_is_born_read(self, message_service, project_repo):
        project = await create_project(project_repo)

        message = await message_service.post(project.id, MessageSender.DEVELOPER, "Draft is up")

        assert message.read is True

    async def test_client_message_notifies_developer(
        self, message_service, project_repo, email_transport
    ):
        project = await create_project(project_repo)

        await message_service.post(project.id, MessageSender.CLIENT, "Question about fonts")

        assert [to for to, _, _ in email_transport.sent] == ["dev@agency.example"]

    async def test_developer_message_notifies_customer(
        self, message_service, project_repo, email_transport
    ):
        project = await create_project(project_repo)

        await message_service.post(project.id, MessageSender.DEVELOPER, "Draft is up")

        assert [to for to, _, _ in email_transport.sent] == [project.customer.email]

    async def test_missing_project(self, message_service):
        with pytest.raises(NotFoundError):
            await message_service.post("NOPE0000", MessageSender.CLIENT, "Hello?")


class TestMarkRead:
    async def test_developer_reads_client_messages(self, message_service, project_repo):
        project = await create_project(
            project_repo,
            messages=[
                MessageFactory.build(sender=MessageSender.CLIENT, read=False),
                MessageFactory.build(sender=MessageSender.CLIENT, read=False),
                MessageFactory.build(sender=MessageSender.DEVELOPER, read=False),
            ],
        )

        changed = await message_service.mark_read(project.id, MessageSender.DEVELOPER)

        assert changed == 2
        stored = await project_repo.get_by_id(project.id)
        assert [m.read for m in stored.messages] == [True, True, False]

    async def test_second_call_changes_nothing(self, message_service, project_repo):
        project = await create_project(
            project_repo, messages=[MessageFactory.build(sender=MessageSender.DEVELOPER)]
        )

        assert await message_service.mark_read(project.id, MessageSender.CLIENT) == 1
        assert await message_service.mark_read(project.id, MessageSender.CLIENT) == 0
