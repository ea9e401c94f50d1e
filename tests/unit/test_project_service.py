"""Unit tests for project creation and deliverable links."""

import string
from datetime import timedelta

import pytest

from src.delivery.core.exceptions import NotFoundError
from src.delivery.core.store import PROJECTS_SET
from src.delivery.models.enums import EmailType, PackageType, ProjectPhase, ServiceType
from tests.factories import CustomerFactory, utc_now
from tests.helpers import create_project


class TestCreate:
    async def test_new_project_starts_onboarding(self, project_service, project_repo, store):
        customer = CustomerFactory.build()

        project = await project_service.create(
            customer, service_type=ServiceType.WEBSHOP, package_type=PackageType.WEBSHOP
        )

        assert project.phase == ProjectPhase.ONBOARDING
        assert project.revisions_used == 0
        assert project.revisions_total == 5
        assert len(project.id) == 8
        assert set(project.id) <= set(string.ascii_uppercase + string.digits)
        stored = await project_repo.get_by_id(project.id)
        assert stored.model_dump() == project.model_dump()
        assert project.id in await store.members(PROJECTS_SET)

    async def test_welcome_email_on_create(
        self, project_service, email_log_service, email_transport
    ):
        customer = CustomerFactory.build()

        project = await project_service.create(customer)

        [entry] = await email_log_service.query(project_id=project.id)
        assert entry.type == EmailType.WELCOME
        assert entry.details == "welcome"
        assert entry.success
        assert [to for to, _, _ in email_transport.sent] == [project.customer.email]

    async def test_custom_revision_budget(self, project_service):
        project = await project_service.create(CustomerFactory.build(), revisions_total=2)
        assert project.revisions_total == 2

    async def test_list_newest_first(self, project_service, project_repo):
        now = utc_now()
        old = await create_project(project_repo, created_at=now - timedelta(days=2))
        new = await create_project(project_repo, created_at=now)

        projects = await project_service.list_all()

        assert [p.id for p in projects] == [new.id, old.id]

    async def test_get_missing(self, project_service):
        with pytest.raises(NotFoundError):
            await project_service.get("NOPE0000")


class TestUpdateLinks:
    async def test_new_link_notifies_customer(
        self, project_service, project_repo, email_log_service
    ):
        project = await create_project(project_repo, phase=ProjectPhase.PAYMENT)

        updated = await project_service.update_links(project.id, payment_url="https://pay.example")

        assert updated.payment_url == "https://pay.example"
        [entry] = await email_log_service.query(project_id=project.id)
        assert entry.type == EmailType.PAYMENT_LINK
        assert entry.recipient_email == project.customer.email

    async def test_unchanged_link_is_silent(self, project_service, project_repo, email_log_service):
        project = await create_project(project_repo, live_url="https://site.example")

        await project_service.update_links(project.id, live_url="https://site.example")

        assert await email_log_service.query() == []

    async def test_each_link_dispatches_once(
        self, project_service, project_repo, email_log_service
    ):
        project = await create_project(project_repo)

        await project_service.update_links(
            project.id,
            design_preview_url="https://preview.example",
            live_url="https://site.example",
        )

        entries = await email_log_service.query(project_id=project.id)
        assert sorted(e.details for e in entries) == ["design_ready", "website_live"]
