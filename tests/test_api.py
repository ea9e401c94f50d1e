"""End-to-end tests of the HTTP API over fakeredis and in-memory transports."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.delivery.api.dependencies.store import (
    get_email_transport_dep,
    get_push_transport_dep,
)
from src.delivery.main import app
from tests.helpers import RecordingEmailTransport, RecordingPushTransport

API = "/api/v1"
SUBSCRIPTION = {
    "endpoint": "https://push.example/device-1",
    "keys": {"p256dh": "p256dh-key", "auth": "auth-secret"},
}


@pytest.fixture
async def client(
    mock_redis,
    email_transport: RecordingEmailTransport,
    push_transport: RecordingPushTransport,
) -> AsyncGenerator[AsyncClient]:
    """Client against the app with Redis and both transports faked."""
    app.dependency_overrides[get_email_transport_dep] = lambda: email_transport
    app.dependency_overrides[get_push_transport_dep] = lambda: push_transport
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def create(client: AsyncClient, **overrides) -> dict:
    payload = {
        "customer": {
            "name": "Jane Baker",
            "email": "jane@example.com",
            "company_name": "Jane's Bakery",
        },
        "package_type": "starter",
        **overrides,
    }
    response = await client.post(f"{API}/projects", json=payload)
    assert response.status_code == 201
    return response.json()


class TestProjects:
    async def test_create_and_get(self, client: AsyncClient) -> None:
        project = await create(client)

        assert project["phase"] == "onboarding"
        assert project["revisions_used"] == 0
        assert project["revisions_remaining"] == 5

        response = await client.get(f"{API}/projects/{project['id']}")
        assert response.status_code == 200
        assert response.json()["customer"]["email"] == "jane@example.com"

    async def test_create_rejects_invalid_email(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/projects", json={"customer": {"name": "Jane", "email": "not-an-email"}}
        )
        assert response.status_code == 422

    async def test_unknown_project_is_404_with_request_id(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/projects/NOPE0000")

        assert response.status_code == 404
        body = response.json()
        assert body["detail"] == "Project NOPE0000 not found"
        assert body["request_id"] == response.headers["X-Request-ID"]

    async def test_list(self, client: AsyncClient) -> None:
        first = await create(client)
        second = await create(client)

        response = await client.get(f"{API}/projects")

        assert {p["id"] for p in response.json()} == {first["id"], second["id"]}

    async def test_store_unavailable_is_503(self, mock_redis_unavailable) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get(f"{API}/projects")

        assert response.status_code == 503
        assert response.json()["detail"] == "Store unavailable"


class TestPhases:
    async def test_advance(self, client: AsyncClient, email_transport) -> None:
        project = await create(client)

        response = await client.post(
            f"{API}/projects/{project['id']}/phase", json={"phase": "design"}
        )

        assert response.status_code == 200
        assert response.json()["phase"] == "design"
        # welcome on create, then the phase change
        assert [to for to, _, _ in email_transport.sent] == ["jane@example.com"] * 2

    async def test_skip_is_409(self, client: AsyncClient) -> None:
        project = await create(client)

        response = await client.post(
            f"{API}/projects/{project['id']}/phase", json={"phase": "live"}
        )

        assert response.status_code == 409
        body = response.json()
        assert body["current"] == "onboarding"
        assert body["target"] == "live"
        assert "request_id" in body

    async def test_deadlines(self, client: AsyncClient) -> None:
        project = await create(client, package_type="business")

        response = await client.get(f"{API}/projects/{project['id']}/deadlines")

        assert response.status_code == 200
        body = response.json()
        assert body["package_type"] == "business"
        assert body["current"]["phase"] == "onboarding"
        assert body["deadlines"]["live"] == body["deadlines"]["payment"]


class TestChangeRequests:
    async def test_budget_flow(self, client: AsyncClient) -> None:
        project = await create(client, revisions_total=1)
        url = f"{API}/projects/{project['id']}/change-requests"

        first = await client.post(url, json={"request": "Bigger logo", "priority": "urgent"})
        assert first.status_code == 201
        assert first.json()["revisions_remaining"] == 0

        second = await client.post(url, json={"request": "Another change"})
        assert second.status_code == 409
        assert second.json()["revisions_used"] == 1
        assert second.json()["revisions_total"] == 1

        granted = await client.post(
            f"{API}/projects/{project['id']}/revisions", json={"extra": 2}
        )
        assert granted.json()["revisions_total"] == 3

        third = await client.post(url, json={"request": "Another change"})
        assert third.status_code == 201

    async def test_status_update_and_ledger(self, client: AsyncClient) -> None:
        project = await create(client)
        created = await client.post(
            f"{API}/projects/{project['id']}/change-requests", json={"request": "Swap photo"}
        )
        cr_id = created.json()["change_request"]["id"]

        done = await client.patch(
            f"{API}/projects/{project['id']}/change-requests/{cr_id}",
            json={"status": "completed", "response": "Swapped"},
        )
        assert done.status_code == 200
        assert done.json()["completed_at"] is not None

        back = await client.patch(
            f"{API}/projects/{project['id']}/change-requests/{cr_id}",
            json={"status": "pending"},
        )
        assert back.status_code == 409

        ledger = await client.get(f"{API}/change-requests", params={"status": "completed"})
        body = ledger.json()
        assert [item["change_request"]["id"] for item in body["items"]] == [cr_id]
        assert body["items"][0]["project_name"] == "Jane's Bakery"
        assert body["stats"]["completed"] == 1

    async def test_blank_request_rejected(self, client: AsyncClient) -> None:
        project = await create(client)
        response = await client.post(
            f"{API}/projects/{project['id']}/change-requests", json={"request": "   "}
        )
        assert response.status_code == 422


class TestPush:
    async def test_subscribe_send_and_prune(self, client: AsyncClient, push_transport) -> None:
        project = await create(client)
        body = {"project_id": project["id"], "subscription": SUBSCRIPTION}

        first = await client.post(f"{API}/push/subscribe", json=body)
        again = await client.post(f"{API}/push/subscribe", json=body)
        assert first.status_code == 201
        assert first.json() == {"added": True, "total": 1}
        assert again.json() == {"added": False, "total": 1}

        push_transport.fail(SUBSCRIPTION["endpoint"], 410)
        sent = await client.post(
            f"{API}/push/send",
            json={"project_id": project["id"], "title": "Hello", "body": "Test"},
        )
        assert sent.json() == {"sent": 0, "total": 1, "pruned": 1}

        resent = await client.post(
            f"{API}/push/send",
            json={"project_id": project["id"], "title": "Hello", "body": "Test"},
        )
        assert resent.json() == {"sent": 0, "total": 0, "pruned": 0}

    async def test_unsubscribe(self, client: AsyncClient) -> None:
        project = await create(client)
        await client.post(
            f"{API}/push/subscribe",
            json={"project_id": project["id"], "subscription": SUBSCRIPTION},
        )

        response = await client.post(
            f"{API}/push/unsubscribe",
            json={"project_id": project["id"], "endpoint": SUBSCRIPTION["endpoint"]},
        )

        assert response.json() == {"removed": True}

    async def test_vapid_key(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/push/vapid-key")
        assert response.status_code == 200
        assert response.json()["enabled"] is True


class TestActivity:
    async def test_client_message_reaches_developer_feed(self, client: AsyncClient) -> None:
        project = await create(client)
        posted = await client.post(
            f"{API}/projects/{project['id']}/messages",
            json={"sender": "client", "text": "When is the design ready?"},
        )
        assert posted.status_code == 201

        feed = await client.get(f"{API}/activity/developer")
        body = feed.json()
        assert body["summary"]["unread"] == 1
        [item] = body["activities"]
        assert item["type"] == "message"

        marked = await client.post(
            f"{API}/activity/developer/read",
            json={"project_id": project["id"], "activity_id": item["id"]},
        )
        assert marked.json() == {"updated": True}

        feed = await client.get(f"{API}/activity/developer")
        assert feed.json()["activities"] == []

    async def test_customer_feed_and_read(self, client: AsyncClient) -> None:
        project = await create(client)
        await client.post(
            f"{API}/projects/{project['id']}/messages",
            json={"sender": "developer", "text": "Your design is almost done"},
        )

        feed = await client.get(f"{API}/activity/customer", params={"email": "JANE@example.com"})
        [notification] = feed.json()["notifications"]
        assert notification["read"] is False

        marked = await client.post(
            f"{API}/activity/customer/read",
            json={"project_id": project["id"], "notification_id": notification["id"]},
        )
        assert marked.json() == {"updated": True}

        feed = await client.get(f"{API}/activity/customer", params={"email": "jane@example.com"})
        assert feed.json()["notifications"] == []

    async def test_limit_bounds(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/activity/developer", params={"limit": 101})
        assert response.status_code == 422


class TestEmailLog:
    async def test_dispatch_attempts_are_logged(self, client: AsyncClient) -> None:
        project = await create(client)
        await client.post(
            f"{API}/projects/{project['id']}/reminders", json={"reminder": "onboarding"}
        )

        response = await client.get(f"{API}/email-log", params={"project_id": project["id"]})

        body = response.json()
        assert body["total"] == 2
        assert sorted(e["type"] for e in body["entries"]) == ["reminder", "welcome"]
        assert all(e["success"] for e in body["entries"])

    async def test_manual_append(self, client: AsyncClient) -> None:
        response = await client.post(
            f"{API}/email-log",
            json={
                "project_id": "EXTERNAL",
                "recipient_email": "jane@example.com",
                "type": "welcome",
            },
        )

        assert response.status_code == 201
        assert response.json()["subject"] == "Welcome!"

    async def test_limit_must_be_positive(self, client: AsyncClient) -> None:
        response = await client.get(f"{API}/email-log", params={"limit": 0})
        assert response.status_code == 422


class TestHealth:
    async def test_healthy_with_store(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["redis"] == "healthy"
        assert body["email"] == "not_configured"
        assert body["cached"] is False

    async def test_unhealthy_without_store(self, mock_redis_unavailable) -> None:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
