"""Test doubles and helpers for common data creation patterns."""

from src.delivery.core.notifications import EmailSendResult, PushSendResult
from src.delivery.models.notifications import PushSubscription, PushSubscriptionKeys
from src.delivery.models.project import Project
from src.delivery.repositories import ProjectRepository
from tests.factories import ProjectFactory


class RecordingEmailTransport:
    """Email transport that records every send and always succeeds."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        self.sent.append((to, subject, html_body))
        return EmailSendResult(success=True, id=f"email-{len(self.sent)}")


class BrokenEmailTransport:
    """Email transport whose provider call blows up."""

    def __init__(self) -> None:
        self.calls = 0

    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        self.calls += 1
        raise ConnectionError("SMTP relay unreachable")


class RecordingPushTransport:
    """Push transport with a scripted status code per endpoint.

    Endpoints without a scripted status succeed.
    """

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.status_codes: dict[str, int] = {}

    def fail(self, endpoint: str, status_code: int) -> None:
        self.status_codes[endpoint] = status_code

    async def send(self, subscription: PushSubscription, payload: str) -> PushSendResult:
        self.sent.append((subscription.endpoint, payload))
        status_code = self.status_codes.get(subscription.endpoint)
        if status_code is None:
            return PushSendResult(success=True, status_code=201)
        return PushSendResult(success=False, status_code=status_code, error=f"HTTP {status_code}")


def make_subscription(endpoint: str) -> PushSubscription:
    return PushSubscription(
        endpoint=endpoint,
        keys=PushSubscriptionKeys(p256dh=f"p256dh-{endpoint[-4:]}", auth="auth-secret"),
    )


async def create_project(project_repo: ProjectRepository, **kwargs) -> Project:
    """Build a project with ProjectFactory and store it.

    Args:
        project_repo: Repository to store the project in
        **kwargs: Field overrides passed to ProjectFactory

    Returns:
        The stored project
    """
    project = ProjectFactory.build(**kwargs)
    await project_repo.add(project)
    return project
