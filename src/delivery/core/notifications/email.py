"""Email transport using the Resend API."""

import asyncio
import html
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

import resend

from src.delivery.core.config import get_settings
from src.delivery.core.logging import get_logger, loggable_email

logger = get_logger(__name__)

# Thread pool for email sending with timeout support
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

# Shared email styles
_BODY_STYLE = (
    "font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; "
    "line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;"
)
_BUTTON_STYLE = (
    "background-color: #2563eb; color: white; padding: 12px 24px; "
    "text-decoration: none; border-radius: 6px; display: inline-block; font-weight: 500;"
)
_LINK_STYLE = "color: #2563eb; word-break: break-all;"
_MUTED_STYLE = "color: #666; font-size: 14px;"
_QUOTE_STYLE = (
    "background: #f5f5f5; border-left: 4px solid #2563eb; padding: 12px 16px; "
    "margin: 24px 0; white-space: pre-wrap;"
)


@dataclass(frozen=True)
class EmailSendResult:
    success: bool
    id: str | None = None
    error: str | None = None


class EmailTransport(Protocol):
    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult: ...


class ResendEmailTransport:
    """Sends transactional email through Resend.

    Never raises for delivery problems; the outcome is reported in the result.
    Retries are left to the caller.
    """

    def __init__(self, api_key: str, sender: str, timeout_seconds: int):
        self.api_key = api_key
        self.sender = sender
        self.timeout_seconds = timeout_seconds

    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        resend.api_key = self.api_key

        def _send() -> str | None:
            response = resend.Emails.send(
                {
                    "from": self.sender,
                    "to": [to],
                    "subject": subject,
                    "html": html_body,
                }
            )
            return response.get("id") if response else None

        loop = asyncio.get_running_loop()
        try:
            # Use thread pool with timeout to prevent hanging on slow API responses
            email_id = await asyncio.wait_for(
                loop.run_in_executor(_email_executor, _send),
                timeout=self.timeout_seconds,
            )
            logger.info("Email sent", to=loggable_email(to), email_id=email_id)
            return EmailSendResult(success=True, id=email_id)
        except TimeoutError:
            logger.error(
                "Email send timed out", to=loggable_email(to), timeout=self.timeout_seconds
            )
            return EmailSendResult(success=False, error="Email send timed out")
        except Exception as e:
            logger.error("Failed to send email", to=loggable_email(to), error=str(e))
            return EmailSendResult(success=False, error=str(e))


def get_email_transport() -> EmailTransport | None:
    """Build the configured email transport, or None when RESEND_API_KEY is unset."""
    settings = get_settings()
    if not settings.resend_api_key:
        return None
    return ResendEmailTransport(
        api_key=settings.resend_api_key,
        sender=settings.email_from,
        timeout_seconds=settings.email_send_timeout_seconds,
    )


def render_notification_email(
    title: str,
    body: str,
    action_url: str,
    action_label: str,
    recipient_name: str | None = None,
    quote: str | None = None,
    footer: str | None = None,
) -> str:
    """Generate HTML content for a lifecycle notification email."""
    settings = get_settings()
    safe_title = html.escape(title)
    safe_body = html.escape(body)
    greeting = f"<p>Hi {html.escape(recipient_name)},</p>" if recipient_name else ""
    quote_block = f'<p style="{_QUOTE_STYLE}">{html.escape(quote)}</p>' if quote else ""
    footer_block = (
        f'<p style="{_MUTED_STYLE} margin-top: 32px;">{html.escape(footer)}</p>' if footer else ""
    )
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="{_BODY_STYLE}">
    <h1 style="color: #2563eb; margin-bottom: 24px;">{safe_title}</h1>
    {greeting}
    <p>{safe_body}</p>
    {quote_block}
    <p style="margin: 32px 0;">
        <a href="{action_url}" style="{_BUTTON_STYLE}">{html.escape(action_label)}</a>
    </p>
    <p style="{_MUTED_STYLE}">
        Or copy and paste this link into your browser:<br>
        <a href="{action_url}" style="{_LINK_STYLE}">{action_url}</a>
    </p>
    {footer_block}
    <p style="margin-top: 32px;">
        Best regards,<br>
        The {html.escape(settings.app_name)} Team
    </p>
</body>
</html>"""
