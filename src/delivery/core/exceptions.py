"""Domain errors and the exception handlers that render them with request_id."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.delivery.core.logging import get_logger

logger = get_logger(__name__)


class DeliveryError(Exception):
    """Base class for business-state errors surfaced to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, **extra: Any):
        super().__init__(detail)
        self.detail = detail
        self.extra = extra


class NotFoundError(DeliveryError):
    """Project, change request or message does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(DeliveryError):
    """Phase or status move not permitted from the current state."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, current: str, target: str, reason: str | None = None):
        detail = f"Cannot move from '{current}' to '{target}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail, current=current, target=target)
        self.current = current
        self.target = target


class BudgetExhaustedError(DeliveryError):
    """No revisions left on the project."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, revisions_used: int, revisions_total: int):
        super().__init__(
            "All revisions have been used. Contact us for additional revisions.",
            revisions_used=revisions_used,
            revisions_total=revisions_total,
        )
        self.revisions_used = revisions_used
        self.revisions_total = revisions_total


class ChannelUnavailableError(Exception):
    """A notification transport is not configured or failed.

    Never rendered to a caller: the dispatcher records it in the audit log.
    """

    def __init__(self, channel: str, reason: str):
        super().__init__(f"{channel} channel unavailable: {reason}")
        self.channel = channel
        self.reason = reason


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DeliveryError)
    async def delivery_error_handler(request: Request, exc: DeliveryError) -> JSONResponse:
        logger.info(
            "Request rejected",
            error=type(exc).__name__,
            detail=exc.detail,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
                **exc.extra,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
