from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.delivery.api.middlewares import setup_middlewares
from src.delivery.api.v1.router import api_router
from src.delivery.core.config import get_settings
from src.delivery.core.exceptions import setup_exception_handlers
from src.delivery.core.health import setup_health_endpoint, setup_metrics
from src.delivery.core.logging import get_logger, setup_logging
from src.delivery.core.redis import close_redis

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        f"Starting {settings.app_name}",
        email_enabled=bool(settings.resend_api_key),
        push_enabled=settings.push_enabled,
    )

    yield

    logger.info("Closing connections...")
    await close_redis()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects, phases, messages and change requests"},
    {"name": "change-requests", "description": "Change request ledger across projects"},
    {"name": "push", "description": "Web push subscriptions"},
    {"name": "activity", "description": "Developer and customer activity feeds"},
    {"name": "email-log", "description": "Audit log of notification emails"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project delivery pipeline with notification fan-out",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
