"""Store and transport dependencies."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from src.delivery.core.notifications import (
    EmailTransport,
    PushTransport,
    get_email_transport,
    get_push_transport,
)
from src.delivery.core.redis import get_redis
from src.delivery.core.store import KeyValueStore


async def get_store() -> KeyValueStore:
    """Get the key-value store, or answer 503 when Redis is unavailable."""
    redis = await get_redis()
    if redis is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store unavailable",
        )
    return KeyValueStore(redis)


def get_email_transport_dep() -> EmailTransport | None:
    return get_email_transport()


def get_push_transport_dep() -> PushTransport | None:
    return get_push_transport()


Store = Annotated[KeyValueStore, Depends(get_store)]
EmailTransportDep = Annotated[EmailTransport | None, Depends(get_email_transport_dep)]
PushTransportDep = Annotated[PushTransport | None, Depends(get_push_transport_dep)]
