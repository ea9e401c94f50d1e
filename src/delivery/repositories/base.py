"""Base repository with common JSON document operations."""

import asyncio
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from src.delivery.core.store import KeyValueStore

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Base repository mapping pydantic models to JSON values in the store.

    Repositories handle data access only. Business rules belong to the
    service layer.
    """

    model: type[ModelType]

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def _load(self, key: str) -> ModelType | None:
        data = await self.store.get(key)
        if data is None:
            return None
        return self.model.model_validate(data)

    async def _save(self, key: str, entity: ModelType) -> None:
        await self.store.set(key, entity.model_dump(mode="json"))

    async def _load_list(self, key: str) -> list[ModelType]:
        data: list[Any] | None = await self.store.get(key)
        if not data:
            return []
        return [self.model.model_validate(item) for item in data]

    async def _save_list(self, key: str, entities: list[ModelType]) -> None:
        await self.store.set(key, [entity.model_dump(mode="json") for entity in entities])

    def lock(self, key: str) -> asyncio.Lock:
        return self.store.lock(key)
