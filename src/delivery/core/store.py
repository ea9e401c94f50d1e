"""JSON key-value store over Redis.

Values are stored as JSON strings. Sets hold plain string members.
"""

import asyncio
import json
import weakref
from typing import Any

from redis.asyncio import Redis

PREFIX_PROJECT = "project"
PREFIX_PUSH = "push"
PREFIX_RECEIPTS = "receipts"
PROJECTS_SET = "projects"
EMAIL_LOG_KEY = "email_log"

# In-process mutexes, one per key. Shared by every KeyValueStore instance so that
# two requests mutating the same project serialize their read-modify-write.
# An entry lives only while some coroutine holds or awaits the lock.
_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()


def project_key(project_id: str) -> str:
    return f"{PREFIX_PROJECT}:{project_id}"


def push_key(project_id: str) -> str:
    return f"{PREFIX_PUSH}:{project_id}"


def receipts_key(project_id: str) -> str:
    return f"{PREFIX_RECEIPTS}:{project_id}"


class KeyValueStore:
    """Generic get/set/set-membership persistence."""

    def __init__(self, redis: Redis):
        self.redis = redis

    async def get(self, key: str) -> Any | None:
        raw = await self.redis.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(key, json.dumps(value))

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def members(self, set_key: str) -> list[str]:
        members = await self.redis.smembers(set_key)  # type: ignore[misc]
        return sorted(members)

    async def add_member(self, set_key: str, member: str) -> None:
        await self.redis.sadd(set_key, member)  # type: ignore[misc]

    async def remove_member(self, set_key: str, member: str) -> None:
        await self.redis.srem(set_key, member)  # type: ignore[misc]

    def lock(self, key: str) -> asyncio.Lock:
        """Return the in-process mutex guarding read-modify-write on ``key``.

        Only serializes writers inside this process; separate workers still race
        with last-writer-wins semantics on the whole value.
        """
        lock = _locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            _locks[key] = lock
        return lock


def reset_locks() -> None:
    """Drop all key locks (tests run each case on a fresh event loop)."""
    _locks.clear()
