"""
Selection Storage

Durable key/value storage for the active store id. Writes are synchronous;
the resolver persists every explicit selection immediately.
"""

import logging
from abc import ABC, abstractmethod

import redis

from plazoo_base.redis import get_redis_client
from plazoo_base.settings import get_settings

logger = logging.getLogger(__name__)

SELECTED_STORE_KEY = "selectedStoreId"


class SelectionStorage(ABC):
    """Simple key/value persistence."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class MemorySelectionStorage(SelectionStorage):
    """Process-local storage (tests, CLI sessions)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class RedisSelectionStorage(SelectionStorage):
    """
    Redis-backed storage, namespaced per viewer session.

    Keys look like ``plazoo:selection:<session_id>:selectedStoreId``.
    """

    def __init__(
        self,
        session_id: str,
        client: redis.Redis | None = None,
        prefix: str | None = None,
        ttl_seconds: int | None = None,
    ):
        settings = get_settings()
        self.session_id = session_id
        self.client = client if client is not None else get_redis_client()
        self.prefix = prefix or settings.SELECTION_KEY_PREFIX
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.SELECTION_TTL_SECONDS

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{self.session_id}:{key}"

    def get(self, key: str) -> str | None:
        try:
            return self.client.get(self._key(key))
        except redis.RedisError as e:
            # Resolver falls back to the first visible store
            logger.warning(f"Failed to read selection: {e}", extra={"session_id": self.session_id})
            return None

    def set(self, key: str, value: str) -> None:
        if self.ttl_seconds:
            self.client.set(self._key(key), value, ex=self.ttl_seconds)
        else:
            self.client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))
