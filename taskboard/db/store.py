"""
Namespaced key-value storage.

Values are opaque text (serialized records); callers own the encoding.
"""
from __future__ import annotations

import abc
from typing import Dict, Optional

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.db.models.kv_model import KeyValueEntry


class KeyValueStore(abc.ABC):
    """get/set/delete over the keys of a single namespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abc.abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Create or overwrite a key."""

    @abc.abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store. Lost when the process exits."""

    def __init__(self, namespace: str = "default"):
        super().__init__(namespace)
        self._data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the ``kv_entries`` table; one session per call."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        namespace: str = "default",
    ):
        super().__init__(namespace)
        self.session_factory = session_factory

    async def get(self, key: str) -> Optional[str]:
        async with self.session_factory() as session:
            entry = await session.get(KeyValueEntry, (self.namespace, key))
            return entry.value if entry is not None else None

    async def set(self, key: str, value: str) -> None:
        async with self.session_factory() as session:
            entry = await session.get(KeyValueEntry, (self.namespace, key))
            if entry is None:
                session.add(
                    KeyValueEntry(namespace=self.namespace, key=key, value=value),
                )
            else:
                entry.value = value
            await session.commit()
        logger.debug("stored {}/{} ({} bytes)", self.namespace, key, len(value))

    async def delete(self, key: str) -> None:
        async with self.session_factory() as session:
            stmt = delete(KeyValueEntry).where(
                KeyValueEntry.namespace == self.namespace,
                KeyValueEntry.key == key,
            )
            await session.execute(stmt)
            await session.commit()
