"""Async string key-value store backed by the ``kv_store`` table."""

import logging
from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from versekeep.models import KeyValue

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying store cannot be read or written."""


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def multi_get(self, keys: Sequence[str]) -> list[str | None]: ...

    async def multi_set(self, pairs: Sequence[tuple[str, str]]) -> None: ...


class SqlKeyValueStore:
    """KeyValueStore over SQLAlchemy's async ORM.

    ``multi_set`` writes every pair in a single transaction.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self.sessionmaker = sessionmaker

    async def get(self, key: str) -> str | None:
        try:
            async with self.sessionmaker() as session:
                row = await session.get(KeyValue, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Key-value read failed for %s: %s", key, e)
            raise StorageError(str(e)) from e

    async def set(self, key: str, value: str) -> None:
        await self.multi_set([(key, value)])

    async def multi_get(self, keys: Sequence[str]) -> list[str | None]:
        if not keys:
            return []
        try:
            async with self.sessionmaker() as session:
                result = await session.execute(select(KeyValue).where(KeyValue.key.in_(keys)))
                found = {row.key: row.value for row in result.scalars().all()}
        except SQLAlchemyError as e:
            logger.error("Key-value read failed for %s: %s", list(keys), e)
            raise StorageError(str(e)) from e
        return [found.get(key) for key in keys]

    async def multi_set(self, pairs: Sequence[tuple[str, str]]) -> None:
        if not pairs:
            return
        try:
            async with self.sessionmaker() as session:
                for key, value in pairs:
                    row = await session.get(KeyValue, key)
                    if row is None:
                        session.add(KeyValue(key=key, value=value))
                    else:
                        row.value = value
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Key-value write failed for %s: %s", [k for k, _ in pairs], e)
            raise StorageError(str(e)) from e
