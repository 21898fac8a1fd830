"""
Persistent key-value store.

Every persisted record (entity collections, config, session pointer, UI
preferences) is one JSON value under a fixed key. Writes are synchronous from
the caller's point of view: a mutation is only considered saved once the
transaction holding it has committed.
"""
from typing import Any, Dict, Iterable, Optional
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docuflow.core.database.engine import session_scope
from docuflow.core.database.models import StoreEntry
from docuflow.core.errors import PersistenceError
from docuflow.utils import get_logger


log = get_logger(__name__)


# Persisted keys
DOCUMENTS = "documents"
CATEGORIES = "categories"
DEPARTMENTS = "departments"
ROLES = "roles"
USERS = "users"
CONFIG = "config"
ACTIVITY_LOG = "activityLog"
CURRENT_USER = "currentUser"
SIDEBAR_COLLAPSED = "sidebarCollapsed"
REMEMBERED_EMAIL = "rememberedEmail"

# Keys that make up a backup file
BACKUP_KEYS = (DOCUMENTS, CATEGORIES, DEPARTMENTS, ROLES, USERS, CONFIG, ACTIVITY_LOG)

# Keys cleared by a restore or a reset
RESETTABLE_KEYS = BACKUP_KEYS + (CURRENT_USER, SIDEBAR_COLLAPSED)


class PersistentStore:
    """Async key-value store over the ``store_entries`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str, default: Any = None) -> Any:
        try:
            async with session_scope(self._session_factory) as session:
                entry = await session.get(StoreEntry, key)
                return default if entry is None else entry.value
        except SQLAlchemyError as e:
            log.error("Failed to read key %s: %s", key, e)
            raise PersistenceError(f"Could not read '{key}' from storage.") from e

    async def set(self, key: str, value: Any) -> None:
        try:
            async with session_scope(self._session_factory) as session:
                await self._put(session, key, value)
        except SQLAlchemyError as e:
            log.error("Failed to persist key %s: %s", key, e)
            raise PersistenceError(f"Could not save '{key}'.") from e
        log.debug("Persisted %s", key)

    async def remove(self, *keys: str) -> None:
        if not keys:
            return
        try:
            async with session_scope(self._session_factory) as session:
                await session.execute(delete(StoreEntry).where(StoreEntry.key.in_(keys)))
        except SQLAlchemyError as e:
            log.error("Failed to remove keys %s: %s", keys, e)
            raise PersistenceError("Could not remove data from storage.") from e

    async def snapshot(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Return the stored values for ``keys``; missing keys are left out."""
        keys = list(keys)
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(StoreEntry).where(StoreEntry.key.in_(keys)))
                entries = {entry.key: entry.value for entry in result.scalars().all()}
        except SQLAlchemyError as e:
            log.error("Failed to read snapshot: %s", e)
            raise PersistenceError("Could not read data from storage.") from e
        return {key: entries[key] for key in keys if key in entries}

    async def replace_all(self, data: Dict[str, Any], clear: Iterable[str]) -> None:
        """
        Remove every key in ``clear`` and write ``data`` in one transaction.

        Either the whole replacement commits or nothing changes.
        """
        clear = list(clear)
        try:
            async with session_scope(self._session_factory) as session:
                await session.execute(delete(StoreEntry).where(StoreEntry.key.in_(clear)))
                for key, value in data.items():
                    session.add(StoreEntry(key=key, value=value))
        except SQLAlchemyError as e:
            log.error("Failed to replace stored data: %s", e)
            raise PersistenceError("Could not replace stored data.") from e

    @staticmethod
    async def _put(session: AsyncSession, key: str, value: Any) -> None:
        entry = await session.get(StoreEntry, key)
        if entry is None:
            session.add(StoreEntry(key=key, value=value))
        else:
            entry.value = value
