"""
Application state container.

One ConsoleState per process holds the entity repositories, the activity
logger, the configuration record and the session pointer. It is built from the
persistent store (seeding defaults for anything never saved) and handed
explicitly to every route through ``get_console``.
"""
from typing import Any, Dict, Optional
from pydantic import ValidationError

from docuflow.core import store as keys
from docuflow.core.defaults import DEFAULT_CONFIG, DEFAULTS
from docuflow.core.errors import PersistenceError
from docuflow.core.repository import Repository
from docuflow.core.store import PersistentStore
from docuflow.core.uploads import UploadSlots
from docuflow.features.activity.logger import ActivityLogger
from docuflow.features.activity.schemas import ActivityLogEntry
from docuflow.features.categories.schemas import Category
from docuflow.features.configuration.schemas import Config
from docuflow.features.departments.schemas import Department
from docuflow.features.documents.schemas import Document
from docuflow.features.roles.schemas import Role
from docuflow.features.session.service import restore_session
from docuflow.features.users.schemas import User
from docuflow.utils import get_logger


log = get_logger(__name__)

_ENTITY_MODELS = {
    keys.DOCUMENTS: Document,
    keys.CATEGORIES: Category,
    keys.DEPARTMENTS: Department,
    keys.ROLES: Role,
    keys.USERS: User,
    keys.ACTIVITY_LOG: ActivityLogEntry,
}


def merge_config(stored: Any) -> Config:
    """Stored values over the defaults; unknown legacy keys are dropped."""
    return Config.model_validate({**DEFAULT_CONFIG, **(stored if isinstance(stored, dict) else {})})


class ConsoleState:
    def __init__(
        self,
        store: PersistentStore,
        collections: Dict[str, list],
        config: Config,
        session_user_id: Optional[str] = None,
    ):
        self.store = store
        self.documents: Repository[Document] = Repository(store, keys.DOCUMENTS, collections[keys.DOCUMENTS])
        self.categories: Repository[Category] = Repository(store, keys.CATEGORIES, collections[keys.CATEGORIES])
        self.departments: Repository[Department] = Repository(store, keys.DEPARTMENTS, collections[keys.DEPARTMENTS])
        self.roles: Repository[Role] = Repository(store, keys.ROLES, collections[keys.ROLES])
        self.users: Repository[User] = Repository(store, keys.USERS, collections[keys.USERS])
        self.activity = ActivityLogger(Repository(store, keys.ACTIVITY_LOG, collections[keys.ACTIVITY_LOG]))
        self.config = config
        self.session_user_id = session_user_id
        self.uploads = UploadSlots()

    @classmethod
    async def load(cls, store: PersistentStore) -> "ConsoleState":
        """
        Build the container from the store.

        Collections that were never persisted are seeded from the bootstrap
        dataset and written back. A persisted session pointer is kept only if
        it still names an active user.
        """
        stored = await store.snapshot(keys.BACKUP_KEYS + (keys.CURRENT_USER,))
        data = {key: stored.get(key, DEFAULTS[key]) for key in keys.BACKUP_KEYS}

        try:
            collections = {
                key: [model.model_validate(item) for item in data[key] or []]
                for key, model in _ENTITY_MODELS.items()
            }
            config = merge_config(data[keys.CONFIG])
        except ValidationError as e:
            log.error("Stored data does not match the expected shape: %s", e)
            raise PersistenceError("Stored data is corrupt; restore a backup or reset.") from e

        seeded = [key for key in keys.BACKUP_KEYS if key not in stored]
        if seeded:
            log.info("Seeding defaults for %s", ", ".join(seeded))
            values = {key: [item.to_store() for item in collections[key]] for key in seeded if key != keys.CONFIG}
            if keys.CONFIG in seeded:
                values[keys.CONFIG] = config.to_store()
            await store.replace_all(values, clear=seeded)

        state = cls(store, collections, config)
        persisted_ref = stored.get(keys.CURRENT_USER)
        user = restore_session(persisted_ref, state.users)
        if user is not None:
            state.session_user_id = user.id
        elif persisted_ref is not None:
            log.warning("Dropping stale session reference")
            await store.remove(keys.CURRENT_USER)
        return state

    @property
    def current_user(self) -> Optional[User]:
        """Signed-in user, re-resolved so suspension or deletion ends the session."""
        user = self.users.get(self.session_user_id)
        if user is None or user.status != "active":
            return None
        return user

    @property
    def current_role(self) -> Optional[Role]:
        user = self.current_user
        return self.roles.get(user.role_id) if user else None

    async def set_session(self, user: Optional[User]) -> None:
        if user is None:
            self.session_user_id = None
            await self.store.remove(keys.CURRENT_USER)
            return
        self.session_user_id = user.id
        await self.store.set(keys.CURRENT_USER, user.session_reference())

    async def update_config(self, config: Config) -> Config:
        self.config = config
        await self.store.set(keys.CONFIG, config.to_store())
        return config
