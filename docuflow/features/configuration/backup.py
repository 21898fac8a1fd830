"""
Backup, restore and reset of the persisted console data.

A backup is one JSON object holding whichever of the seven collection keys are
stored. Restore validates the whole file before touching the store, then
replaces every known key in one transaction and rebuilds the state container.
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import ValidationError

from docuflow.core import store as keys
from docuflow.core.errors import MalformedBackupFile
from docuflow.core.state import ConsoleState
from docuflow.core.store import PersistentStore
from docuflow.features.activity.schemas import ActivityLogEntry
from docuflow.features.categories.schemas import Category
from docuflow.features.configuration.schemas import Config
from docuflow.features.departments.schemas import Department
from docuflow.features.documents.schemas import Document
from docuflow.features.roles.schemas import Role
from docuflow.features.users.schemas import User
from docuflow.utils import get_logger


log = get_logger(__name__)

# Older backups predate the activity log, so it is optional
REQUIRED_KEYS = (keys.CONFIG, keys.DOCUMENTS)

_COLLECTION_MODELS = {
    keys.DOCUMENTS: Document,
    keys.CATEGORIES: Category,
    keys.DEPARTMENTS: Department,
    keys.ROLES: Role,
    keys.USERS: User,
    keys.ACTIVITY_LOG: ActivityLogEntry,
}


async def build_backup(store: PersistentStore) -> Dict[str, Any]:
    return await store.snapshot(keys.BACKUP_KEYS)


def backup_filename(now: Optional[datetime] = None) -> str:
    timestamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    return f"docuflow-backup-{timestamp}.json"


def _validate_key(key: str, value: Any) -> Any:
    if key == keys.CONFIG:
        if not isinstance(value, dict):
            raise MalformedBackupFile(f"'{key}' must be an object.", key=key)
        return Config.model_validate(value).to_store()
    if not isinstance(value, list):
        raise MalformedBackupFile(f"'{key}' must be a list.", key=key)
    model = _COLLECTION_MODELS[key]
    return [model.model_validate(item).to_store() for item in value]


def parse_backup(raw: bytes) -> Dict[str, Any]:
    """
    Parse and validate an uploaded backup file.

    Returns the normalized value of every known key present in the file.
    Raises MalformedBackupFile if the file is not a JSON object, lacks
    ``config`` or ``documents``, or any present key fails validation.
    """
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedBackupFile("The backup file is not valid JSON.") from e
    if not isinstance(data, dict):
        raise MalformedBackupFile("The backup file must contain a JSON object.")
    missing = [key for key in REQUIRED_KEYS if data.get(key) is None]
    if missing:
        raise MalformedBackupFile("The backup file is missing required data.", missing=missing)

    validated = {}
    for key in keys.BACKUP_KEYS:
        if key not in data:
            continue
        try:
            validated[key] = _validate_key(key, data[key])
        except ValidationError as e:
            log.info("Rejected backup: invalid %s (%d errors)", key, e.error_count())
            raise MalformedBackupFile(f"The backup file has invalid '{key}' data.", key=key) from e
    ignored = set(data) - set(validated)
    if ignored:
        log.debug("Ignoring unknown backup keys %s", sorted(ignored))
    return validated


async def restore_backup(store: PersistentStore, data: Dict[str, Any]) -> ConsoleState:
    """Replace every known key with ``data`` and reload; the session is cleared."""
    await store.replace_all(data, clear=keys.RESETTABLE_KEYS)
    log.warning("Restored data from backup: %s", ", ".join(data))
    return await ConsoleState.load(store)


async def reset_data(store: PersistentStore) -> ConsoleState:
    """Drop every known key and reload, reseeding the bootstrap dataset."""
    await store.remove(*keys.RESETTABLE_KEYS)
    log.warning("All console data reset to defaults")
    return await ConsoleState.load(store)
