"""
In-memory entity collections mirrored to the persistent store.

A repository is only ever changed by replacing its whole collection; ``add``,
``update`` and ``remove`` are shorthands that build the new collection and
call ``replace``. Every replace is written through to the store before it
returns.
"""
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

from ulid import ULID

from docuflow.core.schemas import CamelModel
from docuflow.core.store import PersistentStore
from docuflow.utils import get_logger


log = get_logger(__name__)

# Label shown wherever a soft reference does not resolve
UNKNOWN_LABEL = "N/A"

EntityT = TypeVar("EntityT", bound=CamelModel)


def new_id(prefix: str) -> str:
    """Generate a prefixed ULID, e.g. ``doc-01HV...``."""
    return f"{prefix}-{ULID()}"


class Repository(Generic[EntityT]):
    def __init__(self, store: PersistentStore, key: str, items: Iterable[EntityT]):
        self._store = store
        self.key = key
        self._items: List[EntityT] = list(items)

    def __iter__(self) -> Iterator[EntityT]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> List[EntityT]:
        return list(self._items)

    def get(self, entity_id: Optional[str]) -> Optional[EntityT]:
        if entity_id is None:
            return None
        return next((item for item in self._items if item.id == entity_id), None)

    def name_of(self, entity_id: Optional[str], default: str = UNKNOWN_LABEL) -> str:
        """Display name for a soft reference; ``default`` when it dangles."""
        item = self.get(entity_id)
        return getattr(item, "name", default) if item is not None else default

    async def replace(self, items: Iterable[EntityT]) -> None:
        # Memory first: a failed write leaves the new state in place and raises
        self._items = list(items)
        await self._store.set(self.key, [item.to_store() for item in self._items])
        log.debug("Replaced %s (%d items)", self.key, len(self._items))

    async def add(self, item: EntityT, prepend: bool = False) -> EntityT:
        items = [item, *self._items] if prepend else [*self._items, item]
        await self.replace(items)
        return item

    async def update(self, item: EntityT) -> EntityT:
        await self.replace([item if existing.id == item.id else existing for existing in self._items])
        return item

    async def remove(self, entity_id: str) -> Optional[EntityT]:
        removed = self.get(entity_id)
        if removed is not None:
            await self.replace([item for item in self._items if item.id != entity_id])
        return removed
