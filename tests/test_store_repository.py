import pytest
from sqlalchemy.exc import OperationalError

from docuflow.core import store as keys
from docuflow.core.defaults import DEFAULT_ROLES, DEFAULT_USERS
from docuflow.core.errors import PersistenceError
from docuflow.core.repository import UNKNOWN_LABEL, Repository, new_id
from docuflow.core.state import ConsoleState
from docuflow.features.categories.schemas import Category


async def test_get_set_remove(store):
    assert await store.get("missing") is None
    assert await store.get("missing", default=[]) == []
    await store.set(keys.SIDEBAR_COLLAPSED, True)
    await store.set(keys.SIDEBAR_COLLAPSED, False)
    assert await store.get(keys.SIDEBAR_COLLAPSED) is False
    await store.remove(keys.SIDEBAR_COLLAPSED)
    assert await store.get(keys.SIDEBAR_COLLAPSED) is None


async def test_snapshot_leaves_out_missing_keys(store):
    await store.set(keys.CONFIG, {"companyName": "Acme"})
    assert await store.snapshot([keys.CONFIG, keys.DOCUMENTS]) == {keys.CONFIG: {"companyName": "Acme"}}


async def test_replace_all_clears_and_writes(store):
    await store.set(keys.CURRENT_USER, {"id": "user-admin"})
    await store.set(keys.REMEMBERED_EMAIL, "a@docuflow.com")
    await store.replace_all({keys.CATEGORIES: []}, clear=keys.RESETTABLE_KEYS)
    assert await store.get(keys.CURRENT_USER) is None
    assert await store.get(keys.CATEGORIES) == []
    assert await store.get(keys.REMEMBERED_EMAIL) == "a@docuflow.com"


async def test_repository_mirrors_every_replace(store):
    repo = Repository(store, keys.CATEGORIES, [])
    first = await repo.add(Category(id="cat-a", name="Alpha"))
    await repo.add(Category(id="cat-b", name="Beta"), prepend=True)
    assert [c.id for c in repo] == ["cat-b", "cat-a"]

    await repo.update(first.model_copy(update={"name": "Alpha 2"}))
    await repo.remove("cat-b")
    assert await store.get(keys.CATEGORIES) == [{"id": "cat-a", "name": "Alpha 2"}]
    assert len(repo) == 1


async def test_dangling_reference_renders_placeholder(store):
    repo = Repository(store, keys.CATEGORIES, [Category(id="cat-a", name="Alpha")])
    assert repo.name_of("cat-a") == "Alpha"
    assert repo.name_of("cat-gone") == UNKNOWN_LABEL == "N/A"
    assert repo.name_of(None) == "N/A"
    assert await repo.remove("cat-gone") is None


def test_new_id_is_prefixed_and_unique():
    ids = {new_id("doc") for _ in range(20)}
    assert len(ids) == 20
    assert all(i.startswith("doc-") for i in ids)


async def test_failed_write_keeps_memory_and_raises(store, monkeypatch):
    repo = Repository(store, keys.CATEGORIES, [])

    async def broken_put(session, key, value):
        raise OperationalError("INSERT", {}, Exception("disk full"))

    monkeypatch.setattr(store, "_put", broken_put)
    with pytest.raises(PersistenceError):
        await repo.add(Category(id="cat-a", name="Alpha"))
    assert repo.get("cat-a") is not None


async def test_first_load_seeds_and_persists_defaults(store):
    state = await ConsoleState.load(store)
    assert len(state.roles) == len(DEFAULT_ROLES)
    assert len(state.users) == len(DEFAULT_USERS)
    assert state.roles.get("super-admin") is not None
    assert state.config.company_name == "DocuFlow"
    assert len(await store.get(keys.DOCUMENTS)) == len(state.documents)
    assert state.current_user is None


async def test_load_keeps_persisted_data(store):
    await store.set(keys.CATEGORIES, [{"id": "cat-only", "name": "Only"}])
    state = await ConsoleState.load(store)
    assert [c.id for c in state.categories] == ["cat-only"]


async def test_config_merges_defaults_and_drops_legacy_keys(store):
    await store.set(keys.CONFIG, {"companyName": "Acme", "headerColor": "#000000"})
    state = await ConsoleState.load(store)
    assert state.config.company_name == "Acme"
    assert state.config.theme_color == "#4f46e5"
    assert "headerColor" not in state.config.to_store()


async def test_corrupt_collection_is_a_persistence_error(store):
    await store.set(keys.USERS, [{"id": "user-x"}])
    with pytest.raises(PersistenceError):
        await ConsoleState.load(store)
