import pytest

from docuflow.core import store as keys
from docuflow.core.errors import AccountSuspended, InvalidCredentials
from docuflow.core.state import ConsoleState
from docuflow.features.session import service


async def test_wrong_password_is_invalid_credentials(state):
    with pytest.raises(InvalidCredentials) as unknown_email:
        await service.login(state, "nobody@docuflow.com", "admin12345")
    with pytest.raises(InvalidCredentials) as wrong_password:
        await service.login(state, "admin@docuflow.com", "wrong-password")
    # Same message either way
    assert unknown_email.value.message == wrong_password.value.message
    assert state.current_user is None
    assert state.activity.entries == []


async def test_suspended_account_is_refused(state):
    with pytest.raises(AccountSuspended):
        await service.login(state, "former@docuflow.com", "former12345")
    assert state.current_user is None


async def test_successful_login_sets_session_and_logs_once(state, store):
    user = await service.login(state, "admin@docuflow.com", "admin12345")

    assert state.current_user.id == user.id == "user-admin"
    assert state.current_role.id == "super-admin"
    assert user.last_login is not None
    assert state.users.get("user-admin").last_login == user.last_login
    assert len(state.activity.entries) == 1
    assert state.activity.entries[0].action == 'User "System Administrator" logged in.'

    persisted = await store.get(keys.CURRENT_USER)
    assert persisted["id"] == "user-admin"
    assert "password" not in persisted


async def test_remember_stores_the_email(state, store):
    await service.login(state, "admin@docuflow.com", "admin12345", remember=True)
    assert await store.get(keys.REMEMBERED_EMAIL) == "admin@docuflow.com"
    await service.login(state, "admin@docuflow.com", "admin12345")
    assert await store.get(keys.REMEMBERED_EMAIL) is None


async def test_logout_clears_only_the_pointer(state, store):
    await service.login(state, "editor@docuflow.com", "editor12345")
    documents_before = state.documents.all()

    await service.logout(state)

    assert state.current_user is None
    assert await store.get(keys.CURRENT_USER) is None
    assert state.documents.all() == documents_before
    assert [e.action for e in state.activity.entries] == [
        'User "Ivan Petrov" logged out.',
        'User "Ivan Petrov" logged in.',
    ]


async def test_restore_session_trusts_only_the_id(state):
    ref = {"id": "user-admin", "name": "Forged name", "roleId": "role-viewer"}
    user = service.restore_session(ref, state.users)
    assert user.name == "System Administrator"
    assert user.role_id == "super-admin"


@pytest.mark.parametrize("ref", [None, {}, {"id": "user-missing"}, "user-admin", {"name": "x"}])
async def test_restore_session_rejects_unknown_references(state, ref):
    assert service.restore_session(ref, state.users) is None


async def test_restore_session_rejects_suspended_users(state):
    assert service.restore_session({"id": "user-former"}, state.users) is None


async def test_session_survives_reload(state, store):
    await service.login(state, "manager@docuflow.com", "manager12345")
    reloaded = await ConsoleState.load(store)
    assert reloaded.current_user.id == "user-manager"


async def test_user_suspended_after_login_loses_the_session_on_reload(state, store):
    await service.login(state, "manager@docuflow.com", "manager12345")

    users = await store.get(keys.USERS)
    for user in users:
        if user["id"] == "user-manager":
            user["status"] = "suspended"
    await store.set(keys.USERS, users)

    reloaded = await ConsoleState.load(store)
    assert reloaded.current_user is None
    assert await store.get(keys.CURRENT_USER) is None


async def test_suspending_the_live_user_ends_the_session(state):
    await service.login(state, "editor@docuflow.com", "editor12345")
    editor = state.users.get("user-editor")
    await state.users.update(editor.model_copy(update={"status": "suspended"}))
    assert state.current_user is None
    assert state.current_role is None
