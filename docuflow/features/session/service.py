"""
Session manager: login, logout and session restore.

Credentials are compared in plaintext against the user collection. There is
no token; the session is the single pointer held by the state container.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Iterable, Optional

from docuflow.core import store as keys
from docuflow.core.errors import AccountSuspended, InvalidCredentials
from docuflow.features.users.schemas import User
from docuflow.utils import get_logger

if TYPE_CHECKING:
    from docuflow.core.state import ConsoleState


log = get_logger(__name__)


def authenticate(users: Iterable[User], email: str, password: str) -> User:
    """
    Find the user matching both ``email`` and ``password``.

    Unknown email and wrong password raise the same error.
    """
    match = next((u for u in users if u.email == email and u.password == password), None)
    if match is None:
        log.info("Failed login attempt for %s", email)
        raise InvalidCredentials("Invalid email or password.")
    if match.status != "active":
        log.info("Login refused for suspended account %s", email)
        raise AccountSuspended("Your account has been suspended. Please contact an administrator.")
    return match


def restore_session(persisted_ref: Any, users: Iterable[User]) -> Optional[User]:
    """Resolve a persisted ``currentUser`` by id only; None if unknown or not active."""
    if not isinstance(persisted_ref, dict) or not persisted_ref.get("id"):
        return None
    user = next((u for u in users if u.id == persisted_ref["id"]), None)
    if user is None or user.status != "active":
        return None
    return user


async def login(state: "ConsoleState", email: str, password: str, remember: bool = False) -> User:
    user = authenticate(state.users, email, password)
    user = user.model_copy(update={"last_login": datetime.now(timezone.utc)})
    await state.users.update(user)
    await state.set_session(user)
    if remember:
        await state.store.set(keys.REMEMBERED_EMAIL, email)
    else:
        await state.store.remove(keys.REMEMBERED_EMAIL)
    await state.activity.record(user.name, f'User "{user.name}" logged in.')
    log.info("User %s logged in", user.id)
    return user


async def logout(state: "ConsoleState") -> None:
    user = state.current_user
    if user is not None:
        await state.activity.record(user.name, f'User "{user.name}" logged out.')
        log.info("User %s logged out", user.id)
    await state.set_session(None)
