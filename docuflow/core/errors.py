"""
Console error taxonomy.

Every error raised by the services carries the HTTP status and a stable code,
so ``main.py`` can render them with one exception handler.
"""
from typing import Any, Dict, Optional


class ConsoleError(Exception):
    """Base class for expected, user-visible failures."""
    status_code: int = 400
    code: str = "console_error"
    message: str = "Request could not be completed"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.code, "detail": self.message}
        body.update(self.details)
        return body


class InvalidCredentials(ConsoleError):
    # Same message for unknown email and wrong password
    status_code = 401
    code = "invalid_credentials"
    message = "Invalid email or password."


class AccountSuspended(ConsoleError):
    status_code = 403
    code = "account_suspended"
    message = "Your account has been suspended."


class PermissionDenied(ConsoleError):
    status_code = 403
    code = "permission_denied"
    message = "You do not have permission to perform this action."


class MalformedBackupFile(ConsoleError):
    status_code = 400
    code = "malformed_backup"
    message = "The backup file is invalid or corrupted."


class EntityNotFound(ConsoleError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class DuplicateEntity(ConsoleError):
    status_code = 409
    code = "conflict"
    message = "Already exists"


class PersistenceError(ConsoleError):
    """The store rejected a write; in-memory state is kept as is."""
    status_code = 500
    code = "persistence_error"
    message = "Changes could not be saved."
