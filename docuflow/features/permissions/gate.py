"""
Authorization gate for document actions.

Combines the role's permission matrix with the session identity and the
document's issuing department. The decision behaves like a bool but also
carries the reason for a denial, which callers turn into disabled controls and
tooltips. Nothing here is a security boundary.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from docuflow.features.documents.schemas import Document, DocumentAffordances
from docuflow.features.permissions.evaluator import can_edit_others, can_perform
from docuflow.features.permissions.schemas import ResourceAffordances
from docuflow.features.roles.schemas import Role
from docuflow.features.users.schemas import User


class DocumentAction(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    TOGGLE_STATUS = "toggle_status"


class DenialReason(str, Enum):
    NO_SESSION = "no_session"
    MISSING_PERMISSION = "missing_permission"
    NOT_OWNER = "not_owner"
    DOCUMENT_SUSPENDED = "document_suspended"


# Operation checked against the matrix for each action
_BASE_OPERATION: Dict[DocumentAction, str] = {
    DocumentAction.READ: "read",
    DocumentAction.CREATE: "create",
    DocumentAction.UPDATE: "update",
    DocumentAction.DELETE: "delete",
    DocumentAction.TOGGLE_STATUS: "update",
}

_HINTS = {
    DocumentAction.UPDATE: "You do not have permission to edit this document.",
    DocumentAction.DELETE: "You do not have permission to delete this document.",
    DocumentAction.TOGGLE_STATUS: "You do not have permission to change this document's status.",
}


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: Optional[DenialReason] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "AuthorizationDecision":
        return cls(True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AuthorizationDecision":
        return cls(False, reason)


def is_visible_to(role: Optional[Role], document: Document) -> bool:
    """Public reader rule: suspended documents are shown only to documents.update holders."""
    return document.status == "active" or can_perform(role, "documents", "update")


def owns_document(user: Optional[User], document: Document) -> bool:
    return user is not None and user.department_id == document.issuing_department_id


def authorize_document_action(
    user: Optional[User],
    role: Optional[Role],
    document: Optional[Document],
    op: "DocumentAction | str",
) -> AuthorizationDecision:
    """
    Decide whether ``user`` acting through ``role`` may perform ``op`` on ``document``.

    ``document`` may be None for CREATE. Update, delete and status toggles
    additionally require the user's department to be the issuing department,
    unless the role has ``editOthers``.
    """
    action = DocumentAction(op)
    if user is None or role is None:
        return AuthorizationDecision.deny(DenialReason.NO_SESSION)
    if not can_perform(role, "documents", _BASE_OPERATION[action]):
        return AuthorizationDecision.deny(DenialReason.MISSING_PERMISSION)

    if action is DocumentAction.CREATE:
        return AuthorizationDecision.allow()
    if action is DocumentAction.READ:
        if document is not None and not is_visible_to(role, document):
            return AuthorizationDecision.deny(DenialReason.DOCUMENT_SUSPENDED)
        return AuthorizationDecision.allow()

    # Update, delete and status toggle are ownership-scoped
    if document is not None and (owns_document(user, document) or can_edit_others(role)):
        return AuthorizationDecision.allow()
    return AuthorizationDecision.deny(DenialReason.NOT_OWNER)


def denial_message(op: "DocumentAction | str") -> str:
    return _HINTS.get(DocumentAction(op), "You do not have permission to perform this action.")


def resource_affordances(role: Optional[Role], category: str) -> ResourceAffordances:
    """Create/update/delete controls for a management screen other than documents."""
    return ResourceAffordances(
        can_create=can_perform(role, category, "create"),
        can_update=can_perform(role, category, "update"),
        can_delete=can_perform(role, category, "delete"),
    )


def document_affordances(
    user: Optional[User],
    role: Optional[Role],
    document: Document,
) -> DocumentAffordances:
    update = authorize_document_action(user, role, document, DocumentAction.UPDATE)
    delete = authorize_document_action(user, role, document, DocumentAction.DELETE)
    toggle = authorize_document_action(user, role, document, DocumentAction.TOGGLE_STATUS)
    return DocumentAffordances(
        can_update=update.allowed,
        can_delete=delete.allowed,
        can_toggle_status=toggle.allowed,
        update_hint=None if update else denial_message(DocumentAction.UPDATE),
        delete_hint=None if delete else denial_message(DocumentAction.DELETE),
        toggle_hint=None if toggle else denial_message(DocumentAction.TOGGLE_STATUS),
    )
