"""
Permission evaluation against a role's permission matrix.

Pure functions, no I/O.
"""
from typing import Optional

from docuflow.features.permissions.schemas import OPERATIONS
from docuflow.features.roles.schemas import Role


# Reserved role id; compared by identity, not through a permission flag
SUPER_ADMIN_ROLE_ID = "super-admin"


def can_perform(role: Optional[Role], category: str, op: str) -> bool:
    """
    Check whether ``role`` holds ``op`` on ``category``.

    Returns False without a role (no session) and for unknown categories or
    operations; otherwise returns exactly the stored flag.
    """
    if role is None or op not in OPERATIONS:
        return False
    permission_set = role.permissions.for_category(category)
    if permission_set is None:
        return False
    return bool(getattr(permission_set, op))


def can_edit_others(role: Optional[Role]) -> bool:
    """Cross-department override for document update/delete/status toggle."""
    return role is not None and role.permissions.documents.edit_others is True


def is_super_admin(role: Optional[Role]) -> bool:
    """Sole gate for configuration, backup, restore and reset."""
    return role is not None and role.id == SUPER_ADMIN_ROLE_ID
