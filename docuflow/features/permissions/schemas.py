"""
Pydantic schemas for the role permission matrix.

A role carries one PermissionSet per resource category. The documents set has
one extra flag, ``editOthers``, which lets a role act on documents issued by
other departments; it sits outside the uniform
(category, operation) table.
"""
from typing import Dict, Literal, Optional, Tuple
from pydantic import Field

from docuflow.core.schemas import CamelModel


ResourceCategory = Literal["documents", "categories", "users", "departments", "roles"]
Operation = Literal["create", "read", "update", "delete"]

RESOURCE_CATEGORIES: Tuple[str, ...] = ("documents", "categories", "users", "departments", "roles")
OPERATIONS: Tuple[str, ...] = ("create", "read", "update", "delete")


class PermissionSet(CamelModel):
    create: bool = False
    read: bool = False
    update: bool = False
    delete: bool = False


class DocumentPermissionSet(PermissionSet):
    edit_others: bool = Field(False, description="Can act on documents issued by other departments")


class ResourceAffordances(CamelModel):
    """Management screen controls; denied ones are rendered disabled, not hidden."""
    can_create: bool
    can_update: bool
    can_delete: bool


class RolePermissions(CamelModel):
    """Exactly five categories, each with four flags (documents has a fifth)."""
    documents: DocumentPermissionSet = Field(default_factory=lambda: DocumentPermissionSet(read=True))
    categories: PermissionSet = Field(default_factory=PermissionSet)
    users: PermissionSet = Field(default_factory=PermissionSet)
    departments: PermissionSet = Field(default_factory=PermissionSet)
    roles: PermissionSet = Field(default_factory=PermissionSet)

    def for_category(self, category: str) -> Optional[PermissionSet]:
        if category not in RESOURCE_CATEGORIES:
            return None
        return getattr(self, category)

    def as_table(self) -> Dict[Tuple[str, str], bool]:
        """Uniform (category, operation) -> flag view; excludes editOthers."""
        return {
            (category, op): getattr(getattr(self, category), op)
            for category in RESOURCE_CATEGORIES
            for op in OPERATIONS
        }

    @classmethod
    def full_access(cls) -> "RolePermissions":
        everything = dict(create=True, read=True, update=True, delete=True)
        return cls(
            documents=DocumentPermissionSet(edit_others=True, **everything),
            categories=PermissionSet(**everything),
            users=PermissionSet(**everything),
            departments=PermissionSet(**everything),
            roles=PermissionSet(**everything),
        )
