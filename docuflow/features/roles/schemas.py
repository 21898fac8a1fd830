"""
Pydantic schemas for roles.
"""
from typing import Optional
from pydantic import Field

from docuflow.core.schemas import CamelModel
from docuflow.features.permissions.schemas import RolePermissions


class Role(CamelModel):
    """Persisted role record."""
    id: str
    name: str
    description: str = ""
    permissions: RolePermissions = Field(default_factory=RolePermissions)


class RoleCreate(CamelModel):
    """Schema for creating a role; omitted permissions get the read-documents default."""
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=1000)
    permissions: RolePermissions = Field(default_factory=RolePermissions)


class RoleUpdate(CamelModel):
    """Schema for updating a role."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    permissions: Optional[RolePermissions] = None
