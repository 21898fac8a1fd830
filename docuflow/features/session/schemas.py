"""
Pydantic schemas for login and the current session.
"""
from typing import Optional
from pydantic import Field

from docuflow.core.schemas import CamelModel
from docuflow.features.permissions.schemas import RolePermissions
from docuflow.features.users.schemas import UserResponse


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    remember: bool = False


class SessionResponse(CamelModel):
    """Signed-in user plus the effective permissions the UI gates controls on."""
    authenticated: bool
    user: Optional[UserResponse] = None
    permissions: Optional[RolePermissions] = None
    is_super_admin: bool = False
