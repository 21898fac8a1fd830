"""
Pydantic schemas for user-related records, requests and responses.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field

from docuflow.core import config
from docuflow.core.schemas import CamelModel


UserStatus = Literal["active", "suspended"]


class User(CamelModel):
    """Persisted user record. The password is stored and compared in plaintext."""
    id: str
    name: str
    email: str
    password: Optional[str] = None
    department_id: str
    role_id: str
    last_login: Optional[datetime] = None
    status: UserStatus = "active"

    def session_reference(self) -> dict:
        """What gets persisted as ``currentUser``; only ``id`` is trusted on restore."""
        return self.to_store(exclude={"password"})


class UserCreate(CamelModel):
    """Schema for creating a new user."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=config.MIN_PASSWORD_LENGTH)
    department_id: str
    role_id: str
    status: UserStatus = "active"


class UserUpdate(CamelModel):
    """Admin edit of any field except the password (see PasswordReset)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    department_id: Optional[str] = None
    role_id: Optional[str] = None
    status: Optional[UserStatus] = None


class PasswordReset(CamelModel):
    password: str = Field(..., min_length=config.MIN_PASSWORD_LENGTH)


class ProfileUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)


class PasswordChange(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=config.MIN_PASSWORD_LENGTH)
    confirm_password: str


class UserResponse(CamelModel):
    """User as shown in tables and on the profile page (never the password)."""
    id: str
    name: str
    email: str
    department_id: str
    role_id: str
    department_name: str
    role_name: str
    last_login: Optional[datetime] = None
    status: UserStatus
