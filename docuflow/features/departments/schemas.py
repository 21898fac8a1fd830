"""
Pydantic schemas for departments.
"""
from typing import Optional
from pydantic import Field

from docuflow.core.schemas import CamelModel


class Department(CamelModel):
    """Flat department record; documents and users point at it by id."""
    id: str
    name: str


class DepartmentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class DepartmentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
