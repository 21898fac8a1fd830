"""
Pydantic schemas for document categories.
"""
from typing import Optional
from pydantic import Field

from docuflow.core.schemas import CamelModel


class Category(CamelModel):
    id: str
    name: str


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
