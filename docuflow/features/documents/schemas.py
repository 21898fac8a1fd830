"""
Pydantic schemas for documents.
"""
from datetime import datetime, timezone
from typing import List, Literal, Optional
from pydantic import Field, field_validator

from docuflow.core.schemas import CamelModel


AttachmentType = Literal["pdf", "docx", "xlsx", "pptx", "video", "link"]
DocumentStatus = Literal["active", "suspended"]
FilterType = Literal["category", "department"]


class Attachment(CamelModel):
    name: str
    url: str
    type: AttachmentType


class Document(CamelModel):
    """Persisted document record. ``issuing_department_id`` decides ownership."""
    id: str
    title: str
    content: str = ""
    category_id: str
    issuing_department_id: str
    created_at: datetime
    last_updated: datetime
    attachments: List[Attachment] = Field(default_factory=list)
    status: DocumentStatus = "active"

    @field_validator("created_at", "last_updated")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Older backups store date-only strings, which parse as naive
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class DocumentCreate(CamelModel):
    """Schema for creating a document."""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    category_id: str
    issuing_department_id: Optional[str] = Field(None, description="Defaults to the author's department")
    attachments: List[Attachment] = Field(default_factory=list)
    status: DocumentStatus = "active"


class DocumentUpdate(CamelModel):
    """Content edit; status is changed only through the toggle endpoint."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    category_id: Optional[str] = None
    issuing_department_id: Optional[str] = None
    attachments: Optional[List[Attachment]] = None


class DocumentFilter(CamelModel):
    type: FilterType
    id: str


class DocumentAffordances(CamelModel):
    """Action controls for one document; denied actions stay visible but disabled."""
    can_update: bool
    can_delete: bool
    can_toggle_status: bool
    update_hint: Optional[str] = None
    delete_hint: Optional[str] = None
    toggle_hint: Optional[str] = None


class DocumentResponse(Document):
    category_name: str
    department_name: str
    actions: Optional[DocumentAffordances] = None


class DocumentListResponse(CamelModel):
    items: List[DocumentResponse]
    total: int
    skip: int
    limit: int


class ReaderListResponse(CamelModel):
    """Public reader list with its heading."""
    title: str
    items: List[DocumentResponse]
    total: int
