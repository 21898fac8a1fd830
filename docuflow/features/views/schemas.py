"""
Pydantic schemas for resolved views and their payloads.
"""
from datetime import datetime
from typing import List, Optional

from docuflow.core.schemas import CamelModel
from docuflow.features.activity.schemas import ActivityLogEntry
from docuflow.features.configuration.schemas import Config
from docuflow.features.documents.schemas import DocumentResponse, ReaderListResponse
from docuflow.features.permissions.schemas import ResourceAffordances
from docuflow.features.users.schemas import UserResponse


class BarDatum(CamelModel):
    label: str
    value: int


class RecentDocument(CamelModel):
    id: str
    title: str
    department_name: str
    created_at: datetime


class DashboardSummary(CamelModel):
    total_documents: int
    total_categories: int
    total_departments: int
    last_activity: str
    documents_by_category: List[BarDatum]
    documents_by_department: List[BarDatum]
    recent_activity: List[ActivityLogEntry]
    recent_documents: List[RecentDocument]


class ViewResponse(CamelModel):
    """The resolved screen and only the payload that screen needs."""
    requested: str
    target: str
    dashboard: Optional[DashboardSummary] = None
    reader: Optional[ReaderListResponse] = None
    selected_document: Optional[DocumentResponse] = None
    affordances: Optional[ResourceAffordances] = None
    profile: Optional[UserResponse] = None
    config: Optional[Config] = None
