"""
Pydantic schemas for the activity log.
"""
from datetime import datetime
from typing import List

from docuflow.core.schemas import CamelModel


class ActivityLogEntry(CamelModel):
    id: str
    timestamp: datetime
    user_name: str
    action: str


class ActivityLogResponse(CamelModel):
    items: List[ActivityLogEntry]
    total: int
