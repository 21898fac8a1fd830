"""
Pydantic schemas for per-browser UI preferences.
"""
from typing import Optional

from docuflow.core.schemas import CamelModel


class Preferences(CamelModel):
    sidebar_collapsed: bool = False
    remembered_email: Optional[str] = None


class PreferencesUpdate(CamelModel):
    sidebar_collapsed: Optional[bool] = None
    remembered_email: Optional[str] = None
