"""
Pydantic schemas for the system configuration singleton.
"""
from typing import Dict, List, Optional
from pydantic import ConfigDict, Field

from docuflow.core.schemas import CamelModel


HEX_COLOR = "^#[0-9A-Fa-f]{6}$"


class Config(CamelModel):
    """Branding record. Unknown legacy keys (e.g. headerColor) are ignored on load."""
    model_config = ConfigDict(extra="ignore")

    logo: str = ""
    company_name: str = "DocuFlow"
    developer_name: str = "DocuFlow Team"
    developer_url: str = ""
    theme_color: str = "#4f46e5"


class ConfigUpdate(CamelModel):
    logo: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    developer_name: Optional[str] = Field(None, max_length=255)
    developer_url: Optional[str] = Field(None, max_length=500)
    theme_color: Optional[str] = Field(None, pattern=HEX_COLOR)


class PaletteResponse(CamelModel):
    base: str
    shades: Dict[int, str]
    rgb: Optional[str] = None


class RestoreResponse(CamelModel):
    message: str
    restored_keys: List[str]
