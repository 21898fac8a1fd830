"""
View routing: which screen a navigation request renders.

Resolution is a pure function of the request, the session and the role. A
request the caller is not allowed to see silently falls back to the public
reader; navigation never raises.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from docuflow.features.documents.schemas import DocumentFilter
from docuflow.features.permissions.evaluator import can_perform, is_super_admin
from docuflow.features.roles.schemas import Role
from docuflow.features.users.schemas import User


class RenderTarget(str, Enum):
    DASHBOARD = "dashboard"
    PUBLIC_READER = "public-reader"
    DOCUMENT_MANAGEMENT = "document-management"
    CATEGORY_MANAGEMENT = "category-management"
    USER_MANAGEMENT = "user-management"
    DEPARTMENT_MANAGEMENT = "department-management"
    ROLE_MANAGEMENT = "role-management"
    PROFILE = "profile"
    CONFIGURATION = "configuration"


# Management view name -> (category whose read flag it needs, screen)
MANAGEMENT_VIEWS: Dict[str, tuple] = {
    "documents-management": ("documents", RenderTarget.DOCUMENT_MANAGEMENT),
    "categories": ("categories", RenderTarget.CATEGORY_MANAGEMENT),
    "users": ("users", RenderTarget.USER_MANAGEMENT),
    "departments": ("departments", RenderTarget.DEPARTMENT_MANAGEMENT),
    "roles": ("roles", RenderTarget.ROLE_MANAGEMENT),
}


@dataclass(frozen=True)
class ViewRequest:
    view: str
    filter: Optional[DocumentFilter] = None
    search: str = ""
    selected_document_id: Optional[str] = None

    @property
    def is_unfiltered(self) -> bool:
        return self.filter is None and not self.search.strip() and self.selected_document_id is None


def resolve_view(request: ViewRequest, session: Optional[User], role: Optional[Role]) -> RenderTarget:
    if session is None:
        role = None

    if request.view in MANAGEMENT_VIEWS:
        category, target = MANAGEMENT_VIEWS[request.view]
        return target if can_perform(role, category, "read") else RenderTarget.PUBLIC_READER
    if request.view == "config":
        return RenderTarget.CONFIGURATION if is_super_admin(role) else RenderTarget.PUBLIC_READER
    if request.view == "profile":
        return RenderTarget.PROFILE if session is not None else RenderTarget.PUBLIC_READER
    if request.view == "documents" and session is not None and request.is_unfiltered:
        return RenderTarget.DASHBOARD
    return RenderTarget.PUBLIC_READER
