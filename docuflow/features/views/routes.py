"""
View routes: resolve a navigation request to a screen plus its payload.
"""
from typing import Annotated, Optional
from fastapi import APIRouter, Depends

from docuflow.core.state import ConsoleState
from docuflow.features.documents import service as documents
from docuflow.features.documents.routes import build_filter
from docuflow.features.documents.schemas import FilterType, ReaderListResponse
from docuflow.features.permissions.gate import is_visible_to, resource_affordances
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.service import to_user_response
from docuflow.features.views.dashboard import build_dashboard
from docuflow.features.views.router import MANAGEMENT_VIEWS, RenderTarget, ViewRequest, resolve_view
from docuflow.features.views.schemas import ViewResponse


router = APIRouter(tags=["views"])


def reader_payload(console: ConsoleState, request: ViewRequest) -> ViewResponse:
    visible = documents.filter_documents(console.documents, console.current_role, request.filter, request.search)
    selected = console.documents.get(request.selected_document_id)
    if selected is not None and not is_visible_to(console.current_role, selected):
        selected = None
    return ViewResponse(
        requested=request.view,
        target=RenderTarget.PUBLIC_READER.value,
        reader=ReaderListResponse(
            title=documents.list_title(console, request.filter, request.search),
            items=[documents.to_response(console, d) for d in visible],
            total=len(visible),
        ),
        selected_document=documents.to_response(console, selected) if selected else None,
    )


@router.get("/{view}", response_model=ViewResponse, response_model_exclude_none=True)
async def get_view(
    view: str,
    console: Annotated[ConsoleState, Depends(get_console)],
    filter_type: Optional[FilterType] = None,
    filter_id: Optional[str] = None,
    search: str = "",
    document_id: Optional[str] = None,
):
    """
    Resolve ``view`` for the current session.

    Screens the caller may not open fall back to the public reader.
    """
    request = ViewRequest(
        view=view,
        filter=None if search.strip() else build_filter(filter_type, filter_id),
        search=search,
        selected_document_id=document_id,
    )
    user, role = console.current_user, console.current_role
    target = resolve_view(request, user, role)

    if target is RenderTarget.PUBLIC_READER:
        return reader_payload(console, request)
    response = ViewResponse(requested=view, target=target.value)
    if target is RenderTarget.DASHBOARD:
        response.dashboard = build_dashboard(console)
    elif target is RenderTarget.PROFILE:
        response.profile = to_user_response(console, user)
    elif target is RenderTarget.CONFIGURATION:
        response.config = console.config
    else:
        category, _ = MANAGEMENT_VIEWS[view]
        response.affordances = resource_affordances(role, category)
    return response
