"""
Document routes: the public reader and the management screen.
"""
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from docuflow.core.state import ConsoleState
from docuflow.features.documents import service
from docuflow.features.documents.schemas import (
    Attachment,
    DocumentCreate,
    DocumentFilter,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
    FilterType,
    ReaderListResponse,
)
from docuflow.features.permissions.dependencies import require_permission
from docuflow.features.session.dependencies import get_console
from docuflow.features.users.schemas import User


router = APIRouter(tags=["documents"])


def build_filter(filter_type: Optional[FilterType], filter_id: Optional[str]) -> Optional[DocumentFilter]:
    if filter_type is None or not filter_id:
        return None
    return DocumentFilter(type=filter_type, id=filter_id)


@router.get("/", response_model=DocumentListResponse)
async def list_documents(
    _user: Annotated[User, Depends(require_permission("documents", "read"))],
    console: Annotated[ConsoleState, Depends(get_console)],
    skip: int = 0,
    limit: int = 100,
):
    """Management list: every document, with the caller's action controls."""
    documents = console.documents.all()
    return DocumentListResponse(
        items=[service.to_response(console, d, with_actions=True) for d in documents[skip:skip + limit]],
        total=len(documents),
        skip=skip,
        limit=limit,
    )


@router.get("/public", response_model=ReaderListResponse)
async def list_public_documents(
    console: Annotated[ConsoleState, Depends(get_console)],
    filter_type: Optional[FilterType] = None,
    filter_id: Optional[str] = None,
    search: Optional[str] = None,
):
    """
    Public reader list.

    A non-empty search clears any category or department filter.
    """
    doc_filter = None if search and search.strip() else build_filter(filter_type, filter_id)
    documents = service.filter_documents(console.documents, console.current_role, doc_filter, search)
    return ReaderListResponse(
        title=service.list_title(console, doc_filter, search),
        items=[service.to_response(console, d) for d in documents],
        total=len(documents),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    document = service.read_document(console, document_id)
    return service.to_response(console, document, with_actions=console.current_user is not None)


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    document = await service.create_document(console, document_data)
    return service.to_response(console, document, with_actions=True)


@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    document_data: DocumentUpdate,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    """Edit a document. Needs documents.update and ownership or editOthers."""
    document = await service.update_document(console, document_id, document_data)
    return service.to_response(console, document, with_actions=True)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    await service.delete_document(console, document_id)


@router.post("/{document_id}/toggle-status", response_model=DocumentResponse)
async def toggle_document_status(
    document_id: str,
    console: Annotated[ConsoleState, Depends(get_console)],
):
    document = await service.toggle_document_status(console, document_id)
    return service.to_response(console, document, with_actions=True)


@router.post("/{document_id}/attachments", response_model=DocumentResponse)
async def upload_video_attachment(
    document_id: str,
    console: Annotated[ConsoleState, Depends(get_console)],
    file: UploadFile = File(...),
    name: Optional[str] = Form(None),
):
    """Attach a video file, stored inline as a data URL."""
    service.check_can_update(console, document_id)
    slot = f"attachment:{document_id}"
    url = await console.uploads.read(slot, file)
    if url is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A newer upload for this document replaced this one",
        )
    attachment = Attachment(name=name or file.filename or "video", url=url, type="video")
    document = await service.add_attachment(console, document_id, attachment)
    return service.to_response(console, document, with_actions=True)
