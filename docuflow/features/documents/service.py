"""
Document operations: reader filtering and the gated management actions.

Every mutation goes through ``authorize_document_action`` first and records
one activity entry once the change is persisted.
"""
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, List, Optional

from docuflow.core.errors import EntityNotFound, PermissionDenied
from docuflow.core.repository import new_id
from docuflow.features.documents.schemas import (
    Attachment,
    Document,
    DocumentCreate,
    DocumentFilter,
    DocumentResponse,
    DocumentUpdate,
)
from docuflow.features.permissions.gate import (
    DocumentAction,
    authorize_document_action,
    denial_message,
    document_affordances,
    is_visible_to,
)
from docuflow.features.roles.schemas import Role
from docuflow.features.users.schemas import User
from docuflow.utils import get_logger

if TYPE_CHECKING:
    from docuflow.core.state import ConsoleState


log = get_logger(__name__)

ALL_DOCUMENTS_TITLE = "All documents"

_TAG_RE = re.compile(r"<[^>]*>?")


def strip_tags(html: str) -> str:
    return _TAG_RE.sub(" ", html)


def matches_search(document: Document, query: str) -> bool:
    """Case-insensitive substring match on the title or the tag-stripped content."""
    needle = query.strip().lower()
    if not needle:
        return True
    return needle in document.title.lower() or needle in strip_tags(document.content).lower()


def matches_filter(document: Document, doc_filter: Optional[DocumentFilter]) -> bool:
    if doc_filter is None:
        return True
    if doc_filter.type == "category":
        return document.category_id == doc_filter.id
    return document.issuing_department_id == doc_filter.id


def filter_documents(
    documents: Iterable[Document],
    role: Optional[Role],
    doc_filter: Optional[DocumentFilter] = None,
    search: Optional[str] = None,
) -> List[Document]:
    """The public reader list: visible to ``role``, then filtered, then searched."""
    return [
        d for d in documents
        if is_visible_to(role, d) and matches_filter(d, doc_filter) and matches_search(d, search or "")
    ]


def list_title(state: "ConsoleState", doc_filter: Optional[DocumentFilter], search: Optional[str]) -> str:
    if search and search.strip():
        return f'Results for "{search}"'
    if doc_filter is not None:
        if doc_filter.type == "category":
            return state.categories.name_of(doc_filter.id, default="Category")
        return state.departments.name_of(doc_filter.id, default="Department")
    return ALL_DOCUMENTS_TITLE


def to_response(state: "ConsoleState", document: Document, with_actions: bool = False) -> DocumentResponse:
    actions = None
    if with_actions:
        actions = document_affordances(state.current_user, state.current_role, document)
    return DocumentResponse(
        **document.model_dump(),
        category_name=state.categories.name_of(document.category_id),
        department_name=state.departments.name_of(document.issuing_department_id),
        actions=actions,
    )


def get_document_or_404(state: "ConsoleState", document_id: str) -> Document:
    document = state.documents.get(document_id)
    if document is None:
        raise EntityNotFound("Document not found")
    return document


def _authorize(state: "ConsoleState", document: Optional[Document], action: DocumentAction) -> User:
    user = state.current_user
    decision = authorize_document_action(user, state.current_role, document, action)
    if not decision:
        log.info(
            "Document %s denied for %s on %s: %s",
            action.value, user.id if user else "anonymous",
            document.id if document else "-", decision.reason.value,
        )
        raise PermissionDenied(denial_message(action), reason=decision.reason.value)
    return user


def read_document(state: "ConsoleState", document_id: str) -> Document:
    """
    Reader access to one document.

    Active documents are public; a suspended one is reported missing unless
    the session holds documents.update.
    """
    document = get_document_or_404(state, document_id)
    if not is_visible_to(state.current_role, document):
        raise EntityNotFound("Document not found")
    return document


async def create_document(state: "ConsoleState", data: DocumentCreate) -> Document:
    actor = _authorize(state, None, DocumentAction.CREATE)
    now = datetime.now(timezone.utc)
    document = Document(
        id=new_id("doc"),
        title=data.title,
        content=data.content,
        category_id=data.category_id,
        issuing_department_id=data.issuing_department_id or actor.department_id,
        created_at=now,
        last_updated=now,
        attachments=data.attachments,
        status=data.status,
    )
    await state.documents.add(document, prepend=True)
    await state.activity.record(actor.name, f'Created document "{document.title}".')
    return document


async def update_document(state: "ConsoleState", document_id: str, data: DocumentUpdate) -> Document:
    """Edit content fields; refreshes lastUpdated and never touches status."""
    document = get_document_or_404(state, document_id)
    actor = _authorize(state, document, DocumentAction.UPDATE)
    document = document.model_copy(update={**data.changes(), "last_updated": datetime.now(timezone.utc)})
    await state.documents.update(document)
    await state.activity.record(actor.name, f'Updated document "{document.title}".')
    return document


async def delete_document(state: "ConsoleState", document_id: str) -> Document:
    document = get_document_or_404(state, document_id)
    actor = _authorize(state, document, DocumentAction.DELETE)
    await state.documents.remove(document.id)
    await state.activity.record(actor.name, f'Deleted document "{document.title}".')
    return document


async def toggle_document_status(state: "ConsoleState", document_id: str) -> Document:
    document = get_document_or_404(state, document_id)
    actor = _authorize(state, document, DocumentAction.TOGGLE_STATUS)
    new_status = "suspended" if document.status == "active" else "active"
    document = document.model_copy(update={"status": new_status})
    await state.documents.update(document)
    label = "Active" if new_status == "active" else "Suspended"
    await state.activity.record(actor.name, f'Changed status of document "{document.title}" to "{label}".')
    return document


def check_can_update(state: "ConsoleState", document_id: str) -> Document:
    """Gate an attachment upload before the file is read."""
    document = get_document_or_404(state, document_id)
    _authorize(state, document, DocumentAction.UPDATE)
    return document


async def add_attachment(state: "ConsoleState", document_id: str, attachment: Attachment) -> Document:
    """Append an attachment to the current version of the document."""
    document = get_document_or_404(state, document_id)
    actor = _authorize(state, document, DocumentAction.UPDATE)
    document = document.model_copy(update={
        "attachments": [*document.attachments, attachment],
        "last_updated": datetime.now(timezone.utc),
    })
    await state.documents.update(document)
    await state.activity.record(actor.name, f'Updated document "{document.title}".')
    return document
