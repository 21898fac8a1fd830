from datetime import datetime, timezone

import pytest

from docuflow.features.documents.schemas import Document
from docuflow.features.permissions.gate import (
    DenialReason,
    DocumentAction,
    authorize_document_action,
    document_affordances,
    is_visible_to,
    resource_affordances,
)
from docuflow.features.permissions.schemas import DocumentPermissionSet, PermissionSet, RolePermissions
from docuflow.features.roles.schemas import Role
from docuflow.features.users.schemas import User

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_document(department_id="dept-1", status="active"):
    return Document(
        id="doc-1",
        title="Travel policy",
        category_id="cat-1",
        issuing_department_id=department_id,
        created_at=NOW,
        last_updated=NOW,
        status=status,
    )


def make_user(department_id):
    return User(id=f"user-{department_id}", name="Tester", email="t@docuflow.com",
                department_id=department_id, role_id="role-x")


def make_role(edit_others=False, **flags):
    return Role(
        id="role-x",
        name="Role",
        permissions=RolePermissions(documents=DocumentPermissionSet(edit_others=edit_others, **flags)),
    )


CRUD = dict(create=True, read=True, update=True, delete=True)
MUTATIONS = (DocumentAction.UPDATE, DocumentAction.DELETE, DocumentAction.TOGGLE_STATUS)


@pytest.mark.parametrize("action", MUTATIONS)
def test_other_department_needs_edit_others(action):
    document = make_document("dept-1")
    outsider = make_user("dept-2")

    decision = authorize_document_action(outsider, make_role(**CRUD), document, action)
    assert not decision
    assert decision.reason is DenialReason.NOT_OWNER

    assert authorize_document_action(outsider, make_role(edit_others=True, **CRUD), document, action)


@pytest.mark.parametrize("action", MUTATIONS)
def test_owner_department_may_mutate(action):
    assert authorize_document_action(make_user("dept-1"), make_role(**CRUD), make_document("dept-1"), action)


def test_update_without_ownership_can_read_but_not_mutate():
    role = make_role(read=True, update=True)
    user = make_user("dept-2")
    document = make_document("dept-1", status="suspended")

    assert authorize_document_action(user, role, document, DocumentAction.READ)
    assert is_visible_to(role, document)
    for action in (DocumentAction.UPDATE, DocumentAction.TOGGLE_STATUS):
        assert authorize_document_action(user, role, document, action).reason is DenialReason.NOT_OWNER
    delete = authorize_document_action(user, role, document, DocumentAction.DELETE)
    assert delete.reason is DenialReason.MISSING_PERMISSION


def test_missing_base_permission_denies_even_the_owner():
    decision = authorize_document_action(make_user("dept-1"), make_role(read=True), make_document(), "update")
    assert decision.allowed is False
    assert decision.reason is DenialReason.MISSING_PERMISSION


def test_no_session():
    decision = authorize_document_action(None, None, make_document(), DocumentAction.READ)
    assert decision.reason is DenialReason.NO_SESSION


def test_create_is_not_ownership_scoped():
    assert authorize_document_action(make_user("dept-9"), make_role(create=True), None, DocumentAction.CREATE)


def test_suspended_document_needs_update_to_read():
    reader = make_role(read=True)
    document = make_document(status="suspended")
    decision = authorize_document_action(make_user("dept-1"), reader, document, DocumentAction.READ)
    assert decision.reason is DenialReason.DOCUMENT_SUSPENDED


def test_visibility_for_anonymous_callers():
    assert is_visible_to(None, make_document(status="active"))
    assert not is_visible_to(None, make_document(status="suspended"))
    assert is_visible_to(make_role(update=True), make_document(status="suspended"))


def test_affordances_keep_denied_controls_with_hints():
    actions = document_affordances(make_user("dept-2"), make_role(**CRUD), make_document("dept-1"))
    assert actions.can_update is False
    assert actions.can_delete is False
    assert actions.can_toggle_status is False
    assert actions.update_hint and actions.delete_hint
    assert actions.toggle_hint == "You do not have permission to change this document's status."

    owner_actions = document_affordances(make_user("dept-1"), make_role(**CRUD), make_document("dept-1"))
    assert owner_actions.can_update and owner_actions.update_hint is None
    assert owner_actions.can_toggle_status and owner_actions.toggle_hint is None


def test_resource_affordances():
    role = Role(
        id="role-x",
        name="Role",
        permissions=RolePermissions(categories=PermissionSet(read=True, create=True)),
    )
    controls = resource_affordances(role, "categories")
    assert (controls.can_create, controls.can_update, controls.can_delete) == (True, False, False)
    assert resource_affordances(None, "categories").can_create is False
