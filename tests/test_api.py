import json

from conftest import ADMIN, EDITOR, MANAGER, SUSPENDED, VIEWER, login


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["company"] == "DocuFlow"


def test_login_errors(client):
    response = client.post("/session/login", json={"email": "admin@docuflow.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credentials"

    email, password = SUSPENDED
    response = client.post("/session/login", json={"email": email, "password": password})
    assert response.status_code == 403
    assert response.json()["error"] == "account_suspended"


def test_login_validation_errors_are_flattened(client):
    response = client.post("/session/login", json={"email": ""})
    assert response.status_code == 400
    assert set(response.json()) == {"email", "password"}


def test_session_lifecycle(client):
    assert client.get("/session/me").json() == {"authenticated": False, "user": None,
                                                 "permissions": None, "isSuperAdmin": False}
    session = login(client, ADMIN)
    assert session["authenticated"] is True
    assert session["isSuperAdmin"] is True
    assert "password" not in session["user"]
    assert session["permissions"]["documents"]["editOthers"] is True

    activity = client.get("/activity/").json()
    assert activity["total"] == 1

    client.post("/session/logout")
    assert client.get("/session/me").json()["authenticated"] is False
    assert client.get("/activity/").status_code == 401


def test_public_reader_hides_suspended_documents(client):
    anonymous = client.get("/documents/public").json()
    assert anonymous["title"] == "All documents"
    assert "doc-legacy-vpn" not in {d["id"] for d in anonymous["items"]}
    assert client.get("/documents/doc-legacy-vpn").status_code == 404

    login(client, EDITOR)
    staff = client.get("/documents/public").json()
    assert "doc-legacy-vpn" in {d["id"] for d in staff["items"]}
    assert client.get("/documents/doc-legacy-vpn").status_code == 200


def test_public_reader_filter_and_search(client):
    by_category = client.get("/documents/public", params={"filter_type": "category", "filter_id": "cat-policy"}).json()
    assert by_category["title"] == "Policies"
    assert [d["id"] for d in by_category["items"]] == ["doc-remote-work"]

    # Search ignores markup and clears the filter
    found = client.get("/documents/public", params={
        "filter_type": "category", "filter_id": "cat-policy", "search": "SHARED SERVICE",
    }).json()
    assert found["title"] == 'Results for "SHARED SERVICE"'
    assert [d["id"] for d in found["items"]] == ["doc-password-rotation"]
    assert client.get("/documents/public", params={"search": "strong"}).json()["total"] == 0


def test_editor_cannot_change_other_departments_documents(client):
    login(client, EDITOR)
    listing = client.get("/documents/").json()
    actions = {d["id"]: d["actions"] for d in listing["items"]}
    assert actions["doc-password-rotation"]["canUpdate"] is True
    assert actions["doc-remote-work"]["canUpdate"] is False
    assert actions["doc-remote-work"]["updateHint"]

    response = client.patch("/documents/doc-remote-work", json={"title": "Hijacked"})
    assert response.status_code == 403
    assert response.json()["reason"] == "not_owner"
    assert client.delete("/documents/doc-remote-work").status_code == 403
    assert client.post("/documents/doc-remote-work/toggle-status").status_code == 403

    response = client.patch("/documents/doc-password-rotation", json={"title": "Password Rotation v2"})
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Password Rotation v2"
    assert body["status"] == "active"
    assert body["lastUpdated"] != body["createdAt"]


def test_manager_with_edit_others_can_change_any_document(client):
    login(client, MANAGER)
    assert client.patch("/documents/doc-password-rotation", json={"content": "<p>x</p>"}).status_code == 200
    toggled = client.post("/documents/doc-password-rotation/toggle-status").json()
    assert toggled["status"] == "suspended"
    assert client.delete("/documents/doc-password-rotation").status_code == 204
    assert client.get("/documents/doc-password-rotation").status_code == 404

    actions = [e["action"] for e in client.get("/activity/").json()["items"]]
    assert actions[:3] == [
        'Deleted document "Password Rotation Procedure".',
        'Changed status of document "Password Rotation Procedure" to "Suspended".',
        'Updated document "Password Rotation Procedure".',
    ]


def test_create_document_defaults_to_author_department(client):
    login(client, EDITOR)
    response = client.post("/documents/", json={"title": "New runbook", "categoryId": "cat-procedure"})
    assert response.status_code == 201
    document = response.json()
    assert document["id"].startswith("doc-")
    assert document["issuingDepartmentId"] == "dept-it"
    assert document["createdAt"] == document["lastUpdated"]
    assert client.get("/documents/").json()["items"][0]["id"] == document["id"]


def test_viewer_cannot_create_documents(client):
    login(client, VIEWER)
    response = client.post("/documents/", json={"title": "Nope", "categoryId": "cat-form"})
    assert response.status_code == 403
    assert response.json()["reason"] == "missing_permission"


def test_dangling_references_render_placeholder(client):
    login(client, ADMIN)
    assert client.delete("/departments/dept-hr").status_code == 204
    document = client.get("/documents/doc-remote-work").json()
    assert document["departmentName"] == "N/A"
    manager = client.get("/users/user-manager").json()
    assert manager["departmentName"] == "N/A"


def test_management_permissions(client):
    login(client, VIEWER)
    assert client.get("/users/").status_code == 403
    assert client.post("/categories/", json={"name": "Memos"}).status_code == 403
    assert client.get("/categories/").status_code == 200

    login(client, ADMIN)
    created = client.post("/categories/", json={"name": "Memos"})
    assert created.status_code == 201
    category_id = created.json()["id"]
    assert category_id.startswith("cat-")
    assert client.patch(f"/categories/{category_id}", json={"name": "Memos & Notes"}).json()["name"] == "Memos & Notes"
    assert client.delete(f"/categories/{category_id}").status_code == 204
    assert client.delete(f"/categories/{category_id}").status_code == 404


def test_user_management(client):
    login(client, ADMIN)
    payload = {"name": "New Hire", "email": "new@docuflow.com", "password": "welcome123",
               "departmentId": "dept-it", "roleId": "role-viewer"}
    created = client.post("/users/", json=payload)
    assert created.status_code == 201
    user_id = created.json()["id"]
    assert "password" not in created.json()

    assert client.post("/users/", json=payload).status_code == 409
    assert client.post("/users/", json={**payload, "email": "x@docuflow.com", "password": "short"}).status_code == 400

    assert client.post(f"/users/{user_id}/reset-password", json={"password": "another123"}).status_code == 200
    client.post("/session/logout")
    login(client, ("new@docuflow.com", "another123"))

    login(client, ADMIN)
    suspended = client.post(f"/users/{user_id}/toggle-status").json()
    assert suspended["status"] == "suspended"
    response = client.post("/session/login", json={"email": "new@docuflow.com", "password": "another123"})
    assert response.status_code == 403


def test_suspending_yourself_ends_the_session(client):
    login(client, ADMIN)
    client.post("/users/user-admin/toggle-status")
    assert client.get("/session/me").json()["authenticated"] is False


def test_roles(client):
    login(client, ADMIN)
    created = client.post("/roles/", json={"name": "Auditor"}).json()
    assert created["permissions"]["documents"]["read"] is True
    assert created["permissions"]["documents"]["editOthers"] is False
    assert created["permissions"]["users"] == {"create": False, "read": False, "update": False, "delete": False}

    updated = client.patch(f"/roles/{created['id']}", json={
        "permissions": {"users": {"read": True}, "documents": {"read": True}},
    }).json()
    assert updated["permissions"]["users"]["read"] is True
    assert updated["name"] == "Auditor"

    login(client, EDITOR)
    assert client.get("/roles/").status_code == 403


def test_profile(client):
    assert client.get("/profile/").status_code == 401
    login(client, EDITOR)
    profile = client.get("/profile/").json()
    assert profile["departmentName"] == "Information Technology"
    assert profile["roleName"] == "Editor"

    assert client.patch("/profile/", json={"name": "Ivan P."}).json()["name"] == "Ivan P."

    wrong = client.post("/profile/password", json={
        "currentPassword": "bad", "newPassword": "newpass123", "confirmPassword": "newpass123"})
    assert wrong.status_code == 400
    mismatch = client.post("/profile/password", json={
        "currentPassword": "editor12345", "newPassword": "newpass123", "confirmPassword": "newpass124"})
    assert mismatch.status_code == 400
    ok = client.post("/profile/password", json={
        "currentPassword": "editor12345", "newPassword": "newpass123", "confirmPassword": "newpass123"})
    assert ok.status_code == 200
    login(client, ("editor@docuflow.com", "newpass123"))


def test_views(client):
    assert client.get("/views/users").json()["target"] == "public-reader"
    assert client.get("/views/documents").json()["target"] == "public-reader"

    login(client, MANAGER)
    dashboard = client.get("/views/documents").json()
    assert dashboard["target"] == "dashboard"
    assert dashboard["dashboard"]["totalDocuments"] == 5

    users_view = client.get("/views/users").json()
    assert users_view["target"] == "user-management"
    assert users_view["affordances"] == {"canCreate": False, "canUpdate": False, "canDelete": False}

    assert client.get("/views/config").json()["target"] == "public-reader"
    assert client.get("/views/profile").json()["profile"]["id"] == "user-manager"

    selected = client.get("/views/documents", params={"document_id": "doc-remote-work"}).json()
    assert selected["target"] == "public-reader"
    assert selected["selectedDocument"]["id"] == "doc-remote-work"

    login(client, ADMIN)
    assert client.get("/views/config").json()["config"]["companyName"] == "DocuFlow"


def test_configuration(client):
    login(client, MANAGER)
    assert client.put("/config/", json={"companyName": "Acme"}).status_code == 403
    assert client.get("/config/backup").status_code == 403

    login(client, ADMIN)
    assert client.put("/config/", json={"themeColor": "red"}).status_code == 400
    config = client.put("/config/", json={"companyName": "Acme", "themeColor": "#000000"}).json()
    assert config["companyName"] == "Acme"
    palette = client.get("/config/palette").json()
    assert palette["base"] == "#000000"
    assert palette["rgb"] == "0 0 0"

    logo = client.put("/config/logo", files={"file": ("logo.png", b"\x89PNG", "image/png")}).json()
    assert logo["logo"].startswith("data:image/png;base64,")


def test_video_attachment(client):
    login(client, EDITOR)
    response = client.post(
        "/documents/doc-password-rotation/attachments",
        files={"file": ("walkthrough.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        data={"name": "Walkthrough"},
    )
    assert response.status_code == 200
    attachment = response.json()["attachments"][-1]
    assert attachment["type"] == "video"
    assert attachment["name"] == "Walkthrough"
    assert attachment["url"].startswith("data:video/mp4;base64,")

    denied = client.post(
        "/documents/doc-remote-work/attachments",
        files={"file": ("clip.mp4", b"\x00", "video/mp4")},
    )
    assert denied.status_code == 403


def test_backup_restore_and_reset(client):
    login(client, ADMIN)
    download = client.get("/config/backup")
    assert download.status_code == 200
    assert "docuflow-backup-" in download.headers["content-disposition"]
    data = download.json()
    assert {"documents", "config", "activityLog"} <= set(data)

    bad = client.post("/config/restore", files={"file": ("backup.json", b"{not json", "application/json")})
    assert bad.status_code == 400
    assert bad.json()["error"] == "malformed_backup"
    assert client.get("/session/me").json()["authenticated"] is True

    data["config"]["companyName"] = "Restored Co"
    restored = client.post(
        "/config/restore",
        files={"file": ("backup.json", json.dumps(data).encode(), "application/json")},
    )
    assert restored.status_code == 200
    assert "config" in restored.json()["restoredKeys"]
    assert client.get("/session/me").json()["authenticated"] is False
    assert client.get("/config/").json()["companyName"] == "Restored Co"

    login(client, ADMIN)
    client.delete("/categories/cat-form")
    assert client.post("/config/reset").status_code == 200
    assert client.get("/config/").json()["companyName"] == "DocuFlow"
    assert "cat-form" in {c["id"] for c in client.get("/categories/").json()}


def test_preferences(client):
    assert client.get("/preferences/").json() == {"sidebarCollapsed": False, "rememberedEmail": None}
    client.put("/preferences/", json={"sidebarCollapsed": True})
    login(client, ADMIN, remember=True)
    assert client.get("/preferences/").json() == {"sidebarCollapsed": True, "rememberedEmail": "admin@docuflow.com"}
    cleared = client.put("/preferences/", json={"rememberedEmail": None}).json()
    assert cleared["rememberedEmail"] is None
