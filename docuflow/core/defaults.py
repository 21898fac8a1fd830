"""
Built-in bootstrap dataset.

Used whenever a collection has never been persisted (first run, after a reset,
or when a restored backup left a collection out).
"""
from datetime import datetime, timezone
from typing import Any, Dict, List

from docuflow.core import store


def _at(day: str) -> str:
    return datetime.fromisoformat(day).replace(tzinfo=timezone.utc).isoformat()


def _perms(create=False, read=False, update=False, delete=False) -> Dict[str, bool]:
    return {"create": create, "read": read, "update": update, "delete": delete}


_ALL = _perms(True, True, True, True)
_READ = _perms(read=True)
_NONE = _perms()


DEFAULT_DEPARTMENTS: List[Dict[str, Any]] = [
    {"id": "dept-board", "name": "Board of Directors"},
    {"id": "dept-hr", "name": "Human Resources"},
    {"id": "dept-it", "name": "Information Technology"},
    {"id": "dept-finance", "name": "Finance & Accounting"},
]

DEFAULT_CATEGORIES: List[Dict[str, Any]] = [
    {"id": "cat-policy", "name": "Policies"},
    {"id": "cat-procedure", "name": "Procedures"},
    {"id": "cat-form", "name": "Forms & Templates"},
    {"id": "cat-announcement", "name": "Announcements"},
]

DEFAULT_ROLES: List[Dict[str, Any]] = [
    {
        "id": "super-admin",
        "name": "Super Administrator",
        "description": "Full access, including system configuration and backups",
        "permissions": {
            "documents": {**_ALL, "editOthers": True},
            "categories": _ALL,
            "users": _ALL,
            "departments": _ALL,
            "roles": _ALL,
        },
    },
    {
        "id": "role-manager",
        "name": "Department Manager",
        "description": "Manages documents of every department and reads the directory",
        "permissions": {
            "documents": {**_ALL, "editOthers": True},
            "categories": _perms(create=True, read=True, update=True),
            "users": _READ,
            "departments": _READ,
            "roles": _NONE,
        },
    },
    {
        "id": "role-editor",
        "name": "Editor",
        "description": "Publishes and maintains documents of their own department",
        "permissions": {
            "documents": {**_perms(create=True, read=True, update=True, delete=True), "editOthers": False},
            "categories": _READ,
            "users": _NONE,
            "departments": _READ,
            "roles": _NONE,
        },
    },
    {
        "id": "role-viewer",
        "name": "Viewer",
        "description": "Read-only access to published documents",
        "permissions": {
            "documents": {**_READ, "editOthers": False},
            "categories": _NONE,
            "users": _NONE,
            "departments": _NONE,
            "roles": _NONE,
        },
    },
]

DEFAULT_USERS: List[Dict[str, Any]] = [
    {
        "id": "user-admin",
        "name": "System Administrator",
        "email": "admin@docuflow.com",
        "password": "admin12345",
        "departmentId": "dept-board",
        "roleId": "super-admin",
        "lastLogin": None,
        "status": "active",
    },
    {
        "id": "user-manager",
        "name": "Hannah Reyes",
        "email": "manager@docuflow.com",
        "password": "manager12345",
        "departmentId": "dept-hr",
        "roleId": "role-manager",
        "lastLogin": None,
        "status": "active",
    },
    {
        "id": "user-editor",
        "name": "Ivan Petrov",
        "email": "editor@docuflow.com",
        "password": "editor12345",
        "departmentId": "dept-it",
        "roleId": "role-editor",
        "lastLogin": None,
        "status": "active",
    },
    {
        "id": "user-viewer",
        "name": "Fatima Diallo",
        "email": "viewer@docuflow.com",
        "password": "viewer12345",
        "departmentId": "dept-finance",
        "roleId": "role-viewer",
        "lastLogin": None,
        "status": "active",
    },
    {
        "id": "user-former",
        "name": "Owen Clarke",
        "email": "former@docuflow.com",
        "password": "former12345",
        "departmentId": "dept-it",
        "roleId": "role-editor",
        "lastLogin": None,
        "status": "suspended",
    },
]

DEFAULT_DOCUMENTS: List[Dict[str, Any]] = [
    {
        "id": "doc-remote-work",
        "title": "Remote Work Policy",
        "content": "<p>Employees may work remotely up to <strong>two days</strong> per week.</p>",
        "categoryId": "cat-policy",
        "issuingDepartmentId": "dept-hr",
        "createdAt": _at("2024-01-15"),
        "lastUpdated": _at("2024-03-02"),
        "attachments": [
            {"name": "Remote work request form", "url": "https://example.com/remote-form.docx", "type": "docx"},
        ],
        "status": "active",
    },
    {
        "id": "doc-password-rotation",
        "title": "Password Rotation Procedure",
        "content": "<p>Passwords for shared service accounts are rotated every <em>90 days</em>.</p>",
        "categoryId": "cat-procedure",
        "issuingDepartmentId": "dept-it",
        "createdAt": _at("2024-02-01"),
        "lastUpdated": _at("2024-02-01"),
        "attachments": [],
        "status": "active",
    },
    {
        "id": "doc-expense-claim",
        "title": "Expense Claim Template",
        "content": "<p>Use this template for every reimbursement request.</p>",
        "categoryId": "cat-form",
        "issuingDepartmentId": "dept-finance",
        "createdAt": _at("2024-02-20"),
        "lastUpdated": _at("2024-04-11"),
        "attachments": [
            {"name": "Expense claim", "url": "https://example.com/expense-claim.xlsx", "type": "xlsx"},
        ],
        "status": "active",
    },
    {
        "id": "doc-office-move",
        "title": "Office Relocation Notice",
        "content": "<p>The head office moves to the new building in Q3.</p>",
        "categoryId": "cat-announcement",
        "issuingDepartmentId": "dept-board",
        "createdAt": _at("2024-03-10"),
        "lastUpdated": _at("2024-03-10"),
        "attachments": [],
        "status": "active",
    },
    {
        "id": "doc-legacy-vpn",
        "title": "Legacy VPN Setup Guide",
        "content": "<p>Superseded by the zero-trust access rollout.</p>",
        "categoryId": "cat-procedure",
        "issuingDepartmentId": "dept-it",
        "createdAt": _at("2023-06-05"),
        "lastUpdated": _at("2024-01-20"),
        "attachments": [],
        "status": "suspended",
    },
]

DEFAULT_ACTIVITY_LOG: List[Dict[str, Any]] = []

DEFAULT_CONFIG: Dict[str, Any] = {
    "logo": "",
    "companyName": "DocuFlow",
    "developerName": "DocuFlow Team",
    "developerUrl": "",
    "themeColor": "#4f46e5",
}


DEFAULTS: Dict[str, Any] = {
    store.DOCUMENTS: DEFAULT_DOCUMENTS,
    store.CATEGORIES: DEFAULT_CATEGORIES,
    store.DEPARTMENTS: DEFAULT_DEPARTMENTS,
    store.ROLES: DEFAULT_ROLES,
    store.USERS: DEFAULT_USERS,
    store.ACTIVITY_LOG: DEFAULT_ACTIVITY_LOG,
    store.CONFIG: DEFAULT_CONFIG,
}
