"""Test Permissions 정책 테이블과 401/403 구분 동작을 검증하는 자동화 테스트입니다."""

import pytest

from studio_cms.utils import permissions as perm
from tests.conftest import auth_headers


@pytest.mark.parametrize(
    "action, allowed",
    [
        (perm.CONTENT_WRITE, {"editor", "admin", "super_admin"}),
        (perm.CONTENT_HISTORY, {"editor", "admin", "super_admin"}),
        (perm.UPLOAD_WRITE, {"editor", "admin", "super_admin"}),
        (perm.USER_LIST, {"admin", "super_admin"}),
        (perm.USER_CREATE, {"admin", "super_admin"}),
        (perm.USER_CREATE_PRIVILEGED, {"super_admin"}),
        (perm.USER_CHANGE_ROLE, {"super_admin"}),
        (perm.USER_UPDATE_OTHER, {"admin", "super_admin"}),
        (perm.USER_DELETE, {"super_admin"}),
        (perm.AUDIT_READ, {"admin", "super_admin"}),
    ],
)
def test_policy_table(action, allowed):
    for role in perm.ALL_ROLES:
        assert perm.can(role, action) is (role in allowed)
    assert perm.can(None, action) is False
    assert perm.can("unknown", action) is False


def test_content_read_is_public():
    assert perm.is_public_action(perm.CONTENT_READ)
    assert perm.can(None, perm.CONTENT_READ)
    assert not perm.can(None, perm.CONTENT_WRITE)


def test_every_policy_action_has_rule():
    actions = [value for name, value in vars(perm).items() if name.isupper() and isinstance(value, str) and ":" in value]
    assert set(actions) == set(perm.POLICY)


@pytest.mark.parametrize(
    "method, url, body",
    [
        ("put", "/api/content", {"key": "homepage", "value": {}}),
        ("post", "/api/content", {"homepage": {}}),
        ("patch", "/api/content/homepage", {"path": "a", "value": 1}),
        ("get", "/api/users", None),
        ("post", "/api/users", {"email": "a@b.c", "password": "x", "name": "A"}),
        ("put", "/api/users/1", {"name": "x"}),
        ("delete", "/api/users/1", None),
        ("get", "/api/audit", None),
        ("get", "/api/uploads", None),
        ("delete", "/api/uploads/x.png", None),
    ],
)
def test_mutations_without_session_are_unauthorized(client, seed_users, method, url, body):
    kwargs = {"json": body} if body is not None else {}
    resp = client.request(method.upper(), url, **kwargs)
    assert resp.status_code == 401


def test_editor_forbidden_on_admin_endpoints(client, seed_users):
    headers = auth_headers(client, "editor@studio.com")
    assert client.delete(f"/api/users/{seed_users['admin'].user_id}", headers=headers).status_code == 403
    assert client.get("/api/audit", headers=headers).status_code == 403
    assert client.get("/api/users", headers=headers).status_code == 403


def test_editor_allowed_to_write_content(client, seed_users):
    headers = auth_headers(client, "editor@studio.com")
    resp = client.put("/api/content", headers=headers, json={"key": "contactPage", "value": {"email": "hi@studio.com"}})
    assert resp.status_code == 200
