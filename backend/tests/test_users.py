"""Test Users 동작과 회귀 시나리오를 검증하는 자동화 테스트입니다."""

import json

from studio_cms.models.audit_log import AuditLog
from studio_cms.models.content_version import ContentVersion
from studio_cms.models.user import User, UserSession
from tests.conftest import auth_headers, get_token


def test_list_users_admin_success(client, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 3
    assert all("password_hash" not in row for row in rows)


def test_list_users_forbidden_for_editor(client, seed_users):
    headers = auth_headers(client, "editor@studio.com")
    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 403


def test_create_editor_by_admin(client, db, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    resp = client.post(
        "/api/users",
        headers=headers,
        json={"email": "New@Studio.com", "password": "secret99", "name": "New Editor"},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["email"] == "new@studio.com"
    assert data["role"] == "editor"

    log = db.query(AuditLog).filter(AuditLog.action == "user_create").one()
    assert json.loads(log.details) == {"new_user_email": "new@studio.com", "role": "editor"}

    # 생성된 계정으로 로그인할 수 있어야 한다.
    assert get_token(client, "new@studio.com", "secret99")


def test_admin_cannot_create_admin(client, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    resp = client.post(
        "/api/users",
        headers=headers,
        json={"email": "boss@studio.com", "password": "secret99", "name": "Boss", "role": "admin"},
    )
    assert resp.status_code == 403


def test_super_admin_can_create_admin(client, seed_users):
    headers = auth_headers(client, "super@studio.com")
    resp = client.post(
        "/api/users",
        headers=headers,
        json={"email": "boss@studio.com", "password": "secret99", "name": "Boss", "role": "admin"},
    )
    assert resp.status_code == 201
    assert resp.json()["role"] == "admin"


def test_create_user_validation_and_conflict(client, seed_users):
    headers = auth_headers(client, "super@studio.com")
    missing = client.post("/api/users", headers=headers, json={"email": "x@studio.com", "name": "X"})
    assert missing.status_code == 400

    bad_role = client.post(
        "/api/users",
        headers=headers,
        json={"email": "x@studio.com", "password": "p", "name": "X", "role": "owner"},
    )
    assert bad_role.status_code == 400

    duplicate = client.post(
        "/api/users",
        headers=headers,
        json={"email": "editor@studio.com", "password": "p", "name": "Dup"},
    )
    assert duplicate.status_code == 409


def test_editor_updates_own_profile(client, db, seed_users):
    headers = auth_headers(client, "editor@studio.com")
    editor_id = seed_users["editor"].user_id
    resp = client.put(f"/api/users/{editor_id}", headers=headers, json={"name": "Renamed", "password": "newpass1"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Renamed"
    assert get_token(client, "editor@studio.com", "newpass1")

    log = db.query(AuditLog).filter(AuditLog.action == "user_update").one()
    assert json.loads(log.details) == {"target_user_id": editor_id, "fields": ["name", "password"]}


def test_editor_cannot_update_other_user(client, seed_users):
    headers = auth_headers(client, "editor@studio.com")
    resp = client.put(f"/api/users/{seed_users['admin'].user_id}", headers=headers, json={"name": "Hacked"})
    assert resp.status_code == 403


def test_only_super_admin_changes_roles(client, seed_users):
    editor_id = seed_users["editor"].user_id
    admin_headers = auth_headers(client, "admin@studio.com")
    blocked = client.put(f"/api/users/{editor_id}", headers=admin_headers, json={"role": "admin"})
    assert blocked.status_code == 403

    editor_headers = auth_headers(client, "editor@studio.com")
    self_promote = client.put(f"/api/users/{editor_id}", headers=editor_headers, json={"role": "super_admin"})
    assert self_promote.status_code == 403

    super_headers = auth_headers(client, "super@studio.com")
    allowed = client.put(f"/api/users/{editor_id}", headers=super_headers, json={"role": "admin"})
    assert allowed.status_code == 200
    assert allowed.json()["role"] == "admin"


def test_update_user_email_conflict_and_not_found(client, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    conflict = client.put(
        f"/api/users/{seed_users['editor'].user_id}",
        headers=headers,
        json={"email": "super@studio.com"},
    )
    assert conflict.status_code == 409
    assert client.put("/api/users/999", headers=headers, json={"name": "Ghost"}).status_code == 404


def test_delete_user_requires_super_admin(client, seed_users):
    editor_id = seed_users["editor"].user_id
    assert client.delete(f"/api/users/{editor_id}").status_code == 401

    editor_headers = auth_headers(client, "editor@studio.com")
    assert client.delete(f"/api/users/{editor_id}", headers=editor_headers).status_code == 403

    admin_headers = auth_headers(client, "admin@studio.com")
    assert client.delete(f"/api/users/{editor_id}", headers=admin_headers).status_code == 403


def test_super_admin_cannot_delete_self(client, db, seed_users):
    headers = auth_headers(client, "super@studio.com")
    resp = client.delete(f"/api/users/{seed_users['super_admin'].user_id}", headers=headers)
    assert resp.status_code == 400
    db.expire_all()
    assert db.query(User).filter(User.email == "super@studio.com").count() == 1


def test_delete_user_keeps_history(client, db, seed_users):
    editor_headers = auth_headers(client, "editor@studio.com")
    client.put("/api/content", headers=editor_headers, json={"key": "homepage", "value": {"title": "A"}})
    client.put("/api/content", headers=editor_headers, json={"key": "homepage", "value": {"title": "B"}})

    super_headers = auth_headers(client, "super@studio.com")
    editor_id = seed_users["editor"].user_id
    resp = client.delete(f"/api/users/{editor_id}", headers=super_headers)
    assert resp.status_code == 204

    db.expire_all()
    assert db.query(User).filter(User.user_id == editor_id).first() is None
    assert db.query(UserSession).filter(UserSession.user_id == editor_id).count() == 0
    assert db.query(AuditLog).filter(AuditLog.user_email == "editor@studio.com").count() >= 3
    version = db.query(ContentVersion).one()
    assert version.created_by == editor_id
    assert version.created_by_email == "editor@studio.com"

    deleted_log = db.query(AuditLog).filter(AuditLog.action == "user_delete").one()
    assert json.loads(deleted_log.details) == {"deleted_user_email": "editor@studio.com"}

    # 삭제된 사용자의 토큰은 더 이상 유효하지 않다.
    assert client.get("/api/auth/me", headers=editor_headers).status_code == 401


def test_delete_missing_user_not_found(client, seed_users):
    headers = auth_headers(client, "super@studio.com")
    assert client.delete("/api/users/999", headers=headers).status_code == 404
