"""Test 감사 로그 조회/페이지네이션 동작을 검증하는 자동화 테스트입니다."""

from studio_cms.models.audit_log import AuditLog
from tests.conftest import auth_headers


def test_audit_log_newest_first(client, db, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    client.put("/api/content", headers=headers, json={"key": "homepage", "value": {"title": "A"}})
    client.post("/api/content", headers=headers, json={"studioPage": {"intro": "x"}})

    resp = client.get("/api/audit", headers=headers)
    assert resp.status_code == 200
    actions = [row["action"] for row in resp.json()]
    assert actions == ["content_bulk_update", "content_update", "login"]
    assert resp.json()[0]["details"] == {"keys": ["studioPage"]}
    assert resp.json()[1]["resource"] == "homepage"


def test_audit_log_pagination(client, db, seed_users):
    for index in range(5):
        db.add(AuditLog(user_id=1, user_email="super@studio.com", action="content_update", resource=f"k{index}", details="{}"))
    db.commit()

    headers = auth_headers(client, "super@studio.com")
    first = client.get("/api/audit", headers=headers, params={"limit": 2}).json()
    second = client.get("/api/audit", headers=headers, params={"limit": 2, "offset": 2}).json()
    assert len(first) == 2
    assert len(second) == 2
    assert {row["log_id"] for row in first}.isdisjoint({row["log_id"] for row in second})


def test_audit_log_limit_bounds(client, seed_users):
    headers = auth_headers(client, "admin@studio.com")
    assert client.get("/api/audit", headers=headers, params={"limit": 0}).status_code == 422
    assert client.get("/api/audit", headers=headers, params={"offset": -1}).status_code == 422
    assert client.get("/api/audit", headers=headers, params={"limit": 1000}).status_code == 400


def test_audit_log_tolerates_broken_details(client, db, seed_users):
    db.add(AuditLog(action="login", resource="auth", details="{not json"))
    db.commit()
    headers = auth_headers(client, "admin@studio.com")
    rows = client.get("/api/audit", headers=headers).json()
    broken = next(row for row in rows if row["user_id"] is None)
    assert broken["details"] == {}
