"""Test 초기 관리자 생성과 content.json 이관 동작을 검증하는 자동화 테스트입니다."""

import json

import pytest

from studio_cms.config import settings
from studio_cms.models.content import ContentEntry
from studio_cms.models.user import User
from studio_cms.services import bootstrap_service
from studio_cms.utils.content_schema import ContentSchemaError


def test_seed_super_admin_once(client, db):
    assert bootstrap_service.seed_super_admin(db) is True
    assert bootstrap_service.seed_super_admin(db) is False

    admins = db.query(User).filter(User.role == "super_admin").all()
    assert len(admins) == 1
    assert admins[0].email == settings.DEFAULT_ADMIN_EMAIL

    resp = client.post(
        "/api/auth/login",
        json={"email": settings.DEFAULT_ADMIN_EMAIL, "password": settings.DEFAULT_ADMIN_PASSWORD},
    )
    assert resp.status_code == 200


def test_import_content_file_skips_existing_and_unknown_keys(db, tmp_path):
    db.add(ContentEntry(key="homepage", value=json.dumps({"title": "kept"})))
    db.commit()

    path = tmp_path / "content.json"
    path.write_text(
        json.dumps({
            "homepage": {"title": "from file"},
            "projects": [{"slug": "brand-a"}],
            "contactPage": {"email": "hello@studio.com"},
            "scratch": {"ignored": True},
        }),
        encoding="utf-8",
    )

    migrated = bootstrap_service.import_content_file(db, str(path))
    assert migrated == ["contactPage", "projects"]

    rows = {row.key: json.loads(row.value) for row in db.query(ContentEntry).all()}
    assert rows == {
        "homepage": {"title": "kept"},
        "projects": [{"slug": "brand-a"}],
        "contactPage": {"email": "hello@studio.com"},
    }


def test_import_content_file_missing_path(db):
    assert bootstrap_service.import_content_file(db, "") == []
    assert bootstrap_service.import_content_file(db, "./does-not-exist.json") == []


def test_import_content_file_validates_shape(db, tmp_path):
    path = tmp_path / "content.json"
    path.write_text(json.dumps({"projects": {"not": "a list"}}), encoding="utf-8")
    with pytest.raises(ContentSchemaError):
        bootstrap_service.import_content_file(db, str(path))
