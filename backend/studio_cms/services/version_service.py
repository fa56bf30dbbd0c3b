"""콘텐츠 버전 저장/조회 공용 기능을 제공하는 도메인 서비스입니다."""

import json
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from studio_cms.models.content_version import ContentVersion
from studio_cms.models.user import User


def latest_version_no(db: Session, content_key: str) -> int:
    current_max = (
        db.query(func.max(ContentVersion.version))
        .filter(ContentVersion.content_key == content_key)
        .scalar()
    )
    return current_max or 0


def create_content_version(
    db: Session,
    *,
    content_key: str,
    value: str,
    created_by: Optional[User],
    change_description: str,
) -> ContentVersion:
    """교체되기 직전의 값(JSON 문자열)을 새 버전으로 남깁니다. 커밋은 호출 측 책임입니다."""
    row = ContentVersion(
        content_key=content_key,
        value=value,
        version=latest_version_no(db, content_key) + 1,
        change_description=change_description,
        created_by=created_by.user_id if created_by else None,
        created_by_email=created_by.email if created_by else None,
    )
    db.add(row)
    db.flush()
    return row


def list_versions(db: Session, *, content_key: str) -> List[ContentVersion]:
    return (
        db.query(ContentVersion)
        .filter(ContentVersion.content_key == content_key)
        .order_by(ContentVersion.version.desc())
        .all()
    )


def get_version(db: Session, *, content_key: str, version: int) -> ContentVersion:
    row = (
        db.query(ContentVersion)
        .filter(
            ContentVersion.content_key == content_key,
            ContentVersion.version == version,
        )
        .first()
    )
    if not row:
        raise HTTPException(status_code=404, detail="버전 이력을 찾을 수 없습니다.")
    return row


def parse_value(row: ContentVersion) -> Any:
    return json.loads(row.value)


def to_response(row: ContentVersion, include_value: bool = True) -> Dict[str, Any]:
    payload = {
        "version_id": row.version_id,
        "content_key": row.content_key,
        "version": row.version,
        "change_description": row.change_description,
        "created_by": row.created_by,
        "created_by_email": row.created_by_email,
        "created_at": row.created_at,
    }
    if include_value:
        payload["value"] = parse_value(row)
    return payload
