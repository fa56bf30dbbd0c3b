"""사이트 콘텐츠 조회/저장 도메인 서비스 레이어입니다.

단일 키 저장(``upsert_content``)은 교체되는 값을 ``content_versions`` 에 남기고,
일괄 저장(``bulk_upsert_content``)은 버전을 남기지 않고 감사 로그 한 건만 기록합니다.
버전 스냅샷, 콘텐츠 갱신, 감사 로그는 하나의 트랜잭션으로 커밋합니다.

모든 저장은 ``content.revision`` 을 1씩 올리고, ``expected_version`` 은 이 값과 비교합니다.
``content_versions.version`` 스냅샷 번호는 버전 저장 경로에서만 따로 증가합니다.

``expected_version`` 을 생략하면 마지막 저장이 이깁니다(last-write-wins). 동시에 같은 키를
저장한 두 요청은 감사 로그에는 모두 남지만 콘텐츠에는 나중 값만 남습니다.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studio_cms.models.content import ContentEntry
from studio_cms.models.user import User
from studio_cms.services import audit_service, version_service
from studio_cms.utils.content_path import ContentPathError, PathLike, parse_path, set_path_strict
from studio_cms.utils.content_schema import ContentSchemaError, validate_content

logger = logging.getLogger(__name__)


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _get_entry(db: Session, key: str) -> Optional[ContentEntry]:
    return db.query(ContentEntry).filter(ContentEntry.key == key).first()


def _current_version(entry: Optional[ContentEntry]) -> int:
    return entry.revision if entry else 0


def _validate_or_400(key: Any, value: Any) -> str:
    try:
        return validate_content(key, value)
    except ContentSchemaError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _persistence_error(db: Session, context: str) -> HTTPException:
    db.rollback()
    logger.exception("[content] %s failed, transaction rolled back", context)
    return HTTPException(status_code=500, detail="콘텐츠 저장에 실패했습니다.")


def _write_versioned(
    db: Session,
    *,
    key: str,
    value: Any,
    actor: User,
    description: str,
    expected_version: Optional[int],
) -> Tuple[ContentEntry, int]:
    entry = _get_entry(db, key)
    version_no = _current_version(entry)
    if expected_version is not None and expected_version != version_no:
        raise HTTPException(
            status_code=409,
            detail=f"다른 사용자가 먼저 수정한 콘텐츠입니다. (현재 버전 {version_no}, 요청 버전 {expected_version})",
        )

    now = datetime.utcnow()
    if entry:
        version_service.create_content_version(
            db,
            content_key=key,
            value=entry.value,
            created_by=actor,
            change_description=description,
        )
        entry.value = _dump(value)
        entry.revision = version_no + 1
        entry.updated_by = actor.user_id
        entry.updated_at = now
        return entry, entry.revision

    entry = ContentEntry(key=key, value=_dump(value), revision=1, updated_by=actor.user_id, updated_at=now)
    db.add(entry)
    return entry, 1


def _write_result(entry: ContentEntry, version_no: int) -> Dict[str, Any]:
    return {
        "key": entry.key,
        "version": version_no,
        "updated_at": entry.updated_at,
        "updated_by": entry.updated_by,
    }


def get_content_document(db: Session) -> Dict[str, Any]:
    rows = db.query(ContentEntry).order_by(ContentEntry.key).all()
    return {row.key: json.loads(row.value) for row in rows}


def get_content_entry(db: Session, key: str) -> Dict[str, Any]:
    entry = _get_entry(db, key)
    if not entry:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return {
        "key": entry.key,
        "value": json.loads(entry.value),
        "version": _current_version(entry),
        "updated_at": entry.updated_at,
        "updated_by": entry.updated_by,
    }


def upsert_content(
    db: Session,
    key: Any,
    value: Any,
    actor: User,
    description: Optional[str] = None,
    expected_version: Optional[int] = None,
    ip_address: Optional[str] = None,
) -> Dict[str, Any]:
    content_key = _validate_or_400(key, value)
    change_description = (description or "").strip() or f"Updated {content_key}"

    try:
        entry, version_no = _write_versioned(
            db,
            key=content_key,
            value=value,
            actor=actor,
            description=change_description,
            expected_version=expected_version,
        )
        audit_service.record(
            db,
            actor=actor,
            action=audit_service.CONTENT_UPDATE,
            resource=content_key,
            details={"description": change_description},
            ip_address=ip_address,
        )
        db.commit()
    except SQLAlchemyError:
        raise _persistence_error(db, f"upsert '{content_key}'")

    db.refresh(entry)
    logger.info("[content] %s updated to version %s by %s", content_key, version_no, actor.email)
    return _write_result(entry, version_no)


def bulk_upsert_content(
    db: Session,
    fragment: Dict[str, Any],
    actor: User,
    ip_address: Optional[str] = None,
) -> Dict[str, Any]:
    if not isinstance(fragment, dict) or not fragment:
        raise HTTPException(status_code=400, detail="저장할 콘텐츠가 없습니다.")
    keys: List[str] = [_validate_or_400(key, value) for key, value in fragment.items()]

    now = datetime.utcnow()
    try:
        for key in keys:
            entry = _get_entry(db, key)
            if entry:
                entry.value = _dump(fragment[key])
                entry.revision = entry.revision + 1
                entry.updated_by = actor.user_id
                entry.updated_at = now
            else:
                db.add(ContentEntry(key=key, value=_dump(fragment[key]), revision=1, updated_by=actor.user_id, updated_at=now))
        audit_service.record(
            db,
            actor=actor,
            action=audit_service.CONTENT_BULK_UPDATE,
            resource="all",
            details={"keys": keys},
            ip_address=ip_address,
        )
        db.commit()
    except SQLAlchemyError:
        raise _persistence_error(db, f"bulk upsert {keys}")

    logger.info("[content] bulk update of %s by %s", ", ".join(keys), actor.email)
    return {"keys": keys, "updated_at": now}


def update_content_path(
    db: Session,
    key: str,
    path: PathLike,
    value: Any,
    actor: User,
    description: Optional[str] = None,
    expected_version: Optional[int] = None,
    ip_address: Optional[str] = None,
) -> Dict[str, Any]:
    """저장된 값의 한 경로만 바꿔 단일 키 저장 흐름으로 다시 기록합니다."""
    entry = _get_entry(db, key)
    if not entry:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")

    try:
        new_value = set_path_strict(json.loads(entry.value), path, value)
    except ContentPathError as exc:
        raise HTTPException(status_code=400, detail=f"유효하지 않은 경로입니다. {exc}")

    dotted = ".".join(parse_path(path))
    return upsert_content(
        db,
        key,
        new_value,
        actor,
        description=description or f"Updated {key}.{dotted}",
        expected_version=expected_version,
        ip_address=ip_address,
    )


def restore_version(
    db: Session,
    key: str,
    version: int,
    actor: User,
    ip_address: Optional[str] = None,
) -> Dict[str, Any]:
    row = version_service.get_version(db, content_key=key, version=version)
    value = version_service.parse_value(row)
    description = f"Restored version {version}"

    try:
        entry, version_no = _write_versioned(
            db,
            key=key,
            value=value,
            actor=actor,
            description=description,
            expected_version=None,
        )
        audit_service.record(
            db,
            actor=actor,
            action=audit_service.CONTENT_RESTORE,
            resource=key,
            details={"restored_version": version, "description": description},
            ip_address=ip_address,
        )
        db.commit()
    except SQLAlchemyError:
        raise _persistence_error(db, f"restore '{key}' v{version}")

    db.refresh(entry)
    logger.info("[content] %s restored from version %s by %s", key, version, actor.email)
    return _write_result(entry, version_no)
