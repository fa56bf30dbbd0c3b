"""감사 로그 기록/조회 도메인 서비스입니다.

``record`` 는 커밋하지 않고 세션에 추가만 합니다. 호출한 서비스가 본 작업과 같은
트랜잭션으로 커밋해야 감사 기록과 데이터 변경이 함께 반영됩니다.
"""

import json
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from studio_cms.models.audit_log import AuditLog
from studio_cms.models.user import User

LOGIN = "login"
LOGOUT = "logout"
CONTENT_UPDATE = "content_update"
CONTENT_BULK_UPDATE = "content_bulk_update"
CONTENT_RESTORE = "content_restore"
USER_CREATE = "user_create"
USER_UPDATE = "user_update"
USER_DELETE = "user_delete"
UPLOAD_CREATE = "upload_create"
UPLOAD_DELETE = "upload_delete"


def record(
    db: Session,
    *,
    actor: Optional[User],
    action: str,
    resource: str,
    details: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
) -> AuditLog:
    row = AuditLog(
        user_id=actor.user_id if actor else None,
        user_email=actor.email if actor else None,
        action=action,
        resource=resource,
        details=json.dumps(details or {}, ensure_ascii=False),
        ip_address=ip_address,
    )
    db.add(row)
    return row


def list_logs(db: Session, *, limit: int, offset: int = 0) -> List[AuditLog]:
    return (
        db.query(AuditLog)
        .order_by(AuditLog.created_at.desc(), AuditLog.log_id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def parse_details(row: AuditLog) -> Dict[str, Any]:
    try:
        return json.loads(row.details or "{}")
    except json.JSONDecodeError:
        return {}


def to_response(row: AuditLog) -> Dict[str, Any]:
    return {
        "log_id": row.log_id,
        "user_id": row.user_id,
        "user_email": row.user_email,
        "action": row.action,
        "resource": row.resource,
        "details": parse_details(row),
        "ip_address": row.ip_address,
        "created_at": row.created_at,
    }
