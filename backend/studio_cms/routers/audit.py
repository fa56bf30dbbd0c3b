"""감사 로그 조회 API 라우터입니다."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from studio_cms.config import settings
from studio_cms.database import get_db
from studio_cms.middleware.auth_middleware import require_action
from studio_cms.models.user import User
from studio_cms.schemas.audit import AuditLogOut
from studio_cms.services import audit_service
from studio_cms.utils.permissions import AUDIT_READ

router = APIRouter(prefix="/api/audit", tags=["audit"])


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    limit: int = Query(settings.AUDIT_LOG_DEFAULT_LIMIT, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_action(AUDIT_READ)),
):
    if limit > settings.AUDIT_LOG_MAX_LIMIT:
        raise HTTPException(status_code=400, detail=f"limit은 최대 {settings.AUDIT_LOG_MAX_LIMIT}까지 가능합니다.")
    rows = audit_service.list_logs(db, limit=limit, offset=offset)
    return [audit_service.to_response(row) for row in rows]
