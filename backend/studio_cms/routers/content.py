"""사이트 콘텐츠 API 라우터입니다. 조회는 공개, 저장/이력은 편집자 이상만 허용합니다."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from studio_cms.database import get_db
from studio_cms.middleware.auth_middleware import require_action
from studio_cms.models.user import User
from studio_cms.schemas.content import (
    ContentBulkWriteResult,
    ContentEntryOut,
    ContentPathUpdateRequest,
    ContentUpsertRequest,
    ContentWriteResult,
)
from studio_cms.schemas.version import ContentVersionOut, ContentVersionSummaryOut
from studio_cms.services import content_service, version_service
from studio_cms.utils.helpers import client_ip
from studio_cms.utils.permissions import CONTENT_HISTORY, CONTENT_WRITE

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("", response_model=Dict[str, Any])
def get_content(db: Session = Depends(get_db)):
    return content_service.get_content_document(db)


@router.put("", response_model=ContentWriteResult)
def upsert_content(
    data: ContentUpsertRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(CONTENT_WRITE)),
):
    if not data.key or "value" not in data.model_fields_set:
        raise HTTPException(status_code=400, detail="key와 value는 필수입니다.")
    return content_service.upsert_content(
        db,
        data.key,
        data.value,
        current_user,
        description=data.description,
        expected_version=data.expected_version,
        ip_address=client_ip(request),
    )


@router.post("", response_model=ContentBulkWriteResult)
def bulk_upsert_content(
    request: Request,
    fragment: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(CONTENT_WRITE)),
):
    return content_service.bulk_upsert_content(db, fragment, current_user, ip_address=client_ip(request))


@router.get("/{key}", response_model=ContentEntryOut)
def get_content_entry(key: str, db: Session = Depends(get_db)):
    return content_service.get_content_entry(db, key)


@router.patch("/{key}", response_model=ContentWriteResult)
def update_content_path(
    key: str,
    data: ContentPathUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(CONTENT_WRITE)),
):
    if "value" not in data.model_fields_set:
        raise HTTPException(status_code=400, detail="value는 필수입니다.")
    return content_service.update_content_path(
        db,
        key,
        data.path,
        data.value,
        current_user,
        description=data.description,
        expected_version=data.expected_version,
        ip_address=client_ip(request),
    )


@router.get("/{key}/versions", response_model=List[ContentVersionSummaryOut])
def list_versions(
    key: str,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_action(CONTENT_HISTORY)),
):
    rows = version_service.list_versions(db, content_key=key)
    return [version_service.to_response(row, include_value=False) for row in rows]


@router.get("/{key}/versions/{version}", response_model=ContentVersionOut)
def get_version(
    key: str,
    version: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_action(CONTENT_HISTORY)),
):
    row = version_service.get_version(db, content_key=key, version=version)
    return version_service.to_response(row)


@router.post("/{key}/versions/{version}/restore", response_model=ContentWriteResult)
def restore_version(
    key: str,
    version: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(CONTENT_WRITE)),
):
    return content_service.restore_version(db, key, version, current_user, ip_address=client_ip(request))
