"""Upload Service 도메인 서비스 레이어입니다. 미디어 파일 저장/삭제/목록 조회를 담당합니다.

콘텐츠 서비스는 파일 바이트를 알지 못하고, 여기서 돌려준 ``/uploads/...`` URL 문자열만 값으로 저장합니다.
"""

import logging
import mimetypes
import os
import time
import uuid
from typing import Optional

from fastapi import HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from studio_cms.config import settings
from studio_cms.models.upload import Upload
from studio_cms.models.user import User
from studio_cms.services import audit_service
from studio_cms.utils.helpers import file_extension, sanitize_file_name

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"


def _validate_file(file: UploadFile) -> None:
    if not file.filename:
        raise HTTPException(status_code=400, detail="업로드할 파일이 없습니다.")
    ext = file_extension(file.filename)
    allowed = {item.lower() for item in settings.ALLOWED_EXTENSIONS}
    if ext not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{ext}' not allowed. Allowed: {', '.join(sorted(allowed))}",
        )


def _safe_path(file_name: str) -> str:
    if not file_name or file_name in {".", ".."} or "/" in file_name or "\\" in file_name:
        raise HTTPException(status_code=400, detail="유효하지 않은 파일 이름입니다.")
    return os.path.join(settings.UPLOAD_DIR, file_name)


def build_file_name(original_name: str, suffix: Optional[str] = None) -> str:
    stamp = int(time.time() * 1000)
    if suffix:
        return f"{stamp}_{suffix}_{sanitize_file_name(original_name)}"
    return f"{stamp}_{sanitize_file_name(original_name)}"


def _write_new_file(original_name: str, content: bytes) -> str:
    # 같은 밀리초에 같은 이름이 들어오면 기존 파일을 덮어쓰지 않고 uuid 접미사를 붙인다.
    file_name = build_file_name(original_name)
    while True:
        path = os.path.join(settings.UPLOAD_DIR, file_name)
        try:
            with open(path, "xb") as f:
                f.write(content)
            return file_name
        except FileExistsError:
            file_name = build_file_name(original_name, suffix=uuid.uuid4().hex[:8])


async def store_upload(
    db: Session,
    file: UploadFile,
    actor: User,
    ip_address: Optional[str] = None,
) -> dict:
    _validate_file(file)
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="빈 파일은 업로드할 수 없습니다.")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise HTTPException(status_code=400, detail=f"File exceeds {limit_mb} MB limit")

    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    file_name = _write_new_file(file.filename, content)
    path = os.path.join(settings.UPLOAD_DIR, file_name)

    mime_type = file.content_type or mimetypes.guess_type(file.filename)[0] or "application/octet-stream"
    url = f"{URL_PREFIX}/{file_name}"
    try:
        db.add(
            Upload(
                file_name=file_name,
                original_name=file.filename,
                mime_type=mime_type,
                size=len(content),
                path=path,
                uploaded_by=actor.user_id,
            )
        )
        audit_service.record(
            db,
            actor=actor,
            action=audit_service.UPLOAD_CREATE,
            resource="uploads",
            details={"file_name": file_name, "size": len(content)},
            ip_address=ip_address,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        os.remove(path)
        logger.exception("[upload] failed to record %s, file removed", file_name)
        raise HTTPException(status_code=500, detail="파일 정보 저장에 실패했습니다.")

    logger.info("[upload] stored %s (%s bytes) by %s", file_name, len(content), actor.email)
    return {
        "url": url,
        "file_name": file_name,
        "original_name": file.filename,
        "size": len(content),
        "mime_type": mime_type,
    }


def delete_upload(db: Session, file_name: str, actor: User, ip_address: Optional[str] = None) -> None:
    path = _safe_path(file_name)
    row = db.query(Upload).filter(Upload.file_name == file_name).first()
    if not row and not os.path.isfile(path):
        raise HTTPException(status_code=404, detail="파일을 찾을 수 없습니다.")

    try:
        if row:
            db.delete(row)
        audit_service.record(
            db,
            actor=actor,
            action=audit_service.UPLOAD_DELETE,
            resource="uploads",
            details={"file_name": file_name},
            ip_address=ip_address,
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("[upload] failed to delete record of %s, file kept", file_name)
        raise HTTPException(status_code=500, detail="파일 삭제에 실패했습니다.")

    # 커밋이 끝난 뒤에만 실제 파일을 지운다.
    if os.path.isfile(path):
        os.remove(path)
    logger.info("[upload] deleted %s by %s", file_name, actor.email)


def list_uploads(db: Session):
    return (
        db.query(Upload)
        .order_by(Upload.created_at.desc(), Upload.upload_id.desc())
        .all()
    )


def to_list_item(row: Upload) -> dict:
    return {
        "file_name": row.file_name,
        "url": f"{URL_PREFIX}/{row.file_name}",
        "original_name": row.original_name,
        "mime_type": row.mime_type,
        "size": row.size,
        "uploaded_by": row.uploaded_by,
        "created_at": row.created_at,
    }
