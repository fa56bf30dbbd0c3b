"""Uploads 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from studio_cms.database import get_db
from studio_cms.middleware.auth_middleware import require_action
from studio_cms.models.user import User
from studio_cms.schemas.upload import UploadedFileOut, UploadListOut
from studio_cms.services import upload_service
from studio_cms.utils.helpers import client_ip
from studio_cms.utils.permissions import UPLOAD_LIST, UPLOAD_WRITE

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.get("", response_model=UploadListOut)
def list_uploads(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_action(UPLOAD_LIST)),
):
    rows = upload_service.list_uploads(db)
    return {"files": [upload_service.to_list_item(row) for row in rows]}


@router.post("", response_model=UploadedFileOut)
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(UPLOAD_WRITE)),
):
    return await upload_service.store_upload(db, file, current_user, ip_address=client_ip(request))


@router.delete("/{file_name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_upload(
    file_name: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(UPLOAD_WRITE)),
):
    upload_service.delete_upload(db, file_name, current_user, ip_address=client_ip(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
