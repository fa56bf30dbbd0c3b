"""Users 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from typing import List

from studio_cms.database import get_db
from studio_cms.middleware.auth_middleware import get_current_user, require_action
from studio_cms.models.user import User
from studio_cms.schemas.user import UserCreate, UserOut, UserUpdate
from studio_cms.services import user_service
from studio_cms.utils.helpers import client_ip
from studio_cms.utils.permissions import USER_CREATE, USER_DELETE, USER_LIST

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_action(USER_LIST)),
):
    return user_service.list_users(db)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(USER_CREATE)),
):
    return user_service.create_user(db, data, current_user, ip_address=client_ip(request))


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    data: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # 본인 프로필 수정은 역할과 무관하게 허용되므로 권한 판단은 서비스에서 한다.
    return user_service.update_user(db, user_id, data, current_user, ip_address=client_ip(request))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(USER_DELETE)),
):
    user_service.delete_user(db, user_id, current_user, ip_address=client_ip(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
