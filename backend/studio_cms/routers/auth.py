"""Auth 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from studio_cms.database import get_db
from studio_cms.schemas.user import LoginRequest, TokenResponse, UserOut
from studio_cms.services import auth_service
from studio_cms.middleware.auth_middleware import get_current_session, get_current_user
from studio_cms.models.user import User, UserSession
from studio_cms.utils.helpers import client_ip

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    token, user = auth_service.login(db, body.email, body.password, ip_address=client_ip(request))
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/logout")
def logout(
    request: Request,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, session, ip_address=client_ip(request))
    return {"message": "로그아웃 되었습니다."}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
