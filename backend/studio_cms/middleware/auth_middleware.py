from datetime import datetime

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from studio_cms.database import get_db
from studio_cms.models.user import User, UserSession
from studio_cms.config import settings
from studio_cms.utils.permissions import can

# 자격 증명이 없을 때 403 대신 401을 직접 반환하기 위해 auto_error를 끈다.
security = HTTPBearer(auto_error=False)

ALGORITHM = "HS256"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        raise _unauthorized("Invalid or expired token")


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> UserSession:
    if credentials is None:
        raise _unauthorized("Not authenticated")
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    token_id = payload.get("jti")
    if user_id is None or token_id is None:
        raise _unauthorized("Invalid token payload")

    session = (
        db.query(UserSession)
        .filter(UserSession.token_id == token_id, UserSession.user_id == int(user_id))
        .first()
    )
    if not session or session.expires_at < datetime.utcnow():
        raise _unauthorized("Session expired or logged out")
    return session


def get_current_user(session: UserSession = Depends(get_current_session)) -> User:
    if session.user is None:
        raise _unauthorized("User not found")
    return session.user


def require_action(action: str):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if not can(current_user.role, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden: '{current_user.role}' cannot perform {action}",
            )
        return current_user
    return checker
