"""Auth Service 도메인 서비스 레이어입니다. 비밀번호 검증, 세션 발급/폐기를 담당합니다."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

import bcrypt
from jose import jwt
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from studio_cms.models.user import User, UserSession
from studio_cms.config import settings
from studio_cms.services import audit_service

ALGORITHM = "HS256"

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # 저장된 해시 형식이 깨진 경우
        return False


def create_access_token(user_id: int, token_id: str, expire: datetime) -> str:
    payload = {"sub": str(user_id), "jti": token_id, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == (email or "").strip().lower()).first()
    if not user or not verify_password(password or "", user.password_hash):
        logger.warning("[auth] failed login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="이메일 또는 비밀번호가 올바르지 않습니다.",
        )
    return user


def login(db: Session, email: str, password: str, ip_address: Optional[str] = None) -> Tuple[str, User]:
    user = authenticate(db, email, password)

    now = datetime.utcnow()
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token_id = uuid.uuid4().hex
    db.add(UserSession(user_id=user.user_id, token_id=token_id, expires_at=expire))
    user.last_login = now
    audit_service.record(
        db,
        actor=user,
        action=audit_service.LOGIN,
        resource="auth",
        details={"method": "credentials"},
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(user)
    logger.info("[auth] %s logged in", user.email)
    return create_access_token(user.user_id, token_id, expire), user


def logout(db: Session, session: UserSession, ip_address: Optional[str] = None) -> None:
    user = session.user
    audit_service.record(
        db,
        actor=user,
        action=audit_service.LOGOUT,
        resource="auth",
        ip_address=ip_address,
    )
    db.delete(session)
    db.commit()


def purge_expired_sessions(db: Session) -> int:
    count = db.query(UserSession).filter(UserSession.expires_at < datetime.utcnow()).delete()
    db.commit()
    return count
