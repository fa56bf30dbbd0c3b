"""User Service 도메인 서비스 레이어입니다. 관리자 계정 CRUD와 역할 규칙을 캡슐화합니다."""

from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from studio_cms.models.user import User
from studio_cms.schemas.user import UserCreate, UserUpdate
from studio_cms.services import audit_service
from studio_cms.services.auth_service import hash_password
from studio_cms.utils.permissions import (
    ALL_ROLES,
    EDITOR,
    USER_CHANGE_ROLE,
    USER_CREATE_PRIVILEGED,
    USER_UPDATE_OTHER,
    can,
)


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _normalize_role_or_raise(role: Optional[str]) -> str:
    text = str(role or "").strip() or EDITOR
    if text not in ALL_ROLES:
        raise HTTPException(status_code=400, detail="유효하지 않은 역할입니다.")
    return text


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")
    return user


def _ensure_email_available(db: Session, email: str, exclude_user_id: Optional[int] = None) -> None:
    q = db.query(User).filter(User.email == email)
    if exclude_user_id is not None:
        q = q.filter(User.user_id != exclude_user_id)
    if q.first():
        raise HTTPException(status_code=409, detail="이미 사용 중인 이메일입니다.")


def list_users(db: Session):
    return db.query(User).order_by(User.user_id).all()


def create_user(db: Session, data: UserCreate, current_user: User, ip_address: Optional[str] = None) -> User:
    email = _normalize_email(data.email)
    name = (data.name or "").strip()
    if not email or not data.password or not name:
        raise HTTPException(status_code=400, detail="이메일, 비밀번호, 이름은 필수입니다.")

    role = _normalize_role_or_raise(data.role)
    if role != EDITOR and not can(current_user.role, USER_CREATE_PRIVILEGED):
        raise HTTPException(status_code=403, detail="관리자 계정은 최고 관리자만 생성할 수 있습니다.")
    _ensure_email_available(db, email)

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        name=name,
        role=role,
        avatar=data.avatar,
    )
    db.add(user)
    audit_service.record(
        db,
        actor=current_user,
        action=audit_service.USER_CREATE,
        resource="users",
        details={"new_user_email": email, "role": role},
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(user)
    return user


def update_user(
    db: Session,
    user_id: int,
    data: UserUpdate,
    current_user: User,
    ip_address: Optional[str] = None,
) -> User:
    is_own_profile = user_id == current_user.user_id
    if not is_own_profile and not can(current_user.role, USER_UPDATE_OTHER):
        raise HTTPException(status_code=403, detail="다른 사용자의 정보를 수정할 권한이 없습니다.")

    payload = data.model_dump(exclude_unset=True)
    if payload.get("role") is not None and not can(current_user.role, USER_CHANGE_ROLE):
        raise HTTPException(status_code=403, detail="역할은 최고 관리자만 변경할 수 있습니다.")

    user = _get_user_or_404(db, user_id)

    changed: list[str] = []
    if payload.get("email") is not None:
        email = _normalize_email(payload["email"])
        if not email:
            raise HTTPException(status_code=400, detail="이메일은 비워둘 수 없습니다.")
        _ensure_email_available(db, email, exclude_user_id=user.user_id)
        user.email = email
        changed.append("email")
    if payload.get("name") is not None:
        name = payload["name"].strip()
        if not name:
            raise HTTPException(status_code=400, detail="이름은 비워둘 수 없습니다.")
        user.name = name
        changed.append("name")
    if payload.get("role") is not None:
        user.role = _normalize_role_or_raise(payload["role"])
        changed.append("role")
    if payload.get("password"):
        user.password_hash = hash_password(payload["password"])
        changed.append("password")
    if "avatar" in payload:
        user.avatar = payload["avatar"]
        changed.append("avatar")

    audit_service.record(
        db,
        actor=current_user,
        action=audit_service.USER_UPDATE,
        resource="users",
        details={"target_user_id": user.user_id, "fields": changed},
        ip_address=ip_address,
    )
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current_user: User, ip_address: Optional[str] = None) -> None:
    if user_id == current_user.user_id:
        raise HTTPException(status_code=400, detail="본인 계정은 삭제할 수 없습니다.")

    user = _get_user_or_404(db, user_id)
    deleted_email = user.email
    # 세션은 cascade로 함께 삭제되고, 감사 로그/버전 이력은 이메일과 ID를 그대로 보존한다.
    db.delete(user)
    audit_service.record(
        db,
        actor=current_user,
        action=audit_service.USER_DELETE,
        resource="users",
        details={"deleted_user_email": deleted_email},
        ip_address=ip_address,
    )
    db.commit()
