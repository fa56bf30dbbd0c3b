"""Permissions 관련 공용 유틸리티 헬퍼입니다. 역할별 허용 작업을 한 곳에서 관리합니다."""

from typing import Optional

SUPER_ADMIN = "super_admin"
ADMIN = "admin"
EDITOR = "editor"

ALL_ROLES = (SUPER_ADMIN, ADMIN, EDITOR)
ADMIN_ROLES = (SUPER_ADMIN, ADMIN)

CONTENT_READ = "content:read"
CONTENT_WRITE = "content:write"
CONTENT_HISTORY = "content:history"
UPLOAD_LIST = "upload:list"
UPLOAD_WRITE = "upload:write"
USER_LIST = "user:list"
USER_CREATE = "user:create"
USER_CREATE_PRIVILEGED = "user:create_privileged"
USER_CHANGE_ROLE = "user:change_role"
USER_UPDATE_OTHER = "user:update_other"
USER_DELETE = "user:delete"
AUDIT_READ = "audit:read"

# None = 인증 없이 허용
POLICY = {
    CONTENT_READ: None,
    CONTENT_WRITE: ALL_ROLES,
    CONTENT_HISTORY: ALL_ROLES,
    UPLOAD_LIST: ALL_ROLES,
    UPLOAD_WRITE: ALL_ROLES,
    USER_LIST: ADMIN_ROLES,
    USER_CREATE: ADMIN_ROLES,
    USER_CREATE_PRIVILEGED: (SUPER_ADMIN,),
    USER_CHANGE_ROLE: (SUPER_ADMIN,),
    USER_UPDATE_OTHER: ADMIN_ROLES,
    USER_DELETE: (SUPER_ADMIN,),
    AUDIT_READ: ADMIN_ROLES,
}


def is_public_action(action: str) -> bool:
    return POLICY[action] is None


def can(role: Optional[str], action: str) -> bool:
    if is_public_action(action):
        return True
    return role in POLICY[action]

