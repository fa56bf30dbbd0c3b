"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from studio_cms.models.user import User, UserSession
from studio_cms.models.content import ContentEntry
from studio_cms.models.content_version import ContentVersion
from studio_cms.models.audit_log import AuditLog
from studio_cms.models.upload import Upload

__all__ = [
    "User", "UserSession",
    "ContentEntry",
    "ContentVersion",
    "AuditLog",
    "Upload",
]
