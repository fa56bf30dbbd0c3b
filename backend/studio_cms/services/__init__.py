"""서비스 레이어 패키지 초기화 모듈입니다."""

from studio_cms.services import (
    audit_service,
    version_service,
    auth_service,
    content_service,
    user_service,
    upload_service,
    bootstrap_service,
)
