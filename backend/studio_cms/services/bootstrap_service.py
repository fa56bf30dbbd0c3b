"""초기 관리자 계정 생성과 기존 content.json 이관을 담당하는 서비스입니다."""

import json
import logging
import os
from typing import List

from sqlalchemy.orm import Session

from studio_cms.config import settings
from studio_cms.models.content import ContentEntry
from studio_cms.models.user import User
from studio_cms.services.auth_service import hash_password
from studio_cms.utils.content_schema import KNOWN_CONTENT_KEYS, validate_content
from studio_cms.utils.permissions import SUPER_ADMIN

logger = logging.getLogger(__name__)


def seed_super_admin(db: Session) -> bool:
    if db.query(User).filter(User.role == SUPER_ADMIN).first():
        return False
    db.add(
        User(
            email=settings.DEFAULT_ADMIN_EMAIL.strip().lower(),
            password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            name=settings.DEFAULT_ADMIN_NAME,
            role=SUPER_ADMIN,
        )
    )
    db.commit()
    logger.warning("[bootstrap] default super admin %s created, change the password after first login", settings.DEFAULT_ADMIN_EMAIL)
    return True


def import_content_file(db: Session, path: str) -> List[str]:
    """알려진 최상위 키 중 아직 저장되지 않은 키만 이관합니다. 이미 있는 키는 덮어쓰지 않습니다."""
    if not path or not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        document = json.load(f)

    migrated: List[str] = []
    for key in sorted(KNOWN_CONTENT_KEYS):
        if key not in document:
            continue
        if db.query(ContentEntry).filter(ContentEntry.key == key).first():
            logger.info("[bootstrap] content '%s' already exists, skipped", key)
            continue
        validate_content(key, document[key])
        db.add(ContentEntry(key=key, value=json.dumps(document[key], ensure_ascii=False)))
        migrated.append(key)
    db.commit()
    return migrated
