"""콘텐츠 키별 변경 직전 값을 보관하는 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func

from studio_cms.database import Base


class ContentVersion(Base):
    __tablename__ = "content_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    content_key = Column(String(50), nullable=False)
    value = Column(Text, nullable=False)  # JSON string (replaced value)
    version = Column(Integer, nullable=False)
    change_description = Column(String(500))
    created_by = Column(Integer, nullable=True)
    created_by_email = Column(String(255))
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_content_versions_key", "content_key", "version", unique=True),
    )
