"""업로드 파일 메타데이터 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from studio_cms.database import Base


class Upload(Base):
    __tablename__ = "uploads"

    upload_id = Column(Integer, primary_key=True, autoincrement=True)
    file_name = Column(String(255), unique=True, nullable=False)
    original_name = Column(String(255), nullable=False)
    mime_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    path = Column(String(500), nullable=False)
    uploaded_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
