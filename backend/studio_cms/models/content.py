"""사이트 콘텐츠(키별 JSON 문서)를 저장하는 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, String, Text, DateTime, Integer
from sqlalchemy.sql import func

from studio_cms.database import Base


class ContentEntry(Base):
    __tablename__ = "content"

    key = Column(String(50), primary_key=True)  # homepage/projects/studioPage ...
    value = Column(Text, nullable=False)  # JSON string
    # 단일/일괄/복원 저장마다 1씩 증가. expected_version 비교 대상
    revision = Column(Integer, nullable=False, default=1, server_default="1")
    # 사용자 삭제 후에도 이력을 남기기 위해 FK를 두지 않는다.
    updated_by = Column(Integer, nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
