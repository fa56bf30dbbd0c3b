"""콘텐츠 버전 이력 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ContentVersionSummaryOut(BaseModel):
    version_id: int
    content_key: str
    version: int
    change_description: Optional[str] = None
    created_by: Optional[int] = None
    created_by_email: Optional[str] = None
    created_at: Optional[datetime] = None


class ContentVersionOut(ContentVersionSummaryOut):
    value: Any
