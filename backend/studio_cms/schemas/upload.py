"""Upload 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UploadedFileOut(BaseModel):
    success: bool = True
    url: str
    file_name: str
    original_name: str
    size: int
    mime_type: str


class UploadListItem(BaseModel):
    file_name: str
    url: str
    original_name: str
    mime_type: str
    size: int
    uploaded_by: Optional[int] = None
    created_at: Optional[datetime] = None


class UploadListOut(BaseModel):
    files: list[UploadListItem]
