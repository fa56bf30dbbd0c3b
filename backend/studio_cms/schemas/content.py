"""콘텐츠 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field


class ContentUpsertRequest(BaseModel):
    key: Optional[str] = None
    value: Any = None
    description: Optional[str] = None
    expected_version: Optional[int] = Field(default=None, ge=0)


class ContentPathUpdateRequest(BaseModel):
    path: Union[str, List[Union[str, int]]]
    value: Any = None
    description: Optional[str] = None
    expected_version: Optional[int] = Field(default=None, ge=0)


class ContentEntryOut(BaseModel):
    key: str
    value: Any
    version: int
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None


class ContentWriteResult(BaseModel):
    success: bool = True
    key: str
    version: int
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None


class ContentBulkWriteResult(BaseModel):
    success: bool = True
    keys: List[str]
    updated_at: datetime
