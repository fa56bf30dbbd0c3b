"""감사 로그 응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class AuditLogOut(BaseModel):
    log_id: int
    user_id: Optional[int] = None
    user_email: Optional[str] = None
    action: str
    resource: Optional[str] = None
    details: Dict[str, Any]
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None
