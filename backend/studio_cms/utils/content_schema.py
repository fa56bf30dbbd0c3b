"""콘텐츠 저장 전 키/값 형태를 검증하는 헬퍼입니다."""

import json
import re
from typing import Any

CONTENT_KEY_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]{0,49}")

OBJECT_CONTENT_KEYS = {"homepage", "projectsPage", "studioPage", "databasePage", "contactPage"}
LIST_CONTENT_KEYS = {"projects"}
KNOWN_CONTENT_KEYS = OBJECT_CONTENT_KEYS | LIST_CONTENT_KEYS


class ContentSchemaError(ValueError):
    pass


def validate_content_key(key: Any) -> str:
    if not isinstance(key, str) or not CONTENT_KEY_RE.fullmatch(key):
        raise ContentSchemaError(f"유효하지 않은 콘텐츠 키입니다: {key!r}")
    return key


def _ensure_json_serializable(key: str, value: Any) -> None:
    try:
        json.dumps(value, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ContentSchemaError(f"'{key}' 값은 JSON으로 직렬화할 수 없습니다: {exc}") from exc


def validate_content_value(key: str, value: Any) -> Any:
    _ensure_json_serializable(key, value)
    if key in OBJECT_CONTENT_KEYS and not isinstance(value, dict):
        raise ContentSchemaError(f"'{key}' 값은 객체여야 합니다.")
    if key in LIST_CONTENT_KEYS:
        if not isinstance(value, list):
            raise ContentSchemaError(f"'{key}' 값은 배열이어야 합니다.")
        for index, item in enumerate(value):
            if not isinstance(item, dict):
                raise ContentSchemaError(f"'{key}[{index}]' 항목은 객체여야 합니다.")
    return value


def validate_content(key: Any, value: Any) -> str:
    checked_key = validate_content_key(key)
    validate_content_value(checked_key, value)
    return checked_key
