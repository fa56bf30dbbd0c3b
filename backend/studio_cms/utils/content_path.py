"""콘텐츠 JSON 트리에서 경로(path)로 값을 읽고 쓰는 순수 함수 모음입니다.

경로는 문자열 세그먼트의 목록이며, 리스트 인덱스는 숫자 문자열("0", "1")로 표현합니다.
``"homepage.hero.title"`` 처럼 점(.)으로 구분한 문자열도 허용합니다.

``get_path``/``set_path`` 는 중간 경로가 없어도 예외를 던지지 않는 관대한 계약을 따르고,
API 경계에서는 ``resolve_path``/``set_path_strict`` 로 도달 불가능한 경로를 즉시 거절합니다.
"""

import copy
import re
from typing import Any, Iterable, List, Optional, Tuple, Union

PathLike = Union[str, Iterable[Any]]

_INDEX_RE = re.compile(r"[0-9]+")


class ContentPathError(ValueError):
    def __init__(self, path: List[str], depth: int, reason: str):
        self.path = path
        self.depth = depth
        self.reason = reason
        location = ".".join(path[: depth + 1]) or "<root>"
        super().__init__(f"{location}: {reason}")


def parse_path(path: PathLike) -> List[str]:
    if path is None:
        return []
    if isinstance(path, str):
        text = path.strip()
        return text.split(".") if text else []
    return [str(segment) for segment in path]


def _as_index(segment: str) -> Optional[int]:
    if _INDEX_RE.fullmatch(segment):
        return int(segment)
    return None


def _step(node: Any, segment: str) -> Tuple[bool, Any]:
    if isinstance(node, dict):
        if segment in node:
            return True, node[segment]
        return False, None
    if isinstance(node, list):
        index = _as_index(segment)
        if index is not None and index < len(node):
            return True, node[index]
    return False, None


def _assign(container: Any, segment: str, value: Any) -> bool:
    if isinstance(container, dict):
        container[segment] = value
        return True
    if isinstance(container, list):
        index = _as_index(segment)
        if index is None:
            return False
        if index < len(container):
            container[index] = value
            return True
        if index == len(container):
            container.append(value)
            return True
    return False


def get_path(root: Any, path: PathLike) -> Any:
    current = root
    for segment in parse_path(path):
        found, current = _step(current, segment)
        if not found:
            return None
    return current


def set_path(root: Any, path: PathLike, value: Any) -> Any:
    """``root`` 의 깊은 복사본에 ``value`` 를 기록해 반환합니다. 원본은 변경하지 않습니다.

    중간 세그먼트가 없거나 컨테이너가 아니면 복사본을 그대로 돌려줍니다.
    """
    segments = parse_path(path)
    if not segments:
        return copy.deepcopy(value)

    new_root = copy.deepcopy(root)
    target = new_root
    for segment in segments[:-1]:
        found, target = _step(target, segment)
        if not found or not isinstance(target, (dict, list)):
            return new_root
    _assign(target, segments[-1], value)
    return new_root


def resolve_path(root: Any, path: PathLike) -> List[str]:
    segments = parse_path(path)
    if not segments:
        raise ContentPathError(segments, -1, "빈 경로에는 값을 기록할 수 없습니다.")

    target = root
    for depth, segment in enumerate(segments[:-1]):
        found, target = _step(target, segment)
        if not found:
            raise ContentPathError(segments, depth, "경로를 찾을 수 없습니다.")
        if not isinstance(target, (dict, list)):
            raise ContentPathError(segments, depth, "객체나 배열이 아닌 값의 하위 경로입니다.")

    last = segments[-1]
    if isinstance(target, list):
        index = _as_index(last)
        if index is None:
            raise ContentPathError(segments, len(segments) - 1, "배열 인덱스는 숫자여야 합니다.")
        if index > len(target):
            raise ContentPathError(segments, len(segments) - 1, "배열 범위를 벗어난 인덱스입니다.")
    elif not isinstance(target, dict):
        raise ContentPathError(segments, len(segments) - 1, "객체나 배열이 아닌 값에는 기록할 수 없습니다.")
    return segments


def set_path_strict(root: Any, path: PathLike, value: Any) -> Any:
    segments = resolve_path(root, path)
    return set_path(root, segments, value)
