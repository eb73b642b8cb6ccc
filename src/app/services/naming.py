"""
Naming Service: 행마다 파일명(base name) 결정.

규칙:
- 첫 번째 컬럼 값 사용 (첫 행의 첫 키)
- / \\ : * ? " < > | → "_", 연속 공백 → "_", 최대 100자
- sanitize 결과가 비면 report_<1-based index>
- 중복: 첫 번째는 그대로, 이후 _2, _3, ... (대소문자 구분)

중복 카운터는 호출마다 새로 만든 로컬 dict → 요청 간 공유 없음.
"""

import re
from collections.abc import Sequence

from src.core.ids import fallback_base_name
from src.domain.constants import BASE_NAME_MAX_LENGTH
from src.domain.schemas import Row

UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|]')
WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_filename(value: object) -> str:
    """
    파일명으로 안전한 문자열 생성.

    Args:
        value: 셀 값 (문자열이 아니면 "")

    Returns:
        sanitize된 문자열 (빈 문자열 가능)
    """
    if not isinstance(value, str):
        return ""
    sanitized = UNSAFE_CHARS.sub("_", value.strip())
    sanitized = WHITESPACE_RUN.sub("_", sanitized)
    return sanitized[:BASE_NAME_MAX_LENGTH]


def derive_base_names(rows: Sequence[Row]) -> list[str]:
    """
    Row 목록 → base name 목록 (순서/길이 동일).

    Examples:
        첫 컬럼 ["Acme", "Acme", ""] → ["Acme", "Acme_2", "report_3"]
    """
    if not rows:
        return []

    first_column = next(iter(rows[0]), None)
    if first_column is None:
        return [fallback_base_name(i) for i in range(len(rows))]

    seen: dict[str, int] = {}
    names: list[str] = []
    for i, row in enumerate(rows):
        base = sanitize_filename(row.get(first_column, "")) or fallback_base_name(i)
        count = seen.get(base, 0)
        seen[base] = count + 1
        names.append(base if count == 0 else f"{base}_{count + 1}")
    return names
