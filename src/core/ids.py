"""
ID 생성: run_id

요청마다 새 run_id 발급 (로그 상관관계용).
"""

import uuid
from datetime import UTC, datetime

from src.domain.constants import FALLBACK_BASE_NAME_PREFIX

RUN_ID_PREFIX = "RUN-"


def generate_run_id() -> str:
    """
    Run ID 생성.

    고유성 보장: UUID v4
    포맷: RUN-{timestamp}-{uuid[:8]}

    Returns:
        run_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"{RUN_ID_PREFIX}{timestamp}-{unique}"


def fallback_base_name(index: int) -> str:
    """
    기본 파일명 (0-based index → report_<index+1>).

    첫 번째 컬럼 값이 비어 있거나 sanitize 결과가 빈 문자열일 때 사용.
    """
    return f"{FALLBACK_BASE_NAME_PREFIX}{index + 1}"
