"""
Run logging: 요청 단위 run log

규칙:
- generate 요청마다 RunLog 1개 (성공/실패 모두)
- 파일 저장 없음 → 요청 종료 시 JSON 1줄로 로거에 출력
- 실패 시 error_code, error_context 필수
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from src.core.ids import generate_run_id
from src.domain.schemas import RunLog

logger = logging.getLogger(__name__)


def create_run_log(
    output_format: str | None = None,
    template_name: str | None = None,
    data_name: str | None = None,
) -> RunLog:
    """
    새 RunLog 생성.

    Args:
        output_format: 요청된 출력 형식 (검증 전 원문일 수 있음)
        template_name: 업로드된 템플릿 파일명
        data_name: 업로드된 데이터 파일명

    Returns:
        초기화된 RunLog
    """
    return RunLog(
        run_id=generate_run_id(),
        started_at=datetime.now(UTC).isoformat(),
        result="pending",
        output_format=output_format,
        template_name=template_name,
        data_name=data_name,
    )


def complete_run_log(
    run_log: RunLog,
    success: bool,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 처리.

    Args:
        run_log: RunLog 인스턴스
        success: 성공 여부
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    run_log.finished_at = datetime.now(UTC).isoformat()
    run_log.result = "success" if success else "failed"

    if not success:
        run_log.error_code = error_code
        run_log.error_context = error_context


def emit_run_log(run_log: RunLog, target: logging.Logger | None = None) -> str:
    """
    RunLog를 JSON 1줄로 로깅.

    성공은 INFO, 실패는 WARNING.

    Returns:
        출력된 JSON 문자열
    """
    line = json.dumps(run_log.to_dict(), ensure_ascii=False, default=str)
    log = target or logger
    if run_log.result == "success":
        log.info(f"run {line}")
    else:
        log.warning(f"run {line}")
    return line
