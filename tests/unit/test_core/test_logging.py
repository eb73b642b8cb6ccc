"""
test_logging.py - RunLog 관리 테스트

DoD:
- 요청마다 run log 생성
- 성공/실패 모두 완료 처리 후 JSON 1줄 출력
"""

import json
import logging
from datetime import UTC, datetime

from src.core.logging import complete_run_log, create_run_log, emit_run_log

# =============================================================================
# create_run_log 테스트
# =============================================================================


class TestCreateRunLog:
    """create_run_log 함수 테스트."""

    def test_initial_state(self):
        run_log = create_run_log("pdf", "letter.docx", "people.xlsx")

        assert run_log.run_id.startswith("RUN-")
        assert run_log.result == "pending"
        assert run_log.output_format == "pdf"
        assert run_log.template_name == "letter.docx"
        assert run_log.data_name == "people.xlsx"
        assert run_log.row_count == 0

    def test_has_started_at(self):
        before = datetime.now(UTC)
        run_log = create_run_log()
        after = datetime.now(UTC)

        started = datetime.fromisoformat(run_log.started_at)
        assert before <= started <= after


# =============================================================================
# complete_run_log 테스트
# =============================================================================


class TestCompleteRunLog:
    """complete_run_log 함수 테스트."""

    def test_success(self):
        run_log = create_run_log()

        complete_run_log(run_log, success=True, error_code="IGNORED")

        assert run_log.result == "success"
        assert run_log.finished_at is not None
        assert run_log.error_code is None

    def test_failure_records_error(self):
        run_log = create_run_log()

        complete_run_log(
            run_log,
            success=False,
            error_code="RENDER_FAILED",
            error_context={"row_index": 2},
        )

        assert run_log.result == "failed"
        assert run_log.error_code == "RENDER_FAILED"
        assert run_log.error_context == {"row_index": 2}


# =============================================================================
# emit_run_log 테스트
# =============================================================================


class TestEmitRunLog:
    """emit_run_log 함수 테스트."""

    def test_success_logged_as_info(self, caplog):
        run_log = create_run_log("docx")
        run_log.row_count = 3
        complete_run_log(run_log, success=True)

        with caplog.at_level(logging.INFO, logger="src.core.logging"):
            line = emit_run_log(run_log)

        data = json.loads(line)
        assert data["run_id"] == run_log.run_id
        assert data["row_count"] == 3
        assert data["result"] == "success"
        assert caplog.records[-1].levelno == logging.INFO
        assert run_log.run_id in caplog.records[-1].getMessage()

    def test_failure_logged_as_warning(self, caplog):
        run_log = create_run_log("pdf")
        complete_run_log(run_log, success=False, error_code="CONVERSION_FAILED")

        with caplog.at_level(logging.INFO, logger="src.core.logging"):
            emit_run_log(run_log)

        assert caplog.records[-1].levelno == logging.WARNING
        assert "CONVERSION_FAILED" in caplog.records[-1].getMessage()

    def test_non_ascii_preserved(self):
        run_log = create_run_log(template_name="안내문.docx")
        complete_run_log(run_log, success=True)

        line = emit_run_log(run_log)

        assert "안내문.docx" in line
