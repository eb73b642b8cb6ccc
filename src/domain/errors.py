"""
Error definitions for the merge pipeline.

처리 원칙:
- 조용한 실패 금지 → PipelineError로 명시적 실패
- 한 행이라도 실패하면 요청 전체 중단 (부분 결과 없음)
- 재시도 없음
"""

from typing import Any


class PipelineError(Exception):
    """
    파이프라인 단계 실패 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - 업로드 파일 누락/확장자 불일치
    - 스프레드시트 파싱 실패, 데이터 행 없음
    - 템플릿 렌더링 실패 (row_index 포함)
    - PDF 변환 실패, ZIP 생성 실패

    Usage:
        raise PipelineError(ErrorCodes.RENDER_FAILED, error=str(e), row_index=3)
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    @property
    def status_code(self) -> int:
        return ERROR_STATUS.get(self.code, 500)

    @property
    def message(self) -> str:
        """클라이언트에 노출되는 메시지."""
        if "message" in self.context:
            return str(self.context["message"])
        return ERROR_MESSAGES.get(self.code, ERROR_MESSAGES[ErrorCodes.INTERNAL_ERROR])

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }

    def to_response(self) -> dict[str, Any]:
        """
        HTTP 응답 body.

        형식: {"error": str, "detail"?: str, "rowIndex"?: int}
        """
        body: dict[str, Any] = {"error": self.message}
        detail = self.context.get("error")
        if detail:
            body["detail"] = str(detail)
        row_index = self.context.get("row_index")
        if row_index is not None:
            body["rowIndex"] = row_index
        return body


class ConversionError(PipelineError):
    """PDF 변환 실패. code는 CONVERTER_NOT_INSTALLED 또는 CONVERSION_FAILED."""
    pass


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수. 새 코드 추가 시 ERROR_STATUS/ERROR_MESSAGES에도 추가."""

    # === Validation (400) ===
    TEMPLATE_MISSING = "TEMPLATE_MISSING"
    TEMPLATE_INVALID = "TEMPLATE_INVALID"
    DATA_MISSING = "DATA_MISSING"
    DATA_INVALID = "DATA_INVALID"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_OUTPUT_FORMAT = "INVALID_OUTPUT_FORMAT"

    # === Parse (400) ===
    SPREADSHEET_INVALID = "SPREADSHEET_INVALID"
    SPREADSHEET_NO_SHEETS = "SPREADSHEET_NO_SHEETS"
    DATA_EMPTY = "DATA_EMPTY"

    # === Render (400) ===
    RENDER_FAILED = "RENDER_FAILED"

    # === Conversion (500) ===
    CONVERTER_NOT_INSTALLED = "CONVERTER_NOT_INSTALLED"
    CONVERSION_FAILED = "CONVERSION_FAILED"

    # === Archive / 기타 (500) ===
    ARCHIVE_FAILED = "ARCHIVE_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # === Routing (404) ===
    NOT_FOUND = "NOT_FOUND"


ERROR_STATUS: dict[str, int] = {
    ErrorCodes.TEMPLATE_MISSING: 400,
    ErrorCodes.TEMPLATE_INVALID: 400,
    ErrorCodes.DATA_MISSING: 400,
    ErrorCodes.DATA_INVALID: 400,
    ErrorCodes.FILE_TOO_LARGE: 400,
    ErrorCodes.INVALID_OUTPUT_FORMAT: 400,
    ErrorCodes.SPREADSHEET_INVALID: 400,
    ErrorCodes.SPREADSHEET_NO_SHEETS: 400,
    ErrorCodes.DATA_EMPTY: 400,
    ErrorCodes.RENDER_FAILED: 400,
    ErrorCodes.CONVERTER_NOT_INSTALLED: 500,
    ErrorCodes.CONVERSION_FAILED: 500,
    ErrorCodes.ARCHIVE_FAILED: 500,
    ErrorCodes.INTERNAL_ERROR: 500,
    ErrorCodes.NOT_FOUND: 404,
}

ERROR_MESSAGES: dict[str, str] = {
    ErrorCodes.TEMPLATE_MISSING: "Missing template file. Upload a .docx file.",
    ErrorCodes.TEMPLATE_INVALID: "Template must be a .docx file.",
    ErrorCodes.DATA_MISSING: "Missing data file. Upload a .csv or .xlsx file.",
    ErrorCodes.DATA_INVALID: "Data file must be .csv or .xlsx.",
    ErrorCodes.FILE_TOO_LARGE: "Uploaded file is too large. Maximum size is 20 MB.",
    ErrorCodes.INVALID_OUTPUT_FORMAT: "Invalid outputFormat. Use docx, pdf, or both.",
    ErrorCodes.SPREADSHEET_INVALID: "Invalid spreadsheet. Could not parse data file.",
    ErrorCodes.SPREADSHEET_NO_SHEETS: "Invalid spreadsheet. Could not parse data file.",
    ErrorCodes.DATA_EMPTY: "Data file has no rows (only headers or empty).",
    ErrorCodes.RENDER_FAILED: "Template error when generating a document.",
    ErrorCodes.CONVERTER_NOT_INSTALLED: (
        "PDF conversion failed: LibreOffice is not installed or not on the system PATH. "
        "Install LibreOffice (https://www.libreoffice.org/) and ensure it can be run "
        "from the command line."
    ),
    ErrorCodes.CONVERSION_FAILED: (
        "PDF conversion failed. LibreOffice must be installed on the server for PDF output."
    ),
    ErrorCodes.ARCHIVE_FAILED: "Failed to create ZIP.",
    ErrorCodes.INTERNAL_ERROR: "Server error.",
    ErrorCodes.NOT_FOUND: "Not found.",
}
