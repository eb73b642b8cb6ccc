"""
Domain Constants: 파이프라인 전역 상수.

확장자 정책, 출력 파일명, 업로드 제한 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Upload Extensions (업로드 확장자 정책)
# =============================================================================
# template: .docx 만 허용
# data: .csv / .xlsx 허용

TEMPLATE_EXTENSION = "docx"
DATA_EXTENSIONS = ("csv", "xlsx")

# 파일 1개당 최대 크기 (default.yaml upload.max_file_size_mb로 변경 가능)
MAX_UPLOAD_SIZE_MB = 20

# =============================================================================
# Output (출력 파일명 정책)
# =============================================================================
# <base_name>.docx / <base_name>.pdf → reports.zip

ARCHIVE_FILENAME = "reports.zip"
BASE_NAME_MAX_LENGTH = 100
FALLBACK_BASE_NAME_PREFIX = "report_"

# =============================================================================
# MIME Types (업로드 multipart용)
# =============================================================================

MIME_TYPES = {
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".csv": "text/csv",
}


def get_extension(filename: str | None) -> str:
    """
    마지막 '.' 이후 문자열을 소문자로 반환.

    '.'이 없으면 파일명 전체가 확장자로 취급됨 (예: "docx" → "docx").
    """
    return (filename or "").lower().split(".")[-1]
