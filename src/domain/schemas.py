"""
Data schemas for the merge pipeline.

규칙:
- Row: 컬럼명(trim) → 문자열 값(trim). None은 빈 문자열
- 모든 데이터는 요청 단위로만 존재 (영속화 없음)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

# 행 하나: 헤더 순서를 유지하는 dict (Python dict는 삽입 순서 보장)
Row = dict[str, str]

# =============================================================================
# Output Format
# =============================================================================

class OutputFormat(str, Enum):
    """
    출력 형식.

    요청당 1회 선택, 모든 행에 동일하게 적용.
    """
    DOCX = "docx"   # 문서만
    PDF = "pdf"     # PDF만
    BOTH = "both"   # 문서 + PDF

    @property
    def includes_docx(self) -> bool:
        return self in (OutputFormat.DOCX, OutputFormat.BOTH)

    @property
    def includes_pdf(self) -> bool:
        return self in (OutputFormat.PDF, OutputFormat.BOTH)

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# =============================================================================
# Core Schemas
# =============================================================================

@dataclass(frozen=True)
class GeneratedFile:
    """ZIP에 들어갈 파일 하나 (이름 + 바이트)."""
    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadedFile:
    """업로드된 파일 (메모리 보관)."""
    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


# =============================================================================
# Run Log Schema
# =============================================================================

@dataclass
class RunLog:
    """
    실행 로그.

    generate 요청 1회 단위 실행 결과 및 메타데이터.
    파일로 저장하지 않고 요청 종료 시 로거로 1줄 출력.
    """
    run_id: str
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed

    # Request
    output_format: str | None = None
    template_name: str | None = None
    data_name: str | None = None

    # Counters
    row_count: int = 0
    file_count: int = 0
    archive_size: int | None = None

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "output_format": self.output_format,
            "template_name": self.template_name,
            "data_name": self.data_name,
            "row_count": self.row_count,
            "file_count": self.file_count,
            "archive_size": self.archive_size,
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
