"""
Application Services.

역할:
- validate: 업로드 파일/출력 형식 검증
- extract: 데이터 파일 → Row 목록
- naming: Row 목록 → 파일명 목록
- pipeline: 렌더링/변환 순차 실행
"""

from .extract import ExtractionService
from .naming import derive_base_names, sanitize_filename
from .pipeline import MergePipeline
from .validate import ValidationService

__all__ = [
    "ValidationService",
    "ExtractionService",
    "derive_base_names",
    "sanitize_filename",
    "MergePipeline",
]
