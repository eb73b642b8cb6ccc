"""
Render layer: DOCX/PDF/ZIP 출력 생성.

역할:
- 템플릿 + 행 → DOCX (docxtpl)
- DOCX → PDF (Converter, 기본 LibreOffice)
- 결과 파일 → ZIP
"""

from .archive import build_archive, iter_chunks
from .pdf import Converter, LibreOfficeConverter, classify_conversion_error
from .word import DocxRenderer

__all__ = [
    "DocxRenderer",
    "Converter",
    "LibreOfficeConverter",
    "classify_conversion_error",
    "build_archive",
    "iter_chunks",
]
