"""
테스트 공용 헬퍼.

- FakeConverter: LibreOffice 없이 PDF 변환 흉내
- build_docx / build_xlsx / build_csv: 입력 파일 즉석 생성
"""

import io

from docx import Document
from openpyxl import Workbook

from src.domain.errors import ConversionError, ErrorCodes
from src.render.pdf import Converter


class FakeConverter(Converter):
    """
    테스트용 변환기.

    - 호출된 DOCX 바이트를 기록
    - fail_on: n번째 호출(1-based)에서 error 발생
    """

    def __init__(
        self,
        fail_on: int | None = None,
        error: Exception | None = None,
    ):
        self.calls: list[bytes] = []
        self.fail_on = fail_on
        self.error = error or ConversionError(
            ErrorCodes.CONVERSION_FAILED, error="fake conversion failure"
        )

    async def convert(self, docx_bytes: bytes) -> bytes:
        self.calls.append(docx_bytes)
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise self.error
        return b"%PDF-1.4 fake " + str(len(self.calls)).encode()


def build_docx(*paragraphs: str) -> bytes:
    """문단 목록으로 DOCX 바이트 생성."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def build_xlsx(rows: list[list[object]], sheet_title: str = "Sheet1") -> bytes:
    """2차원 목록(첫 행 헤더)으로 XLSX 바이트 생성."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_csv(text: str, encoding: str = "utf-8") -> bytes:
    return text.encode(encoding)
