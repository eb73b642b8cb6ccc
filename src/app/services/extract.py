"""
Extraction Service: 데이터 파일(.csv/.xlsx) → 행 목록.

규칙:
- 첫 번째 시트만 사용, 첫 행은 헤더
- 빈 셀은 "" (누락 셀 기본값)
- 날짜 셀은 날짜로 읽은 뒤 문자열화 (YYYY-MM-DD)
- 백분율/천 단위 구분 서식은 Excel 표시값 그대로 (50%, 1,234.50)
- 키/값 모두 trim, None → ""
- 완전히 빈 행은 건너뜀
- 행 0개 → DATA_EMPTY
"""

import csv
import io
import re
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from openpyxl import load_workbook

from src.domain.constants import get_extension
from src.domain.errors import ErrorCodes, PipelineError
from src.domain.schemas import Row

# 빈 헤더 셀 이름 (sheet_to_json 호환)
EMPTY_HEADER = "__EMPTY"

# CSV 디코딩 후보 (Excel 한글 CSV는 cp949인 경우가 많음)
CSV_ENCODINGS = ("utf-8-sig", "cp949")

# 숫자 서식의 소수 자릿수 (예: "0.00%" → "00")
NUMBER_FORMAT_DECIMALS = re.compile(r"0\.(0+)")


# =============================================================================
# Cell / Row Normalization
# =============================================================================

def stringify_cell(value: Any) -> str:
    """
    셀 값 → trim된 문자열.

    - None → ""
    - date / 자정 datetime → YYYY-MM-DD
    - datetime → YYYY-MM-DD HH:MM:SS
    - 정수값 float → "10" (10.0 아님)
    - bool → TRUE / FALSE
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value).strip()


def format_number(value: Any, number_format: str | None) -> str | None:
    """
    숫자 셀에 표시 형식 적용.

    - 백분율: 0% → "50%", 0.00% → "12.50%"
    - 천 단위 구분: #,##0.00 → "1,234.50"
    - 고정 소수점: 0.00 → "3.10"

    Returns:
        표시 문자열. 적용할 서식이 없으면 None (stringify_cell 사용)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    if not number_format or number_format == "General":
        return None

    section = number_format.split(";")[0]  # 양수 구간만
    match = NUMBER_FORMAT_DECIMALS.search(section)
    decimals = len(match.group(1)) if match else 0

    if "%" in section:
        return f"{value * 100:.{decimals}f}%"
    if "#,##0" in section:
        return f"{value:,.{decimals}f}"
    if match and set(section) <= {"0", "."}:
        return f"{value:.{decimals}f}"
    return None


def cell_text(cell: Any) -> str:
    """XLSX 셀 → Excel 표시값에 가까운 문자열."""
    formatted = format_number(cell.value, cell.number_format)
    if formatted is not None:
        return formatted
    return stringify_cell(cell.value)


def normalize_row(raw: dict[Any, Any]) -> Row:
    """키 trim, 값은 trim된 문자열 (None → "")."""
    out: Row = {}
    for key, value in raw.items():
        name = key.strip() if isinstance(key, str) else str(key)
        out[name] = stringify_cell(value)
    return out


def build_headers(header_cells: Iterable[Any]) -> list[str]:
    """
    헤더 행 → 컬럼 키 목록.

    - 빈 헤더: __EMPTY, __EMPTY_1, ...
    - 중복 헤더: Name, Name_1, Name_2, ...
    """
    headers: list[str] = []
    seen: dict[str, int] = {}
    for cell in header_cells:
        name = stringify_cell(cell) or EMPTY_HEADER
        count = seen.get(name, 0)
        seen[name] = count + 1
        headers.append(name if count == 0 else f"{name}_{count}")
    return headers


def rows_to_records(rows: Iterable[tuple[Any, ...] | list[Any]]) -> list[Row]:
    """
    2차원 셀 목록 → 헤더 키 기반 Row 목록.

    첫 행은 헤더. 헤더보다 짧은 행은 "" 로 채움.
    """
    iterator: Iterator[tuple[Any, ...] | list[Any]] = iter(rows)
    header_row = next(iterator, None)
    if header_row is None:
        return []

    headers = build_headers(header_row)
    records: list[Row] = []
    for cells in iterator:
        values = list(cells)
        if all(stringify_cell(v) == "" for v in values):
            continue  # 빈 행

        raw: dict[str, Any] = {}
        for i, header in enumerate(headers):
            raw[header] = values[i] if i < len(values) else ""
        records.append(normalize_row(raw))
    return records


# =============================================================================
# Format Readers
# =============================================================================

def read_xlsx_rows(content: bytes) -> list[Row]:
    """XLSX 첫 번째 시트 → Row 목록."""
    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        raise PipelineError(ErrorCodes.SPREADSHEET_INVALID, error=str(e)) from e

    # read_only 모드는 시트 XML을 iter_rows 중에 파싱 → 손상된 시트도 여기서 실패
    try:
        if not wb.sheetnames:
            raise PipelineError(
                ErrorCodes.SPREADSHEET_NO_SHEETS,
                error="Spreadsheet has no sheets.",
            )
        ws = wb[wb.sheetnames[0]]
        cells = [[cell_text(cell) for cell in row] for row in ws.iter_rows()]
    except PipelineError:
        raise
    except Exception as e:
        raise PipelineError(ErrorCodes.SPREADSHEET_INVALID, error=str(e)) from e
    finally:
        wb.close()

    return rows_to_records(cells)


def decode_csv(content: bytes) -> str:
    """CSV 바이트 디코딩 (UTF-8 → CP949 순서)."""
    for encoding in CSV_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise PipelineError(
        ErrorCodes.SPREADSHEET_INVALID,
        error=f"Unsupported text encoding (tried {', '.join(CSV_ENCODINGS)})",
    )


def read_csv_rows(content: bytes) -> list[Row]:
    """CSV → Row 목록."""
    text = decode_csv(content)
    try:
        reader = csv.reader(io.StringIO(text, newline=""))
        return rows_to_records(list(reader))
    except csv.Error as e:
        raise PipelineError(ErrorCodes.SPREADSHEET_INVALID, error=str(e)) from e


# =============================================================================
# Service
# =============================================================================

class ExtractionService:
    """
    행 추출 서비스.

    Usage:
        rows = ExtractionService().extract(data_bytes, "customers.xlsx")
    """

    def extract(self, content: bytes, filename: str) -> list[Row]:
        """
        데이터 파일 → 정규화된 Row 목록.

        Args:
            content: 업로드된 파일 바이트
            filename: 원본 파일명 (확장자로 파서 선택)

        Returns:
            Row 목록 (1개 이상)

        Raises:
            PipelineError: SPREADSHEET_INVALID, SPREADSHEET_NO_SHEETS, DATA_EMPTY
        """
        ext = get_extension(filename)
        rows = read_csv_rows(content) if ext == "csv" else read_xlsx_rows(content)

        if not rows:
            raise PipelineError(ErrorCodes.DATA_EMPTY, filename=filename)
        return rows
