"""
Pytest fixtures for the merge pipeline tests.

테스트 입력은 모두 즉석에서 생성 (merge_helpers):
- DOCX 템플릿: python-docx
- XLSX: openpyxl
- CSV: 문자열 → bytes
- PDF 변환: FakeConverter (LibreOffice 불필요)
"""

from collections.abc import Callable

import pytest

from merge_helpers import FakeConverter, build_csv, build_docx, build_xlsx


@pytest.fixture
def fake_converter() -> FakeConverter:
    """정상 동작하는 가짜 변환기."""
    return FakeConverter()


# =============================================================================
# Template Fixtures
# =============================================================================


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    """DOCX 템플릿 생성 함수."""
    return build_docx


@pytest.fixture
def letter_template() -> bytes:
    """
    안내문 템플릿.

    placeholder: {{ name }}, {{ company }}, {{ amount }}
    """
    return build_docx(
        "안내문",
        "수신: {{ name }} ({{ company }})",
        "금액: {{ amount }}",
    )


@pytest.fixture
def literal_template() -> bytes:
    """placeholder 없는 템플릿."""
    return build_docx("고정 문구만 있는 문서", "두 번째 문단")


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    """XLSX 생성 함수."""
    return build_xlsx


@pytest.fixture
def make_csv() -> Callable[..., bytes]:
    """CSV 생성 함수."""
    return build_csv


@pytest.fixture
def letter_rows() -> list[dict[str, str]]:
    """안내문 템플릿용 정규화된 행."""
    return [
        {"name": "Acme", "company": "Acme Corp", "amount": "1000"},
        {"name": "Acme", "company": "Acme Korea", "amount": "2000"},
        {"name": "", "company": "Unknown", "amount": "0"},
    ]


@pytest.fixture
def letter_xlsx() -> bytes:
    """안내문 템플릿용 XLSX (3행)."""
    return build_xlsx([
        ["name", "company", "amount"],
        ["Acme", "Acme Corp", 1000],
        ["Acme", "Acme Korea", 2000],
        [None, "Unknown", 0],
    ])


@pytest.fixture
def letter_csv() -> bytes:
    """안내문 템플릿용 CSV (2행)."""
    return build_csv("name,company,amount\nKim,Kim Co,100\nLee,Lee Co,200\n")
