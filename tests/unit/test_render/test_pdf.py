"""
test_pdf.py - PDF 변환기 테스트

테스트 대상:
- classify_conversion_error: 미설치 패턴 분류
- LibreOfficeConverter: binary 확인, subprocess 결과 처리
  (실제 soffice 대신 가짜 실행 스크립트 사용)
"""

import os
import stat
from pathlib import Path

import pytest

from src.domain.errors import ConversionError, ErrorCodes
from src.render.pdf import LibreOfficeConverter, classify_conversion_error


def write_script(path: Path, body: str) -> Path:
    """실행 가능한 sh 스크립트 생성."""
    path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


posix_only = pytest.mark.skipif(os.name != "posix", reason="sh 스크립트 필요")


# =============================================================================
# classify_conversion_error 테스트
# =============================================================================


class TestClassifyConversionError:
    """classify_conversion_error 테스트."""

    @pytest.mark.parametrize(
        "message",
        [
            "spawn soffice ENOENT",
            "/bin/sh: libreoffice: command not found",
            "soffice: not found",
            "Could not find LibreOffice",
            "[Errno 2] No such file or directory: 'soffice'",
        ],
    )
    def test_missing_converter(self, message: str):
        assert classify_conversion_error(message) == ErrorCodes.CONVERTER_NOT_INSTALLED

    @pytest.mark.parametrize(
        "message",
        [
            "source file could not be loaded",
            "Error: unexpected EOF",
            "",
        ],
    )
    def test_generic_failure(self, message: str):
        assert classify_conversion_error(message) == ErrorCodes.CONVERSION_FAILED


# =============================================================================
# LibreOfficeConverter 테스트
# =============================================================================


class TestLibreOfficeConverter:
    """LibreOfficeConverter 테스트."""

    def test_unavailable_binary(self):
        converter = LibreOfficeConverter(binary="definitely-not-a-real-soffice")

        assert converter.is_available() is False

    @pytest.mark.asyncio
    async def test_missing_binary_raises_not_installed(self):
        converter = LibreOfficeConverter(binary="definitely-not-a-real-soffice")

        with pytest.raises(ConversionError) as exc_info:
            await converter.convert(b"docx")

        error = exc_info.value
        assert error.code == ErrorCodes.CONVERTER_NOT_INSTALLED
        assert error.status_code == 500
        assert "LibreOffice is not installed" in error.message
        assert "definitely-not-a-real-soffice" in error.context["error"]

    @posix_only
    @pytest.mark.asyncio
    async def test_successful_conversion(self, tmp_path: Path):
        """가짜 soffice: 입력 파일을 <outdir>/document.pdf 로 복사."""
        fake = write_script(
            tmp_path / "fake-soffice",
            'for last; do :; done\n'
            'while [ "$#" -gt 0 ]; do\n'
            '  if [ "$1" = "--outdir" ]; then outdir="$2"; fi\n'
            '  shift\n'
            'done\n'
            'cp "$last" "$outdir/document.pdf"\n',
        )
        converter = LibreOfficeConverter(binary=str(fake))

        result = await converter.convert(b"rendered docx bytes")

        assert result == b"rendered docx bytes"

    @posix_only
    @pytest.mark.asyncio
    async def test_nonzero_exit_is_conversion_failed(self, tmp_path: Path):
        fake = write_script(tmp_path / "broken-soffice", 'echo "source file could not be loaded" >&2\nexit 1\n')
        converter = LibreOfficeConverter(binary=str(fake))

        with pytest.raises(ConversionError) as exc_info:
            await converter.convert(b"docx")

        error = exc_info.value
        assert error.code == ErrorCodes.CONVERSION_FAILED
        assert "could not be loaded" in error.context["error"]

    @posix_only
    @pytest.mark.asyncio
    async def test_missing_output_is_conversion_failed(self, tmp_path: Path):
        """종료 코드 0이지만 PDF 없음."""
        fake = write_script(tmp_path / "silent-soffice", "exit 0\n")
        converter = LibreOfficeConverter(binary=str(fake))

        with pytest.raises(ConversionError) as exc_info:
            await converter.convert(b"docx")

        assert exc_info.value.code == ErrorCodes.CONVERSION_FAILED
        assert "status 0" in exc_info.value.context["error"]
