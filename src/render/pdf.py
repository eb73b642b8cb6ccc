"""
PDF 변환기: DOCX → PDF.

Converter 인터페이스 하나로 추상화:
- convert(docx_bytes) -> pdf_bytes, 실패 시 ConversionError
- 파이프라인은 Converter만 알고, 실제 도구(LibreOffice)와 분리됨
  (테스트에서는 가짜 Converter 주입)

LibreOfficeConverter:
- soffice --headless --convert-to pdf --outdir <tmp> <file>
- asyncio subprocess → 변환 중에도 이벤트 루프는 다른 요청 처리
- timeout 없음 (soffice 무응답 시 해당 요청은 대기)
"""

import asyncio
import logging
import re
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from src.domain.errors import ConversionError, ErrorCodes

logger = logging.getLogger(__name__)

DEFAULT_SOFFICE_BINARY = "soffice"

# "변환 도구 미설치"로 분류할 메시지 패턴 (best-effort)
MISSING_CONVERTER_PATTERN = re.compile(
    r"soffice|libreoffice|command not found|not found|ENOENT|spawn|No such file",
    re.IGNORECASE,
)


def classify_conversion_error(message: str) -> str:
    """
    변환 에러 메시지 → 에러 코드.

    메시지 패턴 기반 추정이므로 신뢰 가능한 신호는 아님.
    LibreOfficeConverter는 실행 전 binary 존재 여부를 직접 확인함.

    Returns:
        CONVERTER_NOT_INSTALLED 또는 CONVERSION_FAILED
    """
    if MISSING_CONVERTER_PATTERN.search(message):
        return ErrorCodes.CONVERTER_NOT_INSTALLED
    return ErrorCodes.CONVERSION_FAILED


class Converter(ABC):
    """
    DOCX → PDF 변환 추상 인터페이스.
    """

    @abstractmethod
    async def convert(self, docx_bytes: bytes) -> bytes:
        """
        DOCX 바이트를 PDF 바이트로 변환.

        Args:
            docx_bytes: 렌더링된 DOCX

        Returns:
            PDF 바이트

        Raises:
            ConversionError: CONVERTER_NOT_INSTALLED, CONVERSION_FAILED
        """
        ...


class LibreOfficeConverter(Converter):
    """
    LibreOffice(soffice) 기반 변환기.

    Usage:
        converter = LibreOfficeConverter()
        pdf_bytes = await converter.convert(docx_bytes)
    """

    def __init__(self, binary: str = DEFAULT_SOFFICE_BINARY):
        """
        Args:
            binary: soffice 실행 파일 이름 또는 경로
        """
        self.binary = binary

    def find_binary(self) -> str:
        """
        실행 파일 경로 확인.

        Raises:
            ConversionError: CONVERTER_NOT_INSTALLED
        """
        resolved = shutil.which(self.binary)
        if resolved is None:
            raise ConversionError(
                ErrorCodes.CONVERTER_NOT_INSTALLED,
                error=f"{self.binary}: command not found",
            )
        return resolved

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    async def convert(self, docx_bytes: bytes) -> bytes:
        binary = self.find_binary()

        with tempfile.TemporaryDirectory(prefix="mailmerge-pdf-") as tmp:
            tmp_dir = Path(tmp)
            source = tmp_dir / "document.docx"
            source.write_bytes(docx_bytes)

            cmd = [
                binary,
                "--headless",
                "--norestore",
                f"-env:UserInstallation={(tmp_dir / 'profile').as_uri()}",
                "--convert-to",
                "pdf",
                "--outdir",
                str(tmp_dir),
                str(source),
            ]

            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                # spawn 실패 (권한 없음, 바이너리 삭제 등)
                raise ConversionError(
                    classify_conversion_error(f"spawn {binary}: {e}"),
                    error=f"spawn {binary}: {e}",
                ) from e

            stdout, stderr = await proc.communicate()

            target = tmp_dir / "document.pdf"
            if proc.returncode != 0 or not target.exists():
                output = (stderr or stdout or b"").decode("utf-8", errors="replace").strip()
                message = output or f"soffice exited with status {proc.returncode}"
                logger.error(f"PDF conversion failed: {message}")
                raise ConversionError(ErrorCodes.CONVERSION_FAILED, error=message)

            return target.read_bytes()
