"""
Generate API 클라이언트 (httpx).

- multipart(template, data) + outputFormat 쿼리로 요청
- 2xx 아니면 JSON body의 error/detail로 GenerateRequestError
- 성공 시 ZIP 바이트 반환 (저장은 호출자 몫)
"""

from pathlib import Path
from typing import Any

import httpx

from src.domain.constants import MIME_TYPES

GENERATE_PATH = "/api/generate"


class GenerateRequestError(Exception):
    """generate 요청 실패."""

    def __init__(self, message: str, status_code: int, body: dict[str, Any] | None = None) -> None:
        self.message = message
        self.status_code = status_code
        self.body = body or {}
        super().__init__(message)

    @property
    def detail(self) -> str | None:
        return self.body.get("detail")

    @property
    def row_index(self) -> int | None:
        return self.body.get("rowIndex")


def error_message_from_response(response: httpx.Response) -> tuple[str, dict[str, Any]]:
    """
    실패 응답 → (메시지, body).

    JSON이 아니거나 error/detail이 없으면 "Request failed: <status>".
    """
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("error") or body.get("detail") or f"Request failed: {response.status_code}"
    return str(message), body


class GenerateClient:
    """
    generate API 클라이언트.

    Usage:
        with GenerateClient("http://localhost:3000") as client:
            zip_bytes = client.generate(Path("letter.docx"), Path("people.xlsx"), "both")
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            base_url: 서버 주소
            timeout: 요청 timeout (초). PDF 변환은 오래 걸릴 수 있어 기본값 없음
            transport: 테스트용 transport (httpx.MockTransport 등)
        """
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "GenerateClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def generate(
        self,
        template: Path,
        data: Path,
        output_format: str | None = None,
    ) -> bytes:
        """
        템플릿 + 데이터 파일로 문서 생성 요청.

        Args:
            template: DOCX 템플릿 경로
            data: CSV/XLSX 데이터 경로
            output_format: docx, pdf, both (None이면 서버 기본값)

        Returns:
            reports.zip 바이트

        Raises:
            GenerateRequestError: 2xx가 아닌 응답
        """
        params = {"outputFormat": output_format} if output_format else None
        files = {
            "template": (template.name, template.read_bytes(), MIME_TYPES[".docx"]),
            "data": (
                data.name,
                data.read_bytes(),
                MIME_TYPES.get(data.suffix.lower(), "application/octet-stream"),
            ),
        }

        response = self._client.post(GENERATE_PATH, params=params, files=files)
        if not response.is_success:
            message, body = error_message_from_response(response)
            raise GenerateRequestError(message, response.status_code, body)
        return response.content
