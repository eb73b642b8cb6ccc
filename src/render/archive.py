"""
ZIP 번들 생성.

규칙:
- 입력 순서 그대로 엔트리 추가
- ZIP_DEFLATED, 압축 레벨 9
- 메모리에서 완성한 뒤 응답으로 스트리밍
  (생성 실패는 응답 시작 전에 ARCHIVE_FAILED로 보고)
"""

import io
import zipfile
from collections.abc import Iterable, Iterator

from src.domain.errors import ErrorCodes, PipelineError
from src.domain.schemas import GeneratedFile

COMPRESS_LEVEL = 9
STREAM_CHUNK_SIZE = 64 * 1024


def build_archive(files: Iterable[GeneratedFile]) -> bytes:
    """
    GeneratedFile 목록 → ZIP 바이트.

    Raises:
        PipelineError: ARCHIVE_FAILED
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(
            buffer, "w", zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL
        ) as zf:
            for f in files:
                zf.writestr(f.name, f.content)
    except Exception as e:
        raise PipelineError(ErrorCodes.ARCHIVE_FAILED, error=str(e)) from e
    return buffer.getvalue()


def iter_chunks(data: bytes, chunk_size: int = STREAM_CHUNK_SIZE) -> Iterator[bytes]:
    """바이트를 chunk 단위로 나눠 반환 (StreamingResponse용)."""
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]
