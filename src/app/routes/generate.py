"""
Generate Routes: 문서 일괄 생성 요청.

- POST /api/generate?outputFormat=docx|pdf|both
  multipart: template (.docx), data (.csv/.xlsx)
  → 200 application/zip (reports.zip)

규칙:
- 검증 → 행 추출 → 파일명 → 행별 렌더링(+변환) → ZIP
- 어느 단계든 실패하면 즉시 중단 (부분 ZIP 없음)
- Run Log: 항상 출력 (성공/실패 모두, finally 블록)
"""

from fastapi import APIRouter, File, Query, Request, UploadFile
from fastapi.responses import StreamingResponse

from src.app.services.extract import ExtractionService
from src.app.services.pipeline import MergePipeline
from src.app.services.validate import ValidationService
from src.core.logging import complete_run_log, create_run_log, emit_run_log
from src.domain.constants import ARCHIVE_FILENAME
from src.domain.errors import ErrorCodes, PipelineError
from src.domain.schemas import UploadedFile
from src.render.archive import build_archive, iter_chunks

api_router = APIRouter()  # API endpoints


async def read_upload(upload: UploadFile | None) -> UploadedFile | None:
    """UploadFile → UploadedFile (메모리)."""
    if upload is None:
        return None
    content = await upload.read()
    return UploadedFile(filename=upload.filename or "", content=content)


# =============================================================================
# API Routes
# =============================================================================

@api_router.post("")
async def generate_reports(
    request: Request,
    template: UploadFile | None = File(None),
    data: UploadFile | None = File(None),
    output_format: str | None = Query(None, alias="outputFormat"),
) -> StreamingResponse:
    """
    템플릿 + 데이터 파일 → 행마다 문서 생성 → ZIP.

    Args:
        template: DOCX 템플릿
        data: CSV/XLSX 데이터 파일
        output_format: docx (기본), pdf, both

    Returns:
        reports.zip 스트리밍 응답

    Raises:
        PipelineError: 검증/파싱/렌더링(400), 변환/ZIP(500)
    """
    settings = request.app.state.settings
    converter = request.app.state.converter

    run_log = create_run_log(
        output_format=output_format,
        template_name=template.filename if template else None,
        data_name=data.filename if data else None,
    )

    success = False
    error_code: str | None = None
    error_context: dict | None = None

    try:
        # === 1. 입력 검증 (파싱 전) ===
        template_file = await read_upload(template)
        data_file = await read_upload(data)

        validator = ValidationService(max_file_size_mb=settings.max_file_size_mb)
        validated = validator.validate(template_file, data_file, output_format)
        run_log.output_format = validated.output_format.value

        # === 2. 행 추출 ===
        rows = ExtractionService().extract(validated.data.content, validated.data.filename)
        run_log.row_count = len(rows)

        # === 3. 렌더링 (+ 변환) ===
        pipeline = MergePipeline(converter)
        files = await pipeline.run(validated.template.content, rows, validated.output_format)
        run_log.file_count = len(files)

        # === 4. ZIP ===
        archive = build_archive(files)
        run_log.archive_size = len(archive)

        success = True
        return StreamingResponse(
            iter_chunks(archive),
            media_type="application/zip",
            headers={
                "Content-Disposition": f'attachment; filename="{ARCHIVE_FILENAME}"',
            },
        )

    except PipelineError as e:
        error_code = e.code
        error_context = e.context
        raise

    except Exception as e:
        # 예상치 못한 에러
        error_code = ErrorCodes.INTERNAL_ERROR
        error_context = {"error": str(e)}
        raise PipelineError(ErrorCodes.INTERNAL_ERROR, error=str(e) or type(e).__name__) from e

    finally:
        complete_run_log(
            run_log=run_log,
            success=success,
            error_code=error_code,
            error_context=error_context,
        )
        emit_run_log(run_log)
