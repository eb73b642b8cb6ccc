"""
Merge Pipeline: 행 목록 → 생성 파일 목록.

흐름 (행 단위, 순차):
1. base name 결정 (naming)
2. DOCX 렌더링 (실패 시 row_index 포함 RENDER_FAILED)
3. 필요 시 PDF 변환 (실패 시 CONVERTER_NOT_INSTALLED / CONVERSION_FAILED)

한 행이라도 실패하면 즉시 중단 → 부분 결과 반환 없음.
i+1번째 행은 i번째 행의 산출물(변환 포함)이 완성된 뒤에만 시작.
"""

import asyncio
import logging
from collections.abc import Sequence

from src.app.services.naming import derive_base_names
from src.domain.errors import ConversionError, PipelineError
from src.domain.schemas import GeneratedFile, OutputFormat, Row
from src.render.pdf import Converter, classify_conversion_error
from src.render.word import DocxRenderer

logger = logging.getLogger(__name__)


class MergePipeline:
    """
    문서 생성 파이프라인.

    Usage:
        pipeline = MergePipeline(converter)
        files = await pipeline.run(template_bytes, rows, OutputFormat.BOTH)
    """

    def __init__(self, converter: Converter):
        """
        Args:
            converter: PDF 변환기 (pdf/both 출력 시 사용)
        """
        self.converter = converter

    async def run(
        self,
        template_bytes: bytes,
        rows: Sequence[Row],
        output_format: OutputFormat,
    ) -> list[GeneratedFile]:
        """
        모든 행 렌더링 (+ 변환).

        Args:
            template_bytes: DOCX 템플릿
            rows: 정규화된 Row 목록
            output_format: 출력 형식

        Returns:
            GeneratedFile 목록 (행 순서, 행마다 docx → pdf 순)

        Raises:
            PipelineError: 첫 번째 실패
        """
        renderer = DocxRenderer(template_bytes)
        base_names = derive_base_names(rows)
        files: list[GeneratedFile] = []

        for i, row in enumerate(rows):
            row_index = i + 1
            base = base_names[i]

            docx_bytes = await self._render_row(renderer, row, row_index)

            if output_format.includes_docx:
                files.append(GeneratedFile(name=f"{base}.docx", content=docx_bytes))

            if output_format.includes_pdf:
                pdf_bytes = await self._convert_row(docx_bytes, row_index)
                files.append(GeneratedFile(name=f"{base}.pdf", content=pdf_bytes))

        logger.info(
            f"Generated {len(files)} file(s) from {len(rows)} row(s) "
            f"(format={output_format.value})"
        )
        return files

    async def _render_row(self, renderer: DocxRenderer, row: Row, row_index: int) -> bytes:
        """렌더링 (CPU 작업 → worker thread)."""
        try:
            return await asyncio.to_thread(renderer.render, row)
        except PipelineError as e:
            raise PipelineError(e.code, **e.context, row_index=row_index) from e

    async def _convert_row(self, docx_bytes: bytes, row_index: int) -> bytes:
        """
        PDF 변환. ConversionError가 아닌 예외는 메시지로 분류.

        두 경로 모두 context에 row (1-based) 기록.
        rowIndex는 렌더링 실패 응답에만 노출하므로 row_index 키는 쓰지 않음.
        """
        try:
            return await self.converter.convert(docx_bytes)
        except ConversionError as e:
            raise ConversionError(e.code, **{**e.context, "row": row_index}) from e
        except Exception as e:
            message = str(e) or type(e).__name__
            raise ConversionError(
                classify_conversion_error(message),
                error=message,
                row=row_index,
            ) from e
