"""
Validation Service: 업로드 입력 검증.

검증 순서 (파싱 전에 모두 수행):
1. template: 존재 + .docx
2. data: 존재 + .csv/.xlsx
3. 파일 크기 제한
4. outputFormat: docx | pdf | both (없으면 docx)

모든 실패는 클라이언트 오류 (400), 재시도 없음.
"""

from dataclasses import dataclass

from src.domain.constants import (
    DATA_EXTENSIONS,
    MAX_UPLOAD_SIZE_MB,
    TEMPLATE_EXTENSION,
    get_extension,
)
from src.domain.errors import ErrorCodes, PipelineError
from src.domain.schemas import OutputFormat, UploadedFile


@dataclass
class ValidatedRequest:
    """검증을 통과한 generate 요청."""
    template: UploadedFile
    data: UploadedFile
    output_format: OutputFormat


def validate_template(template: UploadedFile | None) -> UploadedFile:
    """템플릿 파일 존재/확장자 검증."""
    if template is None:
        raise PipelineError(ErrorCodes.TEMPLATE_MISSING)
    if get_extension(template.filename) != TEMPLATE_EXTENSION:
        raise PipelineError(ErrorCodes.TEMPLATE_INVALID, filename=template.filename)
    return template


def validate_data_file(data: UploadedFile | None) -> UploadedFile:
    """데이터 파일 존재/확장자 검증."""
    if data is None:
        raise PipelineError(ErrorCodes.DATA_MISSING)
    if get_extension(data.filename) not in DATA_EXTENSIONS:
        raise PipelineError(ErrorCodes.DATA_INVALID, filename=data.filename)
    return data


def validate_output_format(value: str | None) -> OutputFormat:
    """
    outputFormat 파싱.

    Args:
        value: 쿼리 파라미터 원문 (None/빈 문자열이면 docx)

    Returns:
        OutputFormat

    Raises:
        PipelineError: INVALID_OUTPUT_FORMAT
    """
    normalized = (value or OutputFormat.DOCX.value).strip().lower()
    try:
        return OutputFormat(normalized)
    except ValueError:
        raise PipelineError(
            ErrorCodes.INVALID_OUTPUT_FORMAT,
            value=value,
            allowed=OutputFormat.values(),
        ) from None


class ValidationService:
    """
    generate 요청 입력 검증기.

    Usage:
        validator = ValidationService(max_file_size_mb=20)
        request = validator.validate(template, data, "pdf")
    """

    def __init__(self, max_file_size_mb: int = MAX_UPLOAD_SIZE_MB):
        self.max_file_size_mb = max_file_size_mb

    @property
    def max_file_size(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def validate(
        self,
        template: UploadedFile | None,
        data: UploadedFile | None,
        output_format: str | None,
    ) -> ValidatedRequest:
        """
        입력 전체 검증.

        Returns:
            ValidatedRequest

        Raises:
            PipelineError: 첫 번째 위반 항목
        """
        template_file = validate_template(template)
        data_file = validate_data_file(data)

        for upload in (template_file, data_file):
            if upload.size > self.max_file_size:
                raise PipelineError(
                    ErrorCodes.FILE_TOO_LARGE,
                    message=(
                        f"Uploaded file is too large. "
                        f"Maximum size is {self.max_file_size_mb} MB."
                    ),
                    filename=upload.filename,
                    size=upload.size,
                )

        return ValidatedRequest(
            template=template_file,
            data=data_file,
            output_format=validate_output_format(output_format),
        )
