"""Domain layer: errors, schemas, constants."""

from .errors import ConversionError, ErrorCodes, PipelineError
from .schemas import (
    GeneratedFile,
    OutputFormat,
    Row,
    RunLog,
    UploadedFile,
)

__all__ = [
    "PipelineError",
    "ConversionError",
    "ErrorCodes",
    "GeneratedFile",
    "OutputFormat",
    "Row",
    "RunLog",
    "UploadedFile",
]
