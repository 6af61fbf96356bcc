"""
Mapping of pipeline failures to HTTP errors.
"""
from fastapi import HTTPException

from core.errors import (
    CurriculumGenerationError,
    ExtractionEmptyError,
    FileTooLargeError,
    NoSectionsError,
    PipelineError,
    UnsupportedFormatError,
)

ERROR_STATUS_CODES = {
    UnsupportedFormatError: 415,
    FileTooLargeError: 413,
    ExtractionEmptyError: 422,
    NoSectionsError: 422,
    CurriculumGenerationError: 502,
}


def to_http_exception(error: PipelineError) -> HTTPException:
    """Translate a pipeline error into an HTTPException carrying its user message."""
    status_code = ERROR_STATUS_CODES.get(type(error), 400)
    return HTTPException(status_code=status_code, detail=error.user_message)
