"""
Exceptions raised by the document-to-curriculum pipeline.

Only the upload-level failures reach the user; transcript problems are
absorbed by the matcher and show up as lower-confidence matches.
"""


class PipelineError(Exception):
    """Base class for pipeline failures surfaced to the caller."""

    user_message = "Failed to process the request. Please try again."

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)


class UnsupportedFormatError(PipelineError):
    """Raised when an upload's format is not recognised by the extractors."""

    user_message = "Unsupported file format. Upload a PDF, DOCX, PPTX, TXT or image file."


class FileTooLargeError(PipelineError):
    """Raised when an upload exceeds the configured size ceiling."""

    user_message = "File size exceeds the 20MB limit."


class ExtractionEmptyError(PipelineError):
    """Raised by the caller when extraction produced negligible text."""

    user_message = "Could not extract meaningful text from the file."


class NoSectionsError(PipelineError):
    """Raised by the caller when segmentation found no learning sections."""

    user_message = "Could not identify learning sections in the file."


class CurriculumGenerationError(PipelineError):
    """Raised when the language model could not produce a curriculum."""

    user_message = "Failed to generate a curriculum for this topic."


class TranscriptUnavailableError(Exception):
    """Raised by transcript providers when no transcript can be fetched."""
    pass
