"""
Main pipeline orchestration from uploads and topics to resolved learning sections.
"""
import logging
import uuid
from typing import List, Optional, Tuple

from core.config import MAX_UPLOAD_BYTES, MIN_EXTRACTED_CHARS
from core.errors import ExtractionEmptyError, FileTooLargeError, NoSectionsError
from models.resource_models import LearningResource, SectionResources
from models.section_models import ProcessedDocument, Section, SynthesizedSection
from services.curriculum.curriculum_generator import curriculum_generator, CurriculumGenerator
from services.extraction.format_extractors import detect_file_type, extract_text_from_file, FileType
from services.ingestion.resource_search import search_resources
from services.matching.section_matcher import SectionResourceMatcher
from services.matching.section_resources import resolve_section_resources
from services.processing.segmenter import segment_into_sections
from services.processing.topic_identifier import identify_overall_topic

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrates extraction, segmentation, curriculum generation and matching."""

    def __init__(
        self,
        generator: CurriculumGenerator = curriculum_generator,
        matcher: Optional[SectionResourceMatcher] = None,
        max_upload_bytes: int = MAX_UPLOAD_BYTES,
        min_extracted_chars: int = MIN_EXTRACTED_CHARS,
    ):
        self.generator = generator
        self.matcher = matcher
        self.max_upload_bytes = max_upload_bytes
        self.min_extracted_chars = min_extracted_chars

    def _extract(self, data: bytes, mime_type: Optional[str], file_name: str) -> Tuple[FileType, str]:
        """Apply the upload checks and return the detected type with its text."""
        if len(data) > self.max_upload_bytes:
            raise FileTooLargeError()

        file_type = detect_file_type(mime_type, file_name)
        text = extract_text_from_file(data, file_type, file_name)

        # The image placeholder carries no content of the upload itself
        if file_type == FileType.IMAGE:
            logger.warning(f"No OCR available, rejecting image upload {file_name}")
            raise ExtractionEmptyError()

        if len(text) < self.min_extracted_chars:
            logger.warning(f"Only {len(text)} characters extracted from {file_name}")
            raise ExtractionEmptyError()

        return file_type, text

    def process_upload(self, data: bytes, mime_type: Optional[str], file_name: str) -> ProcessedDocument:
        """
        Run an uploaded file through extraction and segmentation.

        Stages:
        1. Size check
        2. Format detection
        3. Text extraction and normalization
        4. Heading/paragraph segmentation with intent analysis
        5. Overall topic identification

        Args:
            data: Raw file bytes
            mime_type: Declared content type of the upload
            file_name: Original file name

        Returns:
            ProcessedDocument with ordered sections

        Raises:
            FileTooLargeError, UnsupportedFormatError, ExtractionEmptyError, NoSectionsError
        """
        file_type, text = self._extract(data, mime_type, file_name)

        sections = segment_into_sections(text)
        if not sections:
            raise NoSectionsError()

        document = ProcessedDocument(
            file_id=str(uuid.uuid4()),
            file_name=file_name,
            file_type=file_type.value,
            sections=sections,
            overall_topic=identify_overall_topic(sections),
            extracted_length=len(text),
        )
        logger.info(
            f"Processed {file_name}: {len(text)} chars, {len(sections)} sections, "
            f"topic '{document.overall_topic}'"
        )
        return document

    def curriculum_from_topic(self, topic: str) -> Tuple[List[SynthesizedSection], str]:
        return self.generator.generate_from_topic(topic)

    def curriculum_from_document(
        self,
        data: bytes,
        mime_type: Optional[str],
        file_name: str,
    ) -> Tuple[List[Section], str]:
        """Extract an upload and let the language model structure it."""
        _, text = self._extract(data, mime_type, file_name)

        sections, overall_topic = self.generator.generate_from_document(text, file_name)
        if not sections:
            raise NoSectionsError()
        return sections, overall_topic

    def resolve_resources(self, sections: List[Section]) -> List[SectionResources]:
        return resolve_section_resources(sections, self.matcher)

    def search(self, topic: str) -> List[LearningResource]:
        return search_resources(topic)


# Global pipeline instance
pipeline = DocumentPipeline()
