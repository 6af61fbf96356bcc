"""
Curriculum generator that asks the language model for a structured learning path.
"""
import logging
import uuid
from typing import Any, Dict, List, Tuple

from core.config import (
    CURRICULUM_DOCUMENT_CHAR_LIMIT,
    CURRICULUM_MAX_TOKENS,
    CURRICULUM_TEMPERATURE,
)
from core.errors import CurriculumGenerationError
from core.ollama_client import ollama, OllamaClient, OllamaError
from core.prompt_manager import prompt_manager
from models.section_models import (
    DEPTH_LEVELS,
    INTENT_TYPES,
    Section,
    SectionIntent,
    SynthesizedSection,
)
from services.processing.segmenter import segment_into_sections
from services.processing.topic_identifier import identify_overall_topic
from services.processing.utils import parse_json_object

logger = logging.getLogger(__name__)


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _parse_intent(raw: Any) -> SectionIntent:
    """Build an intent, replacing unknown values with the defaults."""
    raw = raw if isinstance(raw, dict) else {}
    default = SectionIntent()

    intent_type = str(raw.get("type", "")).lower()
    depth = str(raw.get("depth", "")).lower()

    return SectionIntent(
        type=intent_type if intent_type in INTENT_TYPES else default.type,
        depth=depth if depth in DEPTH_LEVELS else default.depth,
        needs_visual=bool(raw.get("needsVisual", False)),
        needs_practice=bool(raw.get("needsPractice", False)),
    )


def parse_curriculum(data: Dict[str, Any]) -> List[SynthesizedSection]:
    """Convert the model's JSON into ordered sections, dropping untitled entries."""
    sections = []
    for raw in data.get("sections") or []:
        if not isinstance(raw, dict):
            continue
        title = str(raw.get("title") or "").strip()
        if not title:
            continue

        sections.append(SynthesizedSection(
            id=str(uuid.uuid4()),
            title=title,
            learning_objective=str(raw.get("learningObjective") or "").strip(),
            key_concepts=_string_list(raw.get("keyConcepts"))[:5],
            keywords=_string_list(raw.get("keywords"))[:10],
            intent=_parse_intent(raw.get("intent")),
            order=len(sections),
        ))
    return sections


class CurriculumGenerator:
    """Generates learning sections from a topic or from document text."""

    def __init__(self, client: OllamaClient = ollama):
        self.client = client

    def _request(self, prompt: str) -> Tuple[List[SynthesizedSection], str]:
        response = self.client.generate(
            prompt,
            temperature=CURRICULUM_TEMPERATURE,
            max_tokens=CURRICULUM_MAX_TOKENS,
            json_mode=True,
        )
        data = parse_json_object(response)
        sections = parse_curriculum(data)
        if not sections:
            raise ValueError("Model response contained no usable sections")
        return sections, str(data.get("overallTopic") or "").strip()

    def generate_from_topic(self, topic: str) -> Tuple[List[SynthesizedSection], str]:
        """
        Generate a curriculum for a free-text topic.

        Returns:
            (sections, overall_topic)

        Raises:
            CurriculumGenerationError: if the model fails or returns nothing usable
        """
        prompt = prompt_manager.get_prompt("curriculum_topic").format(topic=topic)

        try:
            sections, overall_topic = self._request(prompt)
        except (OllamaError, ValueError) as e:
            logger.error(f"Curriculum generation failed for topic '{topic}': {e}")
            raise CurriculumGenerationError()

        logger.info(f"Generated {len(sections)} sections for topic: {topic}")
        return sections, overall_topic or topic

    def generate_from_document(self, text: str, file_name: str) -> Tuple[List[Section], str]:
        """
        Generate a curriculum from extracted document text.

        Falls back to heading/paragraph segmentation when the model fails.
        """
        prompt = prompt_manager.get_prompt("curriculum_document").format(
            file_name=file_name,
            document_text=text[:CURRICULUM_DOCUMENT_CHAR_LIMIT],
        )

        try:
            sections, overall_topic = self._request(prompt)
        except (OllamaError, ValueError) as e:
            logger.warning(f"Curriculum generation failed for {file_name}, segmenting instead: {e}")
            extracted = segment_into_sections(text)
            return extracted, identify_overall_topic(extracted) if extracted else file_name

        return sections, overall_topic or file_name


# Global curriculum generator instance
curriculum_generator = CurriculumGenerator()


def generate_curriculum_from_topic(topic: str) -> Tuple[List[SynthesizedSection], str]:
    return curriculum_generator.generate_from_topic(topic)


def generate_curriculum_from_document(text: str, file_name: str) -> Tuple[List[Section], str]:
    return curriculum_generator.generate_from_document(text, file_name)
