"""
Centralized prompt file management with fallback templates.
"""
import logging
from typing import Dict

logger = logging.getLogger(__name__)

PROMPT_NAMES = ("match_explanation", "curriculum_topic", "curriculum_document")


class PromptManager:
    """Manages prompt file loading with consistent fallback behavior."""

    def __init__(self):
        from core.config import PROMPTS_DIR
        self.prompts_dir = PROMPTS_DIR
        self.loaded_prompts: Dict[str, str] = {}

        # Fallback templates
        self.fallback_templates = {
            "match_explanation": self._get_match_explanation_fallback(),
            "curriculum_topic": self._get_curriculum_topic_fallback(),
            "curriculum_document": self._get_curriculum_document_fallback(),
        }

    def get_prompt(self, prompt_name: str) -> str:
        """
        Load prompt by name with fallback.

        Args:
            prompt_name: Name of prompt file (without .txt extension)

        Returns:
            Prompt template string
        """
        if prompt_name in self.loaded_prompts:
            return self.loaded_prompts[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.txt"

        if prompt_file.exists():
            try:
                template = prompt_file.read_text(encoding="utf-8")
                if not template.strip():
                    raise ValueError(f"Prompt file is empty: {prompt_file}")

                self.loaded_prompts[prompt_name] = template
                return template

            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load prompt file {prompt_file}: {e}")

        if prompt_name in self.fallback_templates:
            logger.debug(f"Using fallback template for: {prompt_name}")
            template = self.fallback_templates[prompt_name]
            self.loaded_prompts[prompt_name] = template
            return template

        raise FileNotFoundError(
            f"Prompt file not found and no fallback available: {prompt_name}.txt. "
            f"Expected at: {prompt_file}"
        )

    def _get_match_explanation_fallback(self) -> str:
        """Fallback template for explaining a section/video match."""
        return """Section to match: {section_text}
Video Title: {video_title}
Video Transcript (excerpt, with [seconds] markers): {transcript_excerpt}

Compare the video transcript against the section requirements.
1. Why is this video a good match (or not)?
2. Identify 3 specific timestamps (in seconds) where key concepts are explained.

Output JSON:
{{
  "explanation": "string",
  "highlights": [{{"text": "concept name", "timestamp": number}}]
}}"""

    def _get_curriculum_topic_fallback(self) -> str:
        """Fallback template for generating a curriculum from a topic."""
        return """You are an expert curriculum designer. Generate a structured learning curriculum for the topic: "{topic}".

Break the topic into 5-8 logical learning sections.
For each section, provide:
1. Title
2. Learning Objective (what the student will learn)
3. Key Concepts (3-5 core ideas)
4. Keywords for search (3-5 specific terms)
5. Intent:
   - Type: concept, derivation, example, theory, or implementation
   - Depth: beginner, intermediate, or advanced
   - needsVisual: boolean
   - needsPractice: boolean

Output the result as a JSON object with the following structure:
{{
  "overallTopic": "string",
  "sections": [
    {{
      "title": "string",
      "learningObjective": "string",
      "keyConcepts": ["string"],
      "keywords": ["string"],
      "intent": {{
        "type": "concept" | "derivation" | "example" | "theory" | "implementation",
        "depth": "beginner" | "intermediate" | "advanced",
        "needsVisual": boolean,
        "needsPractice": boolean
      }}
    }}
  ]
}}"""

    def _get_curriculum_document_fallback(self) -> str:
        """Fallback template for generating a curriculum from document text."""
        return """You are an expert at analyzing educational documents. I have extracted text from a file named "{file_name}".

Analyze the following content and break it into structured learning sections.
Perform semantic segmentation and topic clustering to detect concept boundaries.

Document Content:
{document_text}

For each section, provide:
1. Title (clean and descriptive)
2. Learning Objective (what the student should understand from this part of the document)
3. Key Concepts (3-5 core ideas found in this section)
4. Keywords for search (3-5 specific terms to find related videos)
5. Intent (based on the content):
   - Type: concept, derivation, example, theory, or implementation
   - Depth: beginner, intermediate, or advanced
   - needsVisual: boolean
   - needsPractice: boolean

Output the result as a JSON object:
{{
  "overallTopic": "string",
  "sections": [
    {{
      "title": "string",
      "learningObjective": "string",
      "keyConcepts": ["string"],
      "keywords": ["string"],
      "intent": {{ "type": "...", "depth": "...", "needsVisual": boolean, "needsPractice": boolean }}
    }}
  ]
}}"""


# Global prompt manager instance
prompt_manager = PromptManager()
