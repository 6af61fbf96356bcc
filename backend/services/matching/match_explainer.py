"""
LLM-generated explanations for why a video matches a section.
"""
import logging
from typing import List, Tuple

from core.config import (
    EXPLANATION_EXCERPT_CHARS,
    EXPLANATION_MODEL,
    MAX_TRANSCRIPT_HIGHLIGHTS,
)
from core.ollama_client import ollama, OllamaClient
from core.prompt_manager import prompt_manager
from models.resource_models import TranscriptHighlight
from models.transcript_models import VideoTranscript
from services.processing.utils import parse_json_object

logger = logging.getLogger(__name__)


def build_transcript_excerpt(transcript: VideoTranscript, max_chars: int = EXPLANATION_EXCERPT_CHARS) -> str:
    """Render the opening of a transcript with [seconds] markers per segment."""
    parts = []
    length = 0
    for segment in transcript.segments:
        line = f"[{int(segment.start)}] {segment.text.strip()}"
        if length + len(line) > max_chars:
            break
        parts.append(line)
        length += len(line) + 1

    if not parts:
        return transcript.full_text[:max_chars]
    return "\n".join(parts)


class MatchExplainer:
    """Asks the generation model to justify a section/video match."""

    def __init__(self, client: OllamaClient = ollama, model: str = EXPLANATION_MODEL):
        self.client = client
        self.model = model

    def explain(
        self,
        section_text: str,
        video_title: str,
        transcript: VideoTranscript,
    ) -> Tuple[str, List[TranscriptHighlight]]:
        """
        Explain a match and pick timestamped highlights.

        Returns:
            (explanation, highlights) with at most MAX_TRANSCRIPT_HIGHLIGHTS highlights

        Raises:
            OllamaError: if the model cannot be reached
            ValueError: if the response holds no JSON object
        """
        template = prompt_manager.get_prompt("match_explanation")
        prompt = template.format(
            section_text=section_text,
            video_title=video_title,
            transcript_excerpt=build_transcript_excerpt(transcript),
        )

        response = self.client.generate(prompt, model=self.model, json_mode=True)
        data = parse_json_object(response)

        highlights = []
        for item in data.get("highlights") or []:
            if not isinstance(item, dict) or not item.get("text"):
                continue
            try:
                timestamp = float(item.get("timestamp", 0))
            except (TypeError, ValueError):
                continue
            highlights.append(TranscriptHighlight(text=str(item["text"]), timestamp=max(timestamp, 0.0)))

        explanation = str(data.get("explanation") or "").strip()
        logger.debug(f"Explained match for '{video_title}' with {len(highlights)} highlights")
        return explanation, highlights[:MAX_TRANSCRIPT_HIGHLIGHTS]


# Global match explainer instance
match_explainer = MatchExplainer()
