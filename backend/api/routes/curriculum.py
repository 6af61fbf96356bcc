"""
Topic curriculum API routes.
"""
import logging
from fastapi import APIRouter, HTTPException

from api.errors import to_http_exception
from api.models.requests import TopicRequest
from api.models.responses import CurriculumResponse, SectionModel
from core.errors import PipelineError
from core.pipeline import pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CurriculumResponse)
def generate_curriculum(request: TopicRequest):
    """Generate a structured learning path for a topic."""
    topic = request.topic.strip()
    if not topic:
        raise HTTPException(status_code=400, detail="Topic is required")

    try:
        sections, overall_topic = pipeline.curriculum_from_topic(topic)
    except PipelineError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Curriculum generation error: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate curriculum")

    return CurriculumResponse(
        sections=[SectionModel.from_section(s) for s in sections],
        overall_topic=overall_topic,
    )
