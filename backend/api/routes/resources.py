"""
Resource matching and search API routes.
"""
import logging
from fastapi import APIRouter, HTTPException

from api.models.requests import SectionResourcesRequest, TopicRequest
from api.models.responses import (
    LearningResourceModel,
    SearchResponse,
    SectionResourcesModel,
    SectionResourcesResponse,
)
from core.pipeline import pipeline

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sections/resources", response_model=SectionResourcesResponse)
def section_resources(request: SectionResourcesRequest):
    """
    Resolve matched videos, a theory explanation and a summary for each section.
    """
    if not request.sections:
        raise HTTPException(status_code=400, detail="No sections provided")

    sections = [payload.to_section() for payload in request.sections]

    try:
        resolved = pipeline.resolve_resources(sections)
    except Exception as e:
        logger.exception(f"Section resources error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch resources for sections")

    return SectionResourcesResponse(
        section_resources=[SectionResourcesModel.from_section_resources(r) for r in resolved]
    )


@router.post("/search", response_model=SearchResponse)
def search(request: TopicRequest):
    """Search and rank videos and articles for a topic."""
    topic = request.topic.strip()
    if not topic:
        raise HTTPException(status_code=400, detail="Topic is required")

    try:
        resources = pipeline.search(topic)
    except Exception as e:
        logger.exception(f"Search error: {e}")
        raise HTTPException(status_code=500, detail="Failed to search resources")

    return SearchResponse(
        resources=[LearningResourceModel.from_resource(r) for r in resources],
        topic=topic,
        total_results=len(resources),
    )
