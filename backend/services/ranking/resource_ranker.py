"""
Weighted 0-100 ranking of learning resources.

All functions here are pure: the score depends only on the resource, the
weights and the optional section keywords.
"""
from dataclasses import replace
from typing import List, Optional, Sequence

from core.config import DEFAULT_RELEVANCE_SCORE
from models.resource_models import LearningResource, RankingWeights
from services.processing.utils import clamp, round_half_up

DEFAULT_WEIGHTS = RankingWeights()

VIEWS_SATURATION = 1_000_000
LIKES_SATURATION = 50_000


def parse_duration_minutes(duration: Optional[str]) -> int:
    """
    Whole minutes of a ``H:MM:SS`` or ``MM:SS`` duration string.

    Seconds are ignored; missing or unparseable units count as zero.
    """
    parts = list(reversed((duration or "0:00").split(":")))

    def unit(index: int) -> int:
        if index >= len(parts):
            return 0
        try:
            return int(parts[index].strip())
        except ValueError:
            return 0

    return unit(1) + unit(2) * 60


def duration_score(duration: Optional[str]) -> int:
    minutes = parse_duration_minutes(duration)
    if 10 <= minutes <= 30:
        return 100
    if 30 < minutes <= 60:
        return 80
    if minutes < 10:
        return 60
    return 50


def relevance_score(
    resource: LearningResource,
    section_keywords: Optional[Sequence[str]] = None,
) -> float:
    """Keyword hits in the title, or the resource's own relevance when no keywords are given."""
    if section_keywords is None:
        return resource.relevance_score or DEFAULT_RELEVANCE_SCORE

    title_lower = (resource.title or "").lower()
    matches = sum(1 for keyword in section_keywords if keyword.lower() in title_lower)
    return min(50 + matches * 15, 100)


def credibility_score(views: int) -> int:
    if views > 100_000:
        return 90
    if views > 10_000:
        return 70
    return 50


def calculate_ranking_score(
    resource: LearningResource,
    weights: Optional[RankingWeights] = None,
    section_keywords: Optional[Sequence[str]] = None,
) -> int:
    """
    Score a resource against the weighted ranking factors.

    Args:
        resource: Resource to score
        weights: Factor weights (defaults to the configured weights)
        section_keywords: Keywords of the section the resource is ranked for

    Returns:
        Integer score in [0, 100]
    """
    weights = weights or DEFAULT_WEIGHTS
    views = max(resource.views or 0, 0)
    likes = max(resource.likes or 0, 0)

    score = (
        min(views / VIEWS_SATURATION, 1) * 100 * weights.views
        + min(likes / LIKES_SATURATION, 1) * 100 * weights.likes
        + duration_score(resource.duration) * weights.duration
        + relevance_score(resource, section_keywords) * weights.relevance
        + credibility_score(views) * weights.credibility
    )

    return round_half_up(clamp(score, 0, 100))


def rank_resources(
    resources: Sequence[LearningResource],
    weights: Optional[RankingWeights] = None,
    section_keywords: Optional[Sequence[str]] = None,
) -> List[LearningResource]:
    """Return copies with recomputed ranking scores, best first."""
    ranked = [
        replace(resource, ranking_score=calculate_ranking_score(resource, weights, section_keywords))
        for resource in resources
    ]
    return sorted(ranked, key=lambda r: r.ranking_score, reverse=True)
