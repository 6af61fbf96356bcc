"""
Data models for external learning resources and their ranking.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from core.config import (
    RANKING_VIEWS_WEIGHT,
    RANKING_LIKES_WEIGHT,
    RANKING_DURATION_WEIGHT,
    RANKING_RELEVANCE_WEIGHT,
    RANKING_CREDIBILITY_WEIGHT,
)


RESOURCE_SOURCES = ("youtube", "article", "blog")


@dataclass(frozen=True)
class RankingWeights:
    """Weights of the ranking factors (expected to sum to 1.0)"""
    views: float = RANKING_VIEWS_WEIGHT
    likes: float = RANKING_LIKES_WEIGHT
    duration: float = RANKING_DURATION_WEIGHT
    relevance: float = RANKING_RELEVANCE_WEIGHT
    credibility: float = RANKING_CREDIBILITY_WEIGHT

    @property
    def total(self) -> float:
        return self.views + self.likes + self.duration + self.relevance + self.credibility


@dataclass(frozen=True)
class TranscriptHighlight:
    """Timestamped transcript excerpt justifying a match"""
    text: str
    timestamp: float  # Seconds from the start of the video


@dataclass(frozen=True)
class VideoCandidate:
    """Raw video search hit before matching and ranking"""
    video_id: str
    title: str
    url: str
    thumbnail: str = ""
    channel: Optional[str] = None
    duration: Optional[str] = None  # "H:MM:SS" or "MM:SS"
    views: int = 0
    likes: int = 0
    published_at: Optional[str] = None
    description: Optional[str] = None


@dataclass
class LearningResource:
    """One external video/article/blog item"""
    id: str
    title: str
    source: str  # one of RESOURCE_SOURCES
    url: str
    thumbnail: str = ""
    channel: Optional[str] = None
    author: Optional[str] = None
    duration: Optional[str] = None
    views: int = 0
    likes: int = 0
    published_at: Optional[str] = None
    description: Optional[str] = None

    # Scores (0-100)
    ranking_score: int = 0  # Always recomputed, never taken from input
    relevance_score: int = 0

    # Populated by semantic matching only
    match_confidence: Optional[int] = None
    match_explanation: Optional[str] = None
    transcript_highlights: Optional[List[TranscriptHighlight]] = None


@dataclass(frozen=True)
class TheoryExplanation:
    """Short written explanation accompanying a section"""
    title: str
    content: str
    key_concepts: List[str] = field(default_factory=list)
    related_topics: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SectionResources:
    """A section joined with its resolved resources"""
    section_id: str
    videos: List[LearningResource]  # Ranked, <= 5
    theory: TheoryExplanation
    summary: str
