"""
Semantic matching of candidate videos against a learning section.

For each section a YouTube search yields a handful of candidates. Each
candidate's transcript is embedded and compared with an embedding of the
section description; the cosine similarity becomes the match confidence.
Candidates whose transcript (or embedding) cannot be obtained keep a flat
fallback confidence and a static explanation.
"""
import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import List, Optional

from core.config import (
    CANDIDATE_TIMEOUT_SEC,
    MATCH_CANDIDATE_COUNT,
    MATCH_FALLBACK_CONFIDENCE,
    MAX_CONCURRENT_CANDIDATES,
    TRANSCRIPT_CHAR_LIMIT,
)
from core.errors import TranscriptUnavailableError
from core.ollama_client import ollama, OllamaError
from models.resource_models import LearningResource, TranscriptHighlight, VideoCandidate
from models.section_models import Section
from services.ingestion.youtube_fetcher import youtube_fetcher
from services.matching.match_explainer import match_explainer
from services.processing.utils import calculate_cosine_similarity, clamp, round_half_up

logger = logging.getLogger(__name__)

TRANSCRIPT_UNAVAILABLE_EXPLANATION = "Transcript unavailable. Match based on metadata."
EXPLANATION_UNAVAILABLE = "Matched on transcript similarity. No explanation could be generated."


def build_search_query(section: Section) -> str:
    return f"{section.title} {' '.join(section.keywords)}".strip()


def describe_section(section: Section) -> str:
    """Compose the text embedded on the section side of the comparison."""
    return f"{section.title}: {section.objective}. Key concepts: {', '.join(section.key_concepts)}"


def popularity_boost(views: int) -> float:
    return (views or 0) / 1_000_000 * 10 + 10


class SectionResourceMatcher:
    """Finds, scores and explains the best videos for a section."""

    def __init__(
        self,
        searcher=youtube_fetcher,
        transcripts=youtube_fetcher,
        embedder=ollama,
        explainer=match_explainer,
        candidate_count: int = MATCH_CANDIDATE_COUNT,
        timeout: float = CANDIDATE_TIMEOUT_SEC,
        max_workers: int = MAX_CONCURRENT_CANDIDATES,
    ):
        self.searcher = searcher
        self.transcripts = transcripts
        self.embedder = embedder
        self.explainer = explainer
        self.candidate_count = candidate_count
        self.timeout = timeout
        self.max_workers = max_workers

    def match(self, section: Section) -> List[LearningResource]:
        """
        Match videos to a section.

        Args:
            section: Extracted or synthesized section

        Returns:
            At most candidate_count resources, sorted by descending ranking score.
            Empty when the search fails or finds nothing.
        """
        query = build_search_query(section)
        try:
            candidates = self.searcher.search_videos(query, limit=self.candidate_count)
        except Exception as e:
            logger.warning(f"Video search failed for '{query}': {e}")
            return []

        candidates = list(candidates or [])[:self.candidate_count]
        if not candidates:
            return []

        section_text = describe_section(section)
        section_embedding = self._embed_section(section_text)

        resources = []
        executor = ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(candidates))))
        try:
            futures = [
                (candidate, executor.submit(self._match_candidate, candidate, section_text, section_embedding))
                for candidate in candidates
            ]
            # One deadline for the whole section, counted from submission
            deadline = time.monotonic() + self.timeout
            for candidate, future in futures:
                try:
                    remaining = max(0.0, deadline - time.monotonic())
                    resources.append(future.result(timeout=remaining))
                except FutureTimeoutError:
                    logger.warning(f"Matching timed out for video {candidate.video_id}")
                    resources.append(self._fallback_resource(candidate))
                except Exception as e:
                    logger.warning(f"Matching failed for video {candidate.video_id}: {e}")
                    resources.append(self._fallback_resource(candidate))
        finally:
            executor.shutdown(wait=False)

        resources.sort(key=lambda r: r.ranking_score, reverse=True)
        logger.info(f"Matched {len(resources)} videos for section '{section.title}'")
        return resources

    def _embed_section(self, section_text: str) -> Optional[List[float]]:
        try:
            return self.embedder.generate_embedding(section_text)
        except OllamaError as e:
            logger.warning(f"Section embedding failed, using metadata-only matching: {e}")
            return None

    def _match_candidate(
        self,
        candidate: VideoCandidate,
        section_text: str,
        section_embedding: Optional[List[float]],
    ) -> LearningResource:
        if section_embedding is None:
            return self._fallback_resource(candidate)

        try:
            transcript = self.transcripts.get_transcript(candidate.video_id)
            transcript_text = transcript.full_text[:TRANSCRIPT_CHAR_LIMIT]
            if not transcript_text:
                raise TranscriptUnavailableError(f"Empty transcript for {candidate.video_id}")
            transcript_embedding = self.embedder.generate_embedding(transcript_text)
        except (TranscriptUnavailableError, OllamaError) as e:
            logger.debug(f"Falling back to metadata for {candidate.video_id}: {e}")
            return self._fallback_resource(candidate)

        similarity = calculate_cosine_similarity(section_embedding, transcript_embedding)
        confidence = int(clamp(round_half_up(similarity * 100)))

        try:
            explanation, highlights = self.explainer.explain(section_text, candidate.title, transcript)
        except (OllamaError, ValueError, KeyError) as e:
            logger.debug(f"Explanation failed for {candidate.video_id}: {e}")
            explanation, highlights = EXPLANATION_UNAVAILABLE, []

        return self._build_resource(candidate, confidence, explanation or EXPLANATION_UNAVAILABLE, highlights)

    def _fallback_resource(self, candidate: VideoCandidate) -> LearningResource:
        return self._build_resource(
            candidate, MATCH_FALLBACK_CONFIDENCE, TRANSCRIPT_UNAVAILABLE_EXPLANATION, []
        )

    @staticmethod
    def _build_resource(
        candidate: VideoCandidate,
        confidence: int,
        explanation: str,
        highlights: List[TranscriptHighlight],
    ) -> LearningResource:
        ranking_score = int(clamp(round_half_up(confidence + popularity_boost(candidate.views))))

        return LearningResource(
            id=str(uuid.uuid4()),
            title=candidate.title,
            source="youtube",
            url=candidate.url,
            thumbnail=candidate.thumbnail,
            channel=candidate.channel,
            duration=candidate.duration,
            views=candidate.views,
            likes=candidate.likes,
            published_at=candidate.published_at,
            description=candidate.description,
            ranking_score=ranking_score,
            relevance_score=confidence,
            match_confidence=confidence,
            match_explanation=explanation,
            transcript_highlights=list(highlights),
        )
