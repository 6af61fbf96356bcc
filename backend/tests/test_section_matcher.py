"""
Unit tests for semantic section/video matching (with mocking).
"""
import threading
import time
from datetime import datetime
from unittest.mock import Mock

from core.errors import TranscriptUnavailableError
from core.ollama_client import OllamaError
from models.resource_models import TranscriptHighlight, VideoCandidate
from models.section_models import ExtractedSection, SynthesizedSection
from models.transcript_models import TranscriptSegment, VideoTranscript
from services.matching.section_matcher import (
    TRANSCRIPT_UNAVAILABLE_EXPLANATION,
    SectionResourceMatcher,
    build_search_query,
    describe_section,
)


def make_section():
    return ExtractedSection(
        id="s1",
        title="Graph Traversal",
        content="Breadth first search visits neighbours first. Depth first search goes deep.",
        key_concepts=["Breadth First Search", "Depth First Search"],
        keywords=["search", "graph"],
    )


def make_candidates(count=6):
    return [
        VideoCandidate(
            video_id=f"video{i:06d}",
            title=f"Graph video {i}",
            url=f"https://www.youtube.com/watch?v=video{i:06d}",
            views=i * 300_000,
        )
        for i in range(count)
    ]


def make_transcript(video_id):
    return VideoTranscript(
        video_id=video_id,
        segments=[TranscriptSegment(text="graphs and search", start=12.0, duration=3.0)],
        fetched_at=datetime.now(),
    )


def make_matcher(searcher=None, transcripts=None, embedder=None, explainer=None, **kwargs):
    if searcher is None:
        searcher = Mock()
        searcher.search_videos.return_value = make_candidates()
    if transcripts is None:
        transcripts = Mock()
        transcripts.get_transcript.side_effect = make_transcript
    if embedder is None:
        embedder = Mock()
        embedder.generate_embedding.return_value = [1.0, 0.0]
    if explainer is None:
        explainer = Mock()
        explainer.explain.return_value = (
            "Covers traversal",
            [TranscriptHighlight(text="BFS", timestamp=12.0)],
        )
    return SectionResourceMatcher(
        searcher=searcher,
        transcripts=transcripts,
        embedder=embedder,
        explainer=explainer,
        **kwargs,
    )


class TestQueryAndDescription:
    """Test the strings sent to search and embedding."""

    def test_search_query(self):
        """Test that the query joins title and keywords."""
        assert build_search_query(make_section()) == "Graph Traversal search graph"

    def test_description_uses_objective(self):
        """Test the composed section description."""
        section = SynthesizedSection(
            id="s2",
            title="Trees",
            learning_objective="Understand rooted trees",
            key_concepts=["root", "leaf"],
        )
        assert describe_section(section) == "Trees: Understand rooted trees. Key concepts: root, leaf"


class TestMatchWithTranscripts:
    """Test the transcript similarity path."""

    def test_confidence_from_similarity(self):
        """Test that identical embeddings give full confidence and explanations are attached."""
        matcher = make_matcher()
        results = matcher.match(make_section())

        assert len(results) == 5
        for resource in results:
            assert resource.match_confidence == 100
            assert resource.relevance_score == 100
            assert resource.ranking_score == 100
            assert resource.match_explanation == "Covers traversal"
            assert resource.transcript_highlights[0].timestamp == 12.0
            assert resource.source == "youtube"

    def test_search_limited_to_candidate_count(self):
        """Test that only the top five candidates are considered."""
        matcher = make_matcher()
        matcher.match(make_section())

        matcher.searcher.search_videos.assert_called_once_with("Graph Traversal search graph", limit=5)
        assert matcher.transcripts.get_transcript.call_count == 5

    def test_orthogonal_embeddings(self):
        """Test that unrelated transcripts get zero confidence plus the popularity boost."""
        embedder = Mock()
        embedder.generate_embedding.side_effect = lambda text: (
            [1.0, 0.0] if text.startswith("Graph Traversal:") else [0.0, 1.0]
        )
        searcher = Mock()
        searcher.search_videos.return_value = [
            VideoCandidate(video_id="abcdefghijk", title="Cooking", url="u", views=500_000)
        ]
        results = make_matcher(searcher=searcher, embedder=embedder).match(make_section())

        assert results[0].match_confidence == 0
        assert results[0].ranking_score == 15

    def test_explanation_failure_keeps_confidence(self):
        """Test that a failed explanation does not reset the similarity score."""
        explainer = Mock()
        explainer.explain.side_effect = ValueError("no json")
        results = make_matcher(explainer=explainer).match(make_section())

        assert all(r.match_confidence == 100 for r in results)
        assert all(r.match_explanation != TRANSCRIPT_UNAVAILABLE_EXPLANATION for r in results)
        assert all(r.transcript_highlights == [] for r in results)


class TestMatchFallbacks:
    """Test graceful degradation."""

    def test_all_transcripts_fail(self):
        """Test that every candidate falls back to confidence 50 when transcripts fail."""
        transcripts = Mock()
        transcripts.get_transcript.side_effect = TranscriptUnavailableError("disabled")
        results = make_matcher(transcripts=transcripts).match(make_section())

        assert 0 < len(results) <= 5
        assert all(r.match_confidence == 50 for r in results)
        assert all(r.match_explanation == TRANSCRIPT_UNAVAILABLE_EXPLANATION for r in results)
        scores = [r.ranking_score for r in results]
        assert scores == sorted(scores, reverse=True)
        # 50 + (1.2M views / 1M * 10 + 10) = 72
        assert scores[0] == 72

    def test_one_bad_candidate_isolated(self):
        """Test that one failing transcript does not affect the others."""
        def fetch(video_id):
            if video_id == "video000002":
                raise TranscriptUnavailableError("restricted")
            return make_transcript(video_id)

        transcripts = Mock()
        transcripts.get_transcript.side_effect = fetch
        results = make_matcher(transcripts=transcripts).match(make_section())

        confidences = {r.url[-11:]: r.match_confidence for r in results}
        assert confidences["video000002"] == 50
        assert confidences["video000001"] == 100

    def test_unexpected_error_degrades(self):
        """Test that an unexpected exception in a candidate still yields a fallback."""
        transcripts = Mock()
        transcripts.get_transcript.side_effect = RuntimeError("boom")
        results = make_matcher(transcripts=transcripts).match(make_section())

        assert len(results) == 5
        assert all(r.match_confidence == 50 for r in results)

    def test_section_embedding_failure(self):
        """Test that a failed section embedding degrades every candidate."""
        embedder = Mock()
        embedder.generate_embedding.side_effect = OllamaError("down")
        results = make_matcher(embedder=embedder).match(make_section())

        assert len(results) == 5
        assert all(r.match_confidence == 50 for r in results)
        assert all(r.match_explanation == TRANSCRIPT_UNAVAILABLE_EXPLANATION for r in results)

    def test_timeout_degrades(self):
        """Test that a slow candidate falls back instead of blocking the section."""
        def slow_fetch(video_id):
            time.sleep(0.5)
            return make_transcript(video_id)

        searcher = Mock()
        searcher.search_videos.return_value = make_candidates(1)
        transcripts = Mock()
        transcripts.get_transcript.side_effect = slow_fetch

        results = make_matcher(searcher=searcher, transcripts=transcripts, timeout=0.05).match(make_section())

        assert len(results) == 1
        assert results[0].match_confidence == 50

    def test_timeout_shared_across_candidates(self):
        """Test that slow candidates share one deadline instead of waiting in turn."""
        release = threading.Event()

        def stuck_fetch(video_id):
            release.wait(5)
            return make_transcript(video_id)

        searcher = Mock()
        searcher.search_videos.return_value = make_candidates(3)
        transcripts = Mock()
        transcripts.get_transcript.side_effect = stuck_fetch
        matcher = make_matcher(searcher=searcher, transcripts=transcripts, timeout=0.3, max_workers=3)

        started = time.monotonic()
        try:
            results = matcher.match(make_section())
        finally:
            release.set()
        elapsed = time.monotonic() - started

        assert len(results) == 3
        assert all(r.match_confidence == 50 for r in results)
        assert elapsed < 0.6

    def test_search_failure_returns_empty(self):
        """Test that a failing search yields no resources."""
        searcher = Mock()
        searcher.search_videos.side_effect = RuntimeError("network down")
        assert make_matcher(searcher=searcher).match(make_section()) == []

    def test_no_candidates(self):
        """Test that an empty search yields no resources."""
        searcher = Mock()
        searcher.search_videos.return_value = []
        assert make_matcher(searcher=searcher).match(make_section()) == []
