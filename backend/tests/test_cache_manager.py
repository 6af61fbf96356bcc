"""
Unit tests for the transcript cache.
"""
import pytest

from core.database import Database
from models.transcript_models import TranscriptSegment, VideoTranscript
from services.ingestion.cache_manager import CacheManager


@pytest.fixture
def database(tmp_path):
    return Database(tmp_path / "cache.db")


def make_transcript(text="Graphs have vertices"):
    return VideoTranscript(
        video_id="dQw4w9WgXcQ",
        language="en",
        segments=[
            TranscriptSegment(text=text, start=0.0, duration=2.5),
            TranscriptSegment(text="and edges", start=2.5, duration=1.5),
        ],
    )


class TestCacheManager:
    """Test storing and reading cached transcripts."""

    def test_round_trip(self, database):
        """Test that a saved transcript reads back with its segments."""
        cache = CacheManager(database=database, ttl_hours=24)
        cache.save_transcript(make_transcript())

        cached = cache.get_cached_transcript("dQw4w9WgXcQ")

        assert cached.full_text == "Graphs have vertices and edges"
        assert cached.segments[1].start == 2.5
        assert cached.fetched_at is not None

    def test_missing_video(self, database):
        """Test that an unknown video is a cache miss."""
        assert CacheManager(database=database).get_cached_transcript("unknown0000") is None

    def test_replaces_older_copy(self, database):
        """Test that saving again overwrites the cached transcript."""
        cache = CacheManager(database=database, ttl_hours=24)
        cache.save_transcript(make_transcript())
        cache.save_transcript(make_transcript(text="Trees are graphs"))

        assert cache.get_cached_transcript("dQw4w9WgXcQ").segments[0].text == "Trees are graphs"

    def test_expired_entry(self, database):
        """Test that entries past the TTL are ignored."""
        cache = CacheManager(database=database, ttl_hours=0)
        cache.save_transcript(make_transcript())
        assert cache.get_cached_transcript("dQw4w9WgXcQ") is None
