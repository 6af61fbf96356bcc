"""
Cache manager for storing and retrieving fetched transcripts.
"""
import json
import logging
import sqlite3
from datetime import datetime
from typing import Optional

from core.config import CACHE_TTL_HOURS
from core.database import db, Database
from models.transcript_models import VideoTranscript, TranscriptSegment

logger = logging.getLogger(__name__)


class CacheManager:
    """Caches transcripts by video id to avoid re-fetching."""

    def __init__(self, database: Database = db, ttl_hours: int = CACHE_TTL_HOURS):
        self.database = database
        self.ttl_hours = ttl_hours

    def get_cached_transcript(self, video_id: str) -> Optional[VideoTranscript]:
        """Return the cached transcript if present and not expired."""
        try:
            row = self.database.execute_one(
                """
                SELECT video_id, language, segments, fetched_at
                FROM transcripts
                WHERE video_id = ?
                AND datetime(fetched_at, ?) > datetime('now')
                """,
                (video_id, f"+{self.ttl_hours} hours"),
            )
        except sqlite3.Error as e:
            logger.warning(f"Transcript cache read error: {e}")
            return None

        if not row:
            return None

        segments = [TranscriptSegment(**seg) for seg in json.loads(row["segments"])]
        return VideoTranscript(
            video_id=row["video_id"],
            language=row["language"],
            segments=segments,
            fetched_at=datetime.fromisoformat(row["fetched_at"]),
        )

    def save_transcript(self, transcript: VideoTranscript) -> None:
        """Save a transcript to cache, replacing any older copy."""
        segments_json = json.dumps([
            {"text": seg.text, "start": seg.start, "duration": seg.duration}
            for seg in transcript.segments
        ])

        try:
            self.database.execute_write(
                """
                INSERT OR REPLACE INTO transcripts (video_id, language, segments, fetched_at)
                VALUES (?, ?, ?, datetime('now'))
                """,
                (transcript.video_id, transcript.language, segments_json),
            )
        except sqlite3.Error as e:
            logger.warning(f"Transcript cache write error: {e}")


# Global cache manager instance
cache_manager = CacheManager()
