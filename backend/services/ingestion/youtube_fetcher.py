"""
YouTube search and transcript fetcher using yt-dlp and youtube-transcript-api.
"""
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
import yt_dlp
from youtube_transcript_api import YouTubeTranscriptApi
from youtube_transcript_api._errors import CouldNotRetrieveTranscript

from core.config import (
    ENABLE_TRANSCRIPT_CACHE,
    SEARCH_TIMEOUT_SEC,
    TRANSCRIPT_LANGUAGES,
)
from core.errors import TranscriptUnavailableError
from models.resource_models import VideoCandidate
from models.transcript_models import VideoTranscript, TranscriptSegment
from services.ingestion.cache_manager import cache_manager, CacheManager
from services.processing.utils import format_duration

logger = logging.getLogger(__name__)


class YouTubeFetcher:
    """Searches YouTube and fetches video transcripts."""

    def __init__(
        self,
        cache: Optional[CacheManager] = cache_manager,
        use_cache: bool = ENABLE_TRANSCRIPT_CACHE,
        languages: Optional[List[str]] = None,
    ):
        self.cache = cache
        self.use_cache = use_cache and cache is not None
        self.languages = languages or TRANSCRIPT_LANGUAGES

    @staticmethod
    def _extract_video_id(url: str) -> Optional[str]:
        """Extract video ID from various YouTube URL formats."""
        patterns = [
            r'(?:youtube\.com\/watch\?v=|youtu\.be\/|youtube\.com\/embed\/)([a-zA-Z0-9_-]{11})',
            r'youtube\.com\/watch\?.*v=([a-zA-Z0-9_-]{11})',
        ]

        for pattern in patterns:
            match = re.search(pattern, url)
            if match:
                return match.group(1)
        return None

    @staticmethod
    def _entry_to_candidate(entry: Dict[str, Any]) -> Optional[VideoCandidate]:
        """Convert a yt-dlp search entry into a VideoCandidate."""
        video_id = entry.get("id") or YouTubeFetcher._extract_video_id(entry.get("url") or "")
        if not video_id:
            return None

        thumbnails = entry.get("thumbnails") or []
        thumbnail = thumbnails[-1].get("url", "") if thumbnails else ""
        if not thumbnail:
            thumbnail = f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"

        return VideoCandidate(
            video_id=video_id,
            title=entry.get("title") or "Untitled",
            url=f"https://www.youtube.com/watch?v={video_id}",
            thumbnail=thumbnail,
            channel=entry.get("channel") or entry.get("uploader"),
            duration=format_duration(entry.get("duration")),
            views=int(entry.get("view_count") or 0),
            likes=int(entry.get("like_count") or 0),
            published_at=entry.get("upload_date"),
            description=(entry.get("description") or "")[:500],
        )

    def search_videos(self, query: str, limit: int = 5) -> List[VideoCandidate]:
        """
        Search YouTube for videos matching a query.

        Args:
            query: Free-text search query
            limit: Maximum number of candidates

        Returns:
            Candidates in YouTube's relevance order
        """
        if not query.strip() or limit <= 0:
            return []

        ydl_opts = {
            'skip_download': True,
            'quiet': True,
            'no_warnings': True,
            'extract_flat': 'in_playlist',
            'socket_timeout': SEARCH_TIMEOUT_SEC,
        }

        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(f"ytsearch{limit}:{query}", download=False) or {}

        candidates = []
        for entry in info.get("entries") or []:
            candidate = self._entry_to_candidate(entry or {})
            if candidate:
                candidates.append(candidate)

        logger.debug(f"YouTube search returned {len(candidates)} candidates for: {query}")
        return candidates[:limit]

    def get_transcript(self, video_id: str) -> VideoTranscript:
        """
        Get the timed transcript of a YouTube video.

        Raises:
            TranscriptUnavailableError: if captions are disabled, missing,
                restricted or cannot be fetched.
        """
        if not video_id:
            raise TranscriptUnavailableError("No video id given")

        if self.use_cache:
            cached = self.cache.get_cached_transcript(video_id)
            if cached:
                return cached

        try:
            fetched = YouTubeTranscriptApi().fetch(video_id, languages=self.languages)
        except (CouldNotRetrieveTranscript, requests.RequestException) as e:
            raise TranscriptUnavailableError(f"Transcript unavailable for {video_id}: {e}")

        transcript = VideoTranscript(
            video_id=video_id,
            language=getattr(fetched, "language_code", self.languages[0]),
            segments=[
                TranscriptSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
                for snippet in fetched
            ],
            fetched_at=datetime.now(),
        )

        if not transcript.full_text:
            raise TranscriptUnavailableError(f"Transcript for {video_id} is empty")

        if self.use_cache:
            self.cache.save_transcript(transcript)

        return transcript


# Global YouTube fetcher instance
youtube_fetcher = YouTubeFetcher()
