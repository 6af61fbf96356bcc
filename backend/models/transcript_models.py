"""
Data models for video transcripts.
"""
from dataclasses import dataclass, field
from typing import Optional, List
from datetime import datetime


@dataclass
class TranscriptSegment:
    """Individual timed caption segment"""
    text: str
    start: float = 0.0  # Seconds
    duration: float = 0.0


@dataclass
class VideoTranscript:
    """Complete transcript of one video"""
    video_id: str
    language: str = "en"  # ISO 639-1 code
    segments: List[TranscriptSegment] = field(default_factory=list)
    fetched_at: Optional[datetime] = None

    @property
    def full_text(self) -> str:
        """Concatenated text from all segments"""
        return " ".join(seg.text for seg in self.segments if seg.text).strip()

    @property
    def word_count(self) -> int:
        """Total word count"""
        return len(self.full_text.split())
