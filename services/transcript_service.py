# services/transcript_service.py
"""
Caption retrieval for the transcript endpoint.

YouTubeCaptionSource talks to YouTube through youtube-transcript-api and yields
raw caption lines ({text, start, dur}). TranscriptService wraps any such source,
classifies its failures once and hands the route a typed TranscriptResult.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    YouTubeTranscriptApi,
)

from schemas.transcript import CaptionLine, TranscriptEntry

logger = logging.getLogger(__name__)

CAPTIONS_NOT_FOUND_MARKER = "Could not find captions"


class CaptionsNotFoundError(Exception):
    """The video has no caption track in the requested language."""


def format_timestamp(seconds: float) -> str:
    """
    Convert an offset in seconds to an HH:MM:SS clock string.

    Fractions of a second are dropped (floor), and each field is floored on
    its own, so 59.999 gives "00:00:59". Hours are not capped at two digits.
    """
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError(f"Cannot format timestamp for {seconds!r} seconds")

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    remaining_seconds = int(seconds % 60)

    return f"{hours:02d}:{minutes:02d}:{remaining_seconds:02d}"


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class YouTubeCaptionSource:
    """
    Fetch caption lines for a video using youtube-transcript-api.
    """

    def __init__(self, api: Optional[YouTubeTranscriptApi] = None):
        self._api = api or YouTubeTranscriptApi()

    def fetch(self, video_id: str, lang: str) -> List[Dict[str, Any]]:
        try:
            fetched = self._api.fetch(video_id, languages=[lang])
        except (NoTranscriptFound, TranscriptsDisabled) as e:
            raise CaptionsNotFoundError(
                f"{CAPTIONS_NOT_FOUND_MARKER} for video: {video_id}"
            ) from e

        return [
            {"text": snippet.text, "start": snippet.start, "dur": snippet.duration}
            for snippet in fetched
        ]


class RetrievalStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class TranscriptResult:
    status: RetrievalStatus
    entries: List[TranscriptEntry] = field(default_factory=list)
    detail: Optional[str] = None


def build_entries(captions: List[Dict[str, Any]]) -> List[TranscriptEntry]:
    """Map raw caption lines to transcript entries, keeping their order."""
    entries = []
    for raw in captions:
        line = CaptionLine(**raw)
        entries.append(
            TranscriptEntry(
                text=line.text,
                start=line.start,
                duration=line.dur,
                timestamp=format_timestamp(line.start),
            )
        )
    return entries


def _is_not_found(error: Exception) -> bool:
    return CAPTIONS_NOT_FOUND_MARKER in str(error)


class TranscriptService:
    """
    Single-attempt transcript retrieval on top of a caption source.

    The source is any object with fetch(video_id, lang) returning a list of
    {text, start, dur} dicts and raising on failure.
    """

    def __init__(self, source: Any, language: str = "en"):
        self.source = source
        self.language = language

    def retrieve(self, video_id: str) -> TranscriptResult:
        try:
            captions = self.source.fetch(video_id, self.language)
            entries = build_entries(captions)
        except Exception as e:
            if _is_not_found(e):
                return TranscriptResult(status=RetrievalStatus.NOT_FOUND, detail=str(e))

            logger.error(f"Failed to fetch transcript for video {video_id}: {e}", exc_info=True)
            return TranscriptResult(status=RetrievalStatus.FAILED, detail=str(e))

        logger.info(f"Fetched {len(entries)} caption lines for video {video_id}")
        return TranscriptResult(status=RetrievalStatus.FOUND, entries=entries)
