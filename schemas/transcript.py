# Models
from pydantic import BaseModel
from typing import List, Optional


class CaptionLine(BaseModel):
    text: str
    start: float
    dur: float


class TranscriptEntry(BaseModel):
    text: str
    start: float
    duration: float
    timestamp: str


class TranscriptResponse(BaseModel):
    videoId: str
    transcript: List[TranscriptEntry]
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    videoId: Optional[str] = None
    example: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
