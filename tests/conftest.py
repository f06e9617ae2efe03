"""
Shared fixtures: an app wired to an in-memory caption source.
"""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services.transcript_service import TranscriptService


class StubCaptionSource:
    """Caption source returning canned lines, or raising a canned error."""

    def __init__(self, captions: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.captions = captions or []
        self.error = error
        self.calls = []

    def fetch(self, video_id: str, lang: str) -> List[Dict[str, Any]]:
        self.calls.append((video_id, lang))
        if self.error is not None:
            raise self.error
        return self.captions


@pytest.fixture
def settings():
    return Settings(_env_file=None, ENVIRONMENT="production")


@pytest.fixture
def source():
    return StubCaptionSource(captions=[{"text": "Hello", "start": 0, "dur": 2}])


@pytest.fixture
def client(settings, source):
    app = create_app(settings, transcript_service=TranscriptService(source, language="en"))
    return TestClient(app)
