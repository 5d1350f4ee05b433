"""Shared pytest fixtures and configuration."""

import base64
from unittest.mock import MagicMock

import pytest

from small_tales.core.config import Settings
from small_tales.core.logging_config import get_logger


@pytest.fixture
def settings(tmp_path):
    """Create test settings instance with a fake API key and no rate limiting."""
    return Settings(
        _env_file=None,
        elevenlabs_api_key="test-key",
        enable_rate_limiting=False,
        storage_path=str(tmp_path / "narrations"),
    )


@pytest.fixture
def unconfigured_settings(tmp_path):
    """Settings without an ElevenLabs API key."""
    return Settings(
        _env_file=None,
        elevenlabs_api_key=None,
        enable_rate_limiting=False,
        storage_path=str(tmp_path / "narrations"),
    )


@pytest.fixture
def logger():
    """Create test logger instance."""
    return get_logger(__name__)


@pytest.fixture
def fake_audio():
    """A few bytes standing in for MP3 audio."""
    return b"ID3fake-mp3-bytes"


@pytest.fixture
def hi_there_alignment():
    """Character alignment for "Hi there"."""
    spans = [
        ("H", 0, 80),
        ("i", 80, 150),
        (" ", 150, 180),
        ("t", 180, 220),
        ("h", 220, 260),
        ("e", 260, 300),
        ("r", 300, 340),
        ("e", 340, 420),
    ]
    return {
        "characters": [
            {"character": c, "start_time_ms": start, "end_time_ms": end} for c, start, end in spans
        ]
    }


def make_response(status_code=200, json_data=None, content=b"", text=""):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = "OK" if response.ok else "Error"
    response.json.return_value = json_data
    response.content = content
    response.text = text
    return response


def full_narration_payload(audio=b"full-narration-audio", alignment=None, duration_ms=None):
    """Provider JSON for the with-timestamps endpoint."""
    payload = {"audio_base64": base64.b64encode(audio).decode("ascii")}
    if alignment is not None:
        payload["alignment"] = alignment
    if duration_ms is not None:
        payload["audio_duration_ms"] = duration_ms
    return payload


@pytest.fixture
def response_factory():
    """Factory for fake requests.Response objects."""
    return make_response


@pytest.fixture
def narration_payload():
    """Factory for with-timestamps provider payloads."""
    return full_narration_payload
