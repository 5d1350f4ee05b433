"""Tests for the ElevenLabs client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from small_tales.models.schemas import VoiceSettings
from small_tales.services.tts_client import ElevenLabsClient
from small_tales.utils.error_handler import TTSConfigurationError, TTSProviderError
from small_tales.utils.rate_limiter import RateLimiter


@pytest.fixture
def client(settings, logger):
    """Create ElevenLabsClient instance for testing."""
    return ElevenLabsClient(settings, logger)


@patch("small_tales.services.tts_client.requests.post")
def test_synthesize_with_timestamps_builds_request(mock_post, client, response_factory, narration_payload):
    """Test the with-timestamps request URL, headers and body."""
    payload = narration_payload(duration_ms=1200)
    mock_post.return_value = response_factory(json_data=payload)

    result = client.synthesize_with_timestamps(
        "Hello there", voice_id="voice123", model_id="eleven_multilingual_v2", voice_settings=VoiceSettings()
    )

    assert result == payload
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.elevenlabs.io/v1/text-to-speech/voice123/with-timestamps"
    assert kwargs["headers"]["xi-api-key"] == "test-key"
    assert kwargs["headers"]["Accept"] == "application/json"
    assert kwargs["json"]["text"] == "Hello there"
    assert kwargs["json"]["model_id"] == "eleven_multilingual_v2"
    assert kwargs["json"]["output_format"] == "mp3_44100_128"
    assert kwargs["json"]["voice_settings"] == {
        "stability": 0.5,
        "similarity_boost": 0.75,
        "style": 0.0,
        "use_speaker_boost": True,
    }
    assert kwargs["timeout"] == 60.0


@patch("small_tales.services.tts_client.requests.post")
def test_synthesize_returns_audio_bytes(mock_post, client, response_factory, fake_audio):
    """Test the plain synthesis call returns the response body."""
    mock_post.return_value = response_factory(content=fake_audio)

    audio = client.synthesize("cat", voice_id="v", model_id="m", voice_settings=VoiceSettings())

    assert audio == fake_audio
    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.elevenlabs.io/v1/text-to-speech/v"
    assert kwargs["headers"]["Accept"] == "audio/mpeg"


@patch("small_tales.services.tts_client.requests.post")
def test_non_2xx_raises_provider_error(mock_post, client, response_factory):
    """Test non-2xx responses surface status and body."""
    mock_post.return_value = response_factory(status_code=401, text='{"detail":"invalid key"}')

    with pytest.raises(TTSProviderError) as exc_info:
        client.synthesize_with_timestamps("Hi", voice_id="v", model_id="m", voice_settings=VoiceSettings())

    assert exc_info.value.status_code == 401
    assert "invalid key" in exc_info.value.detail
    assert "401" in str(exc_info.value)


@patch("small_tales.services.tts_client.requests.post")
def test_network_error_raises_provider_error(mock_post, client):
    """Test network failures are wrapped."""
    mock_post.side_effect = requests.exceptions.ConnectionError("connection refused")

    with pytest.raises(TTSProviderError, match="Network error"):
        client.synthesize("cat", voice_id="v", model_id="m", voice_settings=VoiceSettings())


@patch("small_tales.services.tts_client.requests.post")
def test_response_without_audio_raises(mock_post, client, response_factory):
    """Test a JSON body without audio_base64 is a provider error."""
    mock_post.return_value = response_factory(json_data={"alignment": None})

    with pytest.raises(TTSProviderError, match="audio_base64"):
        client.synthesize_with_timestamps("Hi", voice_id="v", model_id="m", voice_settings=VoiceSettings())


@patch("small_tales.services.tts_client.requests.post")
def test_missing_api_key_raises_before_request(mock_post, unconfigured_settings, logger):
    """Test a missing API key fails without touching the network."""
    client = ElevenLabsClient(unconfigured_settings, logger)

    assert client.is_configured is False
    with pytest.raises(TTSConfigurationError):
        client.synthesize("cat", voice_id="v", model_id="m", voice_settings=VoiceSettings())
    mock_post.assert_not_called()


@patch("small_tales.services.tts_client.requests.post")
def test_rate_limiter_consulted_per_request(mock_post, settings, logger, response_factory, fake_audio):
    """Test every request passes through the rate limiter."""
    limiter = MagicMock(spec=RateLimiter)
    limiter.wait_if_needed.return_value = 0.0
    mock_post.return_value = response_factory(content=fake_audio)
    client = ElevenLabsClient(settings, logger, rate_limiter=limiter)

    client.synthesize("a", voice_id="v", model_id="m", voice_settings=VoiceSettings())
    client.synthesize("b", voice_id="v", model_id="m", voice_settings=VoiceSettings())

    assert limiter.wait_if_needed.call_count == 2


def test_no_limiter_when_rate_limiting_disabled(client):
    """Test rate limiting can be switched off in settings."""
    assert client.rate_limiter is None
