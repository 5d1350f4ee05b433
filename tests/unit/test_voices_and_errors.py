"""Tests for the voice catalog, presets and error helpers."""

import pytest

from small_tales.models.schemas import VoiceSettings, VoiceSettingsOverride, merge_voice_settings
from small_tales.services.voices import (
    NARRATION_VOICES,
    get_voice_info,
    get_voice_preset,
    resolve_voice_id,
)
from small_tales.utils.error_handler import (
    NarrationInputError,
    TTSConfigurationError,
    TTSProviderError,
    format_error_message,
    get_fallback_suggestion,
)


def test_get_voice_info_known_and_custom():
    """Test catalog lookups fall back to a custom voice."""
    assert get_voice_info("ThT5KcBeYPX3keUQqHPh").name == "Dorothy"

    custom = get_voice_info("unknown-id")
    assert custom.id == "unknown-id"
    assert custom.name == "Custom Voice"


def test_resolve_voice_id():
    """Test catalog names and raw IDs both resolve."""
    assert resolve_voice_id("Clara") == NARRATION_VOICES["clara"].id
    assert resolve_voice_id("raw-voice-id") == "raw-voice-id"
    assert resolve_voice_id(None) is None


def test_get_voice_preset():
    """Test presets by name and unknown preset errors."""
    assert get_voice_preset("calm") == VoiceSettings(
        stability=0.7, similarity_boost=0.7, style=0.0, use_speaker_boost=False
    )
    with pytest.raises(KeyError, match="Unknown voice preset"):
        get_voice_preset("whisper")


def test_for_single_word_caps_at_one():
    """Test single-word nudges never exceed 1.0."""
    nudged = VoiceSettings(stability=0.98, similarity_boost=0.99).for_single_word()
    assert nudged.stability == 1.0
    assert nudged.similarity_boost == 1.0


def test_merge_voice_settings_partial_override():
    """Test unset override fields keep their base values."""
    merged = merge_voice_settings(VoiceSettings(), VoiceSettingsOverride(similarity_boost=0.9))
    assert merged == VoiceSettings(similarity_boost=0.9)


def test_voice_settings_range_validation():
    """Test out-of-range settings are rejected."""
    with pytest.raises(ValueError):
        VoiceSettings(stability=1.5)


def test_format_error_message():
    """Test error messages include operation, context and suggestion."""
    error = TTSProviderError("ElevenLabs API error: 429", status_code=429)
    message = format_error_message(
        "Generating narration",
        error,
        context={"characters": 12},
        suggestion=get_fallback_suggestion("Narration", error),
    )

    assert "Generating narration failed (characters=12)" in message
    assert "TTSProviderError" in message
    assert "Rate limit exceeded" in message


def test_fallback_suggestions_by_error_type():
    """Test suggestions for each error class."""
    assert "non-empty" in get_fallback_suggestion("Narration", NarrationInputError("empty"))
    assert "ELEVENLABS_API_KEY" in get_fallback_suggestion("Narration", TTSConfigurationError("missing"))
    assert "skipped" in get_fallback_suggestion("Word Recording", TTSProviderError("HTTP 500", status_code=500))
    assert get_fallback_suggestion("Unknown", RuntimeError("x")) is None


def test_error_hierarchy():
    """Test input and configuration errors are also ValueErrors."""
    assert issubclass(NarrationInputError, ValueError)
    assert issubclass(TTSConfigurationError, ValueError)


def test_default_voice_comes_from_settings(settings):
    """Test the configured default voice is the catalog's Clara voice."""
    assert get_voice_info(settings.elevenlabs_voice_id).name == "Clara"
    assert settings.elevenlabs_model_id == "eleven_multilingual_v2"
