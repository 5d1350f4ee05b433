"""Pydantic models and schemas for the narration pipeline."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Voice Models
# ============================================================================


class VoiceSettings(BaseModel):
    """ElevenLabs voice settings. Defaults are tuned for storytelling."""

    stability: float = Field(default=0.5, ge=0.0, le=1.0, description="Voice stability (0.0-1.0)")
    similarity_boost: float = Field(default=0.75, ge=0.0, le=1.0, description="Similarity boost (0.0-1.0)")
    style: float = Field(default=0.0, ge=0.0, le=1.0, description="Style exaggeration (0.0-1.0)")
    use_speaker_boost: bool = Field(default=True, description="Enable speaker boost")

    def for_single_word(self) -> "VoiceSettings":
        """Return slightly more stable settings for isolated word synthesis."""
        return self.model_copy(
            update={
                "stability": min(self.stability + 0.1, 1.0),
                "similarity_boost": min(self.similarity_boost + 0.05, 1.0),
            }
        )


class VoiceInfo(BaseModel):
    """A narration voice from the catalog."""

    id: str = Field(..., description="ElevenLabs voice ID")
    name: str = Field(..., description="Display name")
    gender: Optional[str] = Field(default=None, description="Voice gender")
    description: str = Field(default="", description="Short description of the voice")


# ============================================================================
# Timing Models
# ============================================================================


class CharacterTiming(BaseModel):
    """Timing of a single character in the provider alignment stream."""

    character: str = Field(..., description="The character")
    start_time_ms: float = Field(default=0.0, description="Start time in milliseconds")
    end_time_ms: float = Field(default=0.0, description="End time in milliseconds")
    confidence: Optional[float] = Field(default=None, description="Provider confidence, if reported")


class WordTimestamp(BaseModel):
    """Time interval during which a word is spoken, in ms from narration start."""

    word: str = Field(..., description="Normalized word")
    start_time_ms: int = Field(..., ge=0, description="Start time in milliseconds")
    end_time_ms: int = Field(..., ge=0, description="End time in milliseconds")
    confidence: Optional[float] = Field(
        default=None, description="1.0 for provider-derived timings, 0.5 for estimates"
    )

    @model_validator(mode="after")
    def check_interval(self) -> "WordTimestamp":
        if self.start_time_ms > self.end_time_ms:
            raise ValueError("start_time_ms must not exceed end_time_ms")
        return self


# ============================================================================
# Narration Resource Models
# ============================================================================


class FullAudio(BaseModel):
    """The complete narration audio."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Audio URL or data URI")
    duration_ms: int = Field(..., ge=0, description="Audio duration in milliseconds")
    size_bytes: int = Field(..., ge=0, description="Approximate audio size in bytes")
    format: str = Field(default="audio/mpeg", description="Audio MIME type")


class WordRecording(BaseModel):
    """An individually synthesized word clip."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Audio data URI")
    size_bytes: int = Field(..., ge=0, description="Audio size in bytes")
    format: str = Field(default="audio/mpeg", description="Audio MIME type")
    text_used: Optional[str] = Field(default=None, description="Text actually sent to the provider")
    has_prefix: bool = Field(default=False, description="Whether the carrier phrase was used")


class NarrationMetadata(BaseModel):
    """Generation settings stamped onto a narration resource."""

    model_config = ConfigDict(frozen=True)

    voice_id: str
    voice_name: str
    model_id: str
    voice_settings: VoiceSettings
    character_count: int = Field(..., ge=0)
    unique_words: int = Field(..., ge=0)
    created_at: str = Field(..., description="ISO 8601 creation timestamp (UTC)")


class NarrationResource(BaseModel):
    """Full audio, word timestamps, per-word clips and metadata for one text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Narration identifier (narr_...)")
    text: str = Field(..., description="Narrated text")
    full_audio: FullAudio = Field(..., alias="fullAudio")
    word_timestamps: list[WordTimestamp] = Field(default_factory=list, alias="wordTimestamps")
    word_recordings: dict[str, WordRecording] = Field(default_factory=dict, alias="wordRecordings")
    metadata: NarrationMetadata


# ============================================================================
# API Models
# ============================================================================


class VoiceSettingsOverride(BaseModel):
    """Partial voice settings supplied by a caller; unset fields keep defaults."""

    stability: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    similarity_boost: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    style: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    use_speaker_boost: Optional[bool] = None


class GenerateNarrationRequest(BaseModel):
    """Request to generate a narration resource."""

    text: str = Field(..., description="Story text to narrate")
    voice_id: Optional[str] = Field(default=None, description="ElevenLabs voice ID")
    model_id: Optional[str] = Field(default=None, description="ElevenLabs model ID")
    voice_settings: Optional[VoiceSettingsOverride] = Field(default=None, description="Voice setting overrides")
    include_word_recordings: bool = Field(default=True, description="Generate per-word recordings")


class GenerateNarrationResponse(BaseModel):
    """Response for a narration generation request."""

    success: bool = True
    narration: NarrationResource


class EstimateCostRequest(BaseModel):
    """Request to estimate the provider cost of a narration."""

    text: str
    include_word_recordings: bool = True


class CostEstimate(BaseModel):
    """Estimated provider cost of narrating a text."""

    character_count: int
    estimated_cost: float
    unique_words: int


class PlaybackPosition(BaseModel):
    """Snapshot of the player position."""

    time_ms: float
    progress: float
    current_word: Optional[WordTimestamp] = None
    word_index: int = -1


class PlayerMetadata(BaseModel):
    """Summary of a narration as seen by the player."""

    duration_ms: int
    word_count: int
    unique_words: int
    voice: str
    text: str


def merge_voice_settings(
    base: VoiceSettings, override: Optional[Any] = None
) -> VoiceSettings:
    """Merge a partial override (model or dict) over base settings."""
    if override is None:
        return base
    if isinstance(override, BaseModel):
        updates = override.model_dump(exclude_none=True)
    else:
        updates = {k: v for k, v in dict(override).items() if v is not None}
    return VoiceSettings(**{**base.model_dump(), **updates})
