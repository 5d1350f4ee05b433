"""Application configuration using pydantic-settings."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be configured via environment variables or a .env file.
    See .env.example for a template.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================================================
    # Application Settings
    # ========================================================================
    app_name: str = Field(default="Small Tales Narration", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")
    log_format: str = Field(default="text", description="Log output format: 'text' or 'json'")
    log_file: Optional[str] = Field(default=None, description="Optional rotating log file path")

    # ========================================================================
    # ElevenLabs (Text-to-Speech) Settings
    # ========================================================================
    elevenlabs_api_key: Optional[str] = Field(default=None, description="ElevenLabs API key")
    elevenlabs_api_url: str = Field(
        default="https://api.elevenlabs.io", description="ElevenLabs API base URL"
    )
    elevenlabs_voice_id: str = Field(
        default="8LVfoRdkh4zgjr8v5ObE", description="Default narration voice ID (Clara)"
    )
    elevenlabs_model_id: str = Field(
        default="eleven_multilingual_v2", description="Default ElevenLabs model ID"
    )
    elevenlabs_output_format: str = Field(
        default="mp3_44100_128", description="Audio output format requested from ElevenLabs"
    )
    elevenlabs_timeout_seconds: float = Field(
        default=60.0, description="HTTP timeout for a single ElevenLabs request (seconds)"
    )

    # ========================================================================
    # Word Recording Settings
    # ========================================================================
    include_word_recordings: bool = Field(
        default=True, description="Generate individual recordings for each unique word by default"
    )
    word_batch_size: int = Field(
        default=5, ge=1, description="Number of word recordings requested concurrently per batch"
    )
    word_batch_delay_seconds: float = Field(
        default=1.0, ge=0.0, description="Pause between word recording batches (seconds)"
    )

    # ========================================================================
    # Rate Limiting Settings
    # ========================================================================
    enable_rate_limiting: bool = Field(
        default=True,
        description="Enable rate limiting for API calls to prevent hitting limits (default: true)",
    )
    elevenlabs_rate_limit: int = Field(
        default=100, description="ElevenLabs API calls per minute (default: 100)"
    )

    # ========================================================================
    # Storage Settings
    # ========================================================================
    storage_path: str = Field(default="storage/narrations", description="Storage path for narrations")


# Global settings instance
settings = Settings()
