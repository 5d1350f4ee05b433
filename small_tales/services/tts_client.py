"""ElevenLabs text-to-speech client used by the narration pipeline."""

from typing import Any, Optional

import requests

from small_tales.core.config import Settings
from small_tales.models.schemas import VoiceSettings
from small_tales.utils.error_handler import TTSConfigurationError, TTSProviderError
from small_tales.utils.rate_limiter import RateLimiter, get_elevenlabs_limiter


class ElevenLabsClient:
    """Blocking ElevenLabs client.

    Both calls are synchronous; the narration services run them in worker
    threads so several requests can be in flight at once.
    """

    def __init__(self, settings: Settings, logger: Any, rate_limiter: Optional[RateLimiter] = None):
        """
        Initialize the client.

        Args:
            settings: Application settings
            logger: Logger instance
            rate_limiter: Optional limiter; defaults to the shared ElevenLabs limiter
                when rate limiting is enabled
        """
        self.settings = settings
        self.logger = logger
        if rate_limiter is None and settings.enable_rate_limiting:
            rate_limiter = get_elevenlabs_limiter(max_calls=settings.elevenlabs_rate_limit)
        self.rate_limiter = rate_limiter

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.elevenlabs_api_key)

    def _headers(self, accept: str) -> dict[str, str]:
        if not self.is_configured:
            raise TTSConfigurationError("ElevenLabs API key not configured")
        return {
            "Accept": accept,
            "Content-Type": "application/json",
            "xi-api-key": self.settings.elevenlabs_api_key,
        }

    def _post(self, path: str, payload: dict, accept: str) -> requests.Response:
        headers = self._headers(accept)
        url = f"{self.settings.elevenlabs_api_url.rstrip('/')}{path}"

        if self.rate_limiter is not None:
            waited = self.rate_limiter.wait_if_needed("elevenlabs")
            if waited:
                self.logger.debug(f"Rate limiter delayed ElevenLabs call by {waited:.2f}s")

        try:
            response = requests.post(
                url,
                json=payload,
                headers=headers,
                timeout=self.settings.elevenlabs_timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            raise TTSProviderError(f"Network error calling ElevenLabs API: {e}") from e

        if not response.ok:
            raise TTSProviderError(
                f"ElevenLabs API error: {response.status_code} {response.reason} - {response.text}",
                status_code=response.status_code,
                detail=response.text,
            )
        return response

    def _payload(self, text: str, model_id: str, voice_settings: VoiceSettings) -> dict:
        return {
            "text": text,
            "model_id": model_id,
            "voice_settings": voice_settings.model_dump(),
            "output_format": self.settings.elevenlabs_output_format,
        }

    def synthesize_with_timestamps(
        self,
        text: str,
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> dict:
        """
        Synthesize text and return audio plus character alignment.

        Args:
            text: Text to narrate
            voice_id: ElevenLabs voice ID
            model_id: ElevenLabs model ID
            voice_settings: Voice settings for the request

        Returns:
            Provider JSON: ``audio_base64``, optional ``alignment`` and
            optional ``audio_duration_ms``

        Raises:
            TTSConfigurationError: If the API key is missing
            TTSProviderError: On network failure, non-2xx status or a body without audio
        """
        response = self._post(
            f"/v1/text-to-speech/{voice_id}/with-timestamps",
            self._payload(text, model_id, voice_settings),
            accept="application/json",
        )
        try:
            result = response.json()
        except ValueError as e:
            raise TTSProviderError(f"ElevenLabs returned invalid JSON: {e}") from e

        if not isinstance(result, dict) or not result.get("audio_base64"):
            raise TTSProviderError("ElevenLabs response did not include audio_base64")
        return result

    def synthesize(
        self,
        text: str,
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> bytes:
        """
        Synthesize text and return raw MP3 bytes.

        Raises:
            TTSConfigurationError: If the API key is missing
            TTSProviderError: On network failure or non-2xx status
        """
        response = self._post(
            f"/v1/text-to-speech/{voice_id}",
            self._payload(text, model_id, voice_settings),
            accept="audio/mpeg",
        )
        return response.content
