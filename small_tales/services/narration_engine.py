"""Narration Engine - builds narration resources from story text."""

import asyncio
import math
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from small_tales.core.config import Settings
from small_tales.models.schemas import (
    CostEstimate,
    FullAudio,
    NarrationMetadata,
    NarrationResource,
    VoiceSettings,
    WordRecording,
    WordTimestamp,
    merge_voice_settings,
)
from small_tales.services.alignment import (
    estimate_word_timings,
    normalize_alignment,
    process_alignment,
    round_half_up,
)
from small_tales.services.tts_client import ElevenLabsClient
from small_tales.services.voices import get_voice_info
from small_tales.services.word_recorder import AUDIO_FORMAT, WordRecorder
from small_tales.utils.error_handler import NarrationInputError, TTSConfigurationError
from small_tales.utils.text_utils import count_unique_words, estimate_audio_duration, extract_unique_words

COST_PER_CHARACTER = 0.0001
WORD_RECORDING_COST_FACTOR = 10


def new_narration_id() -> str:
    return f"narr_{uuid.uuid4().hex[:12]}"


def estimate_cost(text: str, include_word_recordings: bool = True) -> CostEstimate:
    """
    Estimate the ElevenLabs cost of narrating text.

    Args:
        text: Text to narrate
        include_word_recordings: Whether per-word clips will be generated

    Returns:
        Character count, unique word count and estimated cost in USD
    """
    character_count = len(text)
    unique_words = count_unique_words(text)
    base_cost = character_count * COST_PER_CHARACTER
    word_cost = unique_words * COST_PER_CHARACTER * WORD_RECORDING_COST_FACTOR if include_word_recordings else 0.0
    return CostEstimate(
        character_count=character_count,
        estimated_cost=base_cost + word_cost,
        unique_words=unique_words,
    )


class NarrationEngine:
    """Produces narration resources: full audio, word timings and word clips."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        client: Optional[ElevenLabsClient] = None,
        word_recorder: Optional[WordRecorder] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the narration engine.

        Args:
            settings: Application settings
            logger: Logger instance
            client: ElevenLabs client (created from settings if omitted)
            word_recorder: Word recorder (created around the client if omitted)
            rng: Random generator for the timing estimator
        """
        self.settings = settings
        self.logger = logger
        self.client = client or ElevenLabsClient(settings, logger)
        self.word_recorder = word_recorder or WordRecorder(settings, logger, client=self.client)
        self.rng = rng

    async def generate_narration(
        self,
        text: str,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
        voice_settings: Optional[Any] = None,
        include_word_recordings: Optional[bool] = None,
    ) -> NarrationResource:
        """
        Generate a narration resource for text.

        Args:
            text: Story text to narrate
            voice_id: ElevenLabs voice ID (defaults to settings)
            model_id: ElevenLabs model ID (defaults to settings)
            voice_settings: Full or partial voice settings merged over the defaults
            include_word_recordings: Generate per-word clips (defaults to settings)

        Returns:
            The assembled narration resource

        Raises:
            NarrationInputError: If text is empty
            TTSConfigurationError: If ElevenLabs is not configured
            TTSProviderError: If the full narration request fails
        """
        if not isinstance(text, str) or not text.strip():
            raise NarrationInputError("Valid text is required")
        if not self.client.is_configured:
            raise TTSConfigurationError("ElevenLabs API key not configured")

        text = text.strip()
        voice_id = voice_id or self.settings.elevenlabs_voice_id
        model_id = model_id or self.settings.elevenlabs_model_id
        if include_word_recordings is None:
            include_word_recordings = self.settings.include_word_recordings
        effective_settings = merge_voice_settings(VoiceSettings(), voice_settings)
        voice_info = get_voice_info(voice_id)

        self.logger.info(
            f"Generating narration: {len(text)} characters, voice={voice_info.name} ({voice_id}), "
            f"model={model_id}, word_recordings={include_word_recordings}"
        )

        full_audio, word_timestamps = await self._generate_full_narration(
            text, voice_id, model_id, effective_settings
        )

        unique_words = extract_unique_words(text)
        self.logger.info(f"Found {len(unique_words)} unique words for individual recording")

        word_recordings: dict[str, WordRecording] = {}
        if include_word_recordings and unique_words:
            word_recordings = await self.word_recorder.record_words(
                unique_words, voice_id, model_id, effective_settings
            )

        narration = NarrationResource(
            id=new_narration_id(),
            text=text,
            full_audio=full_audio,
            word_timestamps=word_timestamps,
            word_recordings=word_recordings,
            metadata=NarrationMetadata(
                voice_id=voice_id,
                voice_name=voice_info.name,
                model_id=model_id,
                voice_settings=effective_settings,
                character_count=len(text),
                unique_words=len(unique_words),
                created_at=datetime.now(timezone.utc).isoformat(),
            ),
        )

        self.logger.info(
            f"Narration {narration.id} complete: {full_audio.size_bytes} bytes, "
            f"{full_audio.duration_ms}ms, {len(word_timestamps)} word timestamps, "
            f"{len(word_recordings)} word recordings"
        )
        return narration

    async def _generate_full_narration(
        self,
        text: str,
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> tuple[FullAudio, list[WordTimestamp]]:
        result = await asyncio.to_thread(
            self.client.synthesize_with_timestamps,
            text,
            voice_id=voice_id,
            model_id=model_id,
            voice_settings=voice_settings,
        )

        audio_base64 = result["audio_base64"]
        duration_ms = result.get("audio_duration_ms")

        characters = normalize_alignment(result.get("alignment"))
        if characters is not None:
            word_timestamps = process_alignment(characters)
            # Audio runs at least until the last aligned character ends.
            aligned_end_ms = max(timing.end_time_ms for timing in characters)
            if word_timestamps:
                aligned_end_ms = max(aligned_end_ms, word_timestamps[-1].end_time_ms)
            duration_ms = max(duration_ms or 0, aligned_end_ms)
        else:
            if not duration_ms:
                duration_ms = estimate_audio_duration(text)
            self.logger.info("No alignment data returned; estimating word timings")
            word_timestamps = estimate_word_timings(text, duration_ms, rng=self.rng)

        full_audio = FullAudio(
            url=f"data:{AUDIO_FORMAT};base64,{audio_base64}",
            duration_ms=round_half_up(duration_ms),
            size_bytes=math.floor(len(audio_base64) * 0.75),
            format=AUDIO_FORMAT,
        )
        return full_audio, word_timestamps
