"""Word Recorder - individual word clips, requested in paced concurrent batches."""

import asyncio
import base64
import time
from typing import Any, Awaitable, Callable, Optional

from small_tales.core.config import Settings
from small_tales.models.schemas import VoiceSettings, WordRecording
from small_tales.services.tts_client import ElevenLabsClient
from small_tales.utils.error_handler import format_error_message, get_fallback_suggestion

AUDIO_FORMAT = "audio/mpeg"
CARRIER_PHRASE = "The word is {word}."

# Short words that are often mispronounced when synthesized alone.
SHORT_WORDS = frozenset(
    [
        "a", "an", "the", "to", "of", "in", "on", "at", "by", "up", "it", "is", "be", "or", "as",
        "no", "so", "we", "he", "me", "my", "go", "do", "if", "am", "us", "oh", "ah", "hi", "ok",
        "um", "eh", "i", "you", "she", "they", "and", "but", "for", "nor", "yet",
    ]
)


def needs_word_prefix(word: str) -> bool:
    """True for short words (3 letters or less) that need a carrier phrase."""
    return len(word) <= 3 and word.lower() in SHORT_WORDS


def text_for_word(word: str) -> str:
    """Text sent to the provider for a single word."""
    if needs_word_prefix(word):
        return CARRIER_PHRASE.format(word=word)
    return word


def to_data_uri(audio: bytes, media_type: str = AUDIO_FORMAT) -> str:
    """Encode audio bytes as a base64 data URI."""
    return f"data:{media_type};base64,{base64.b64encode(audio).decode('ascii')}"


class WordRecorder:
    """Synthesizes one clip per word, tolerating individual failures."""

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        client: Optional[ElevenLabsClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the recorder.

        Args:
            settings: Application settings (batch size and delay)
            logger: Logger instance
            client: ElevenLabs client (created from settings if omitted)
            sleep: Async sleep used between batches
        """
        self.settings = settings
        self.logger = logger
        self.client = client or ElevenLabsClient(settings, logger)
        self.batch_size = settings.word_batch_size
        self.batch_delay = settings.word_batch_delay_seconds
        self._sleep = sleep

    def record_word(
        self,
        word: str,
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> WordRecording:
        """Synthesize a single word (blocking)."""
        text_used = text_for_word(word)
        has_prefix = text_used != word
        self.logger.debug(
            f"Generating recording for word '{word}' {'with' if has_prefix else 'without'} prefix"
        )

        audio = self.client.synthesize(
            text_used,
            voice_id=voice_id,
            model_id=model_id,
            voice_settings=voice_settings.for_single_word(),
        )
        return WordRecording(
            url=to_data_uri(audio),
            size_bytes=len(audio),
            format=AUDIO_FORMAT,
            text_used=text_used,
            has_prefix=has_prefix,
        )

    async def record_words(
        self,
        words: list[str],
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings,
    ) -> dict[str, WordRecording]:
        """
        Record every word, batch by batch.

        Requests inside a batch run concurrently and the batch waits until all
        of them have settled. Failed words are logged and left out of the result.

        Args:
            words: Unique normalized words
            voice_id: ElevenLabs voice ID
            model_id: ElevenLabs model ID
            voice_settings: Full-narration voice settings

        Returns:
            Mapping of word to recording for the words that succeeded
        """
        recordings: dict[str, WordRecording] = {}
        if not words:
            return recordings

        total_batches = (len(words) + self.batch_size - 1) // self.batch_size
        start_time = time.time()

        for batch_index, offset in enumerate(range(0, len(words), self.batch_size)):
            batch = words[offset : offset + self.batch_size]
            results = await asyncio.gather(
                *(
                    asyncio.to_thread(self.record_word, word, voice_id, model_id, voice_settings)
                    for word in batch
                ),
                return_exceptions=True,
            )

            for word, result in zip(batch, results):
                if isinstance(result, BaseException):
                    if not isinstance(result, Exception):
                        raise result
                    self.logger.warning(
                        format_error_message(
                            "Word recording",
                            result,
                            context={"word": word},
                            suggestion=get_fallback_suggestion("Word Recording", result),
                        )
                    )
                    continue
                recordings[word] = result

            self.logger.debug(
                f"Word batch {batch_index + 1}/{total_batches} done: "
                f"{len(recordings)}/{len(words)} words recorded so far"
            )

            if offset + self.batch_size < len(words) and self.batch_delay > 0:
                await self._sleep(self.batch_delay)

        elapsed = time.time() - start_time
        self.logger.info(
            f"Word recordings complete: {len(recordings)}/{len(words)} successful in {elapsed:.2f}s"
        )
        return recordings
