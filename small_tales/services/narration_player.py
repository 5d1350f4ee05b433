"""Narration Player - playback state and word highlighting for a narration resource.

The player does not output sound. It tracks where playback would be using a
monotonic clock, which lets a front end (or a test with a fake clock) drive
word highlighting by calling ``tick()`` once per frame.
"""

import asyncio
import time
from typing import Any, Callable, Optional

from small_tales.core.logging_config import get_logger
from small_tales.models.schemas import (
    NarrationResource,
    PlaybackPosition,
    PlayerMetadata,
    WordRecording,
    WordTimestamp,
)

FRAME_INTERVAL_SECONDS = 1 / 60


class NarrationPlayer:
    """Playback controller bound to one narration resource."""

    def __init__(
        self,
        narration: NarrationResource,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[Any] = None,
    ):
        """
        Initialize the player.

        Args:
            narration: Narration resource to play
            clock: Monotonic clock returning seconds
            logger: Logger instance
        """
        self.narration = narration
        self.logger = logger or get_logger(__name__, narration_id=narration.id)
        self._clock = clock

        self.has_audio = False
        self.is_playing = False
        self.current_word_index = -1
        self.current_clip: Optional[WordRecording] = None
        self._position_ms = 0.0
        self._resumed_at: Optional[float] = None

        self.on_word_highlight: Optional[Callable[[WordTimestamp, int], None]] = None
        self.on_playback_start: Optional[Callable[[], None]] = None
        self.on_playback_pause: Optional[Callable[[], None]] = None
        self.on_playback_end: Optional[Callable[[], None]] = None

    @property
    def duration_ms(self) -> int:
        return self.narration.full_audio.duration_ms

    @property
    def current_time_ms(self) -> float:
        """Playback position of the full narration in milliseconds."""
        if self.is_playing and self._resumed_at is not None:
            elapsed = (self._clock() - self._resumed_at) * 1000
            return min(self._position_ms + elapsed, float(self.duration_ms))
        return self._position_ms

    def _set_position(self, position_ms: float) -> None:
        self._position_ms = position_ms
        self._resumed_at = self._clock() if self.is_playing else None

    def _find_word(self, time_ms: float) -> tuple[Optional[WordTimestamp], int]:
        for index, word in enumerate(self.narration.word_timestamps):
            if word.start_time_ms <= time_ms <= word.end_time_ms:
                return word, index
        return None, -1

    def _emit(self, callback: Optional[Callable], *args: Any) -> None:
        if callback is not None:
            callback(*args)

    def play_full(self) -> None:
        """Start the full narration from the beginning."""
        self.current_clip = None
        self.has_audio = True
        self.current_word_index = -1
        self.is_playing = True
        self._set_position(0.0)
        self.logger.debug("Playing full narration")
        self._emit(self.on_playback_start)
        self.tick()

    def play_word(self, word: str) -> bool:
        """
        Switch to the individual recording of a word.

        Returns:
            False when the word has no recording
        """
        recording = self.narration.word_recordings.get(word.lower())
        if recording is None:
            self.logger.warning(f"No recording found for word: {word}")
            return False

        if self.is_playing:
            self.pause()
        self.current_clip = recording
        self.has_audio = False
        return True

    def seek_to_word(self, word: str) -> bool:
        """
        Move the full narration position to the first occurrence of word.

        Returns:
            False when nothing is loaded or the word is not in the narration
        """
        if not self.has_audio:
            return False

        target = word.lower()
        for timestamp in self.narration.word_timestamps:
            if timestamp.word.lower() == target:
                self._set_position(float(timestamp.start_time_ms))
                return True
        return False

    def pause(self) -> None:
        if not self.has_audio:
            return
        self._position_ms = self.current_time_ms
        self._resumed_at = None
        self.is_playing = False
        self._emit(self.on_playback_pause)

    def resume(self) -> None:
        if not self.has_audio or self.is_playing:
            return
        self.is_playing = True
        self._resumed_at = self._clock()
        self._emit(self.on_playback_start)

    def stop(self) -> None:
        if not self.has_audio:
            return
        self.is_playing = False
        self.current_word_index = -1
        self._set_position(0.0)

    def tick(self) -> None:
        """Per-frame poll: fire highlight and end callbacks as the position moves."""
        if not self.is_playing:
            return

        time_ms = self.current_time_ms
        word, index = self._find_word(time_ms)
        if word is not None and index != self.current_word_index:
            self.current_word_index = index
            self._emit(self.on_word_highlight, word, index)

        if time_ms >= self.duration_ms:
            self.is_playing = False
            self.current_word_index = -1
            self._set_position(float(self.duration_ms))
            self._emit(self.on_playback_end)

    async def run(self, frame_interval: float = FRAME_INTERVAL_SECONDS) -> None:
        """Tick once per frame until playback pauses, stops or ends."""
        while self.is_playing:
            self.tick()
            if not self.is_playing:
                break
            await asyncio.sleep(frame_interval)

    def get_current_position(self) -> Optional[PlaybackPosition]:
        if not self.has_audio:
            return None

        time_ms = self.current_time_ms
        word, index = self._find_word(time_ms)
        return PlaybackPosition(
            time_ms=time_ms,
            progress=time_ms / self.duration_ms if self.duration_ms else 0.0,
            current_word=word,
            word_index=index,
        )

    def get_metadata(self) -> PlayerMetadata:
        return PlayerMetadata(
            duration_ms=self.duration_ms,
            word_count=len(self.narration.word_timestamps),
            unique_words=len(self.narration.word_recordings),
            voice=self.narration.metadata.voice_name,
            text=self.narration.text,
        )

    def has_word_recording(self, word: str) -> bool:
        return word.lower() in self.narration.word_recordings

    def get_available_words(self) -> list[str]:
        return list(self.narration.word_recordings)

    def destroy(self) -> None:
        """Stop playback and drop callbacks and loaded audio."""
        self.stop()
        self.has_audio = False
        self.current_clip = None
        self.on_word_highlight = None
        self.on_playback_start = None
        self.on_playback_pause = None
        self.on_playback_end = None
