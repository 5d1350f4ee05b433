"""Word timing derivation from provider alignment data, with an estimating fallback."""

import math
import random
from typing import Any, Optional

from pydantic import ValidationError

from small_tales.models.schemas import CharacterTiming, WordTimestamp
from small_tales.utils.text_utils import clean_word, split_words

PROVIDER_CONFIDENCE = 1.0
ESTIMATED_CONFIDENCE = 0.5
JITTER_MIN = 0.8
JITTER_SPAN = 0.6  # jitter is drawn from [0.8, 1.4)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def normalize_alignment(alignment: Any) -> Optional[list[CharacterTiming]]:
    """
    Convert provider alignment data into a character timing stream.

    Accepts a list of ``{character, start_time_ms, end_time_ms, confidence}``
    records, or the ElevenLabs parallel-array form (``characters`` as strings
    plus ``character_start_times_seconds`` / ``character_end_times_seconds``).

    Returns:
        The character stream, or None when alignment is absent or malformed
    """
    if not isinstance(alignment, dict):
        return None

    characters = alignment.get("characters")
    if not isinstance(characters, list) or not characters:
        return None

    if all(isinstance(item, dict) for item in characters):
        try:
            return [CharacterTiming(**item) for item in characters]
        except (TypeError, ValidationError):
            return None

    if all(isinstance(item, str) for item in characters):
        starts = alignment.get("character_start_times_seconds")
        ends = alignment.get("character_end_times_seconds")
        if not isinstance(starts, list) or not isinstance(ends, list):
            return None
        if not len(starts) == len(ends) == len(characters):
            return None
        try:
            return [
                CharacterTiming(
                    character=char,
                    start_time_ms=float(start) * 1000,
                    end_time_ms=float(end) * 1000,
                )
                for char, start, end in zip(characters, starts, ends)
            ]
        except (TypeError, ValueError):
            return None

    return None


def process_alignment(characters: list[CharacterTiming]) -> list[WordTimestamp]:
    """
    Group a character timing stream into word timestamps.

    A word starts at its first character's start time and ends at its last
    character's end time. Whitespace or the end of the stream closes a word;
    the confidence of the closing character (default 1.0) is attached. Words
    are lower-cased and cleaned the same way as the unique word set.

    Args:
        characters: Ordered character timings

    Returns:
        Word timestamps in spoken order
    """
    timestamps: list[WordTimestamp] = []
    buffer: list[str] = []
    word_start = 0
    word_end = 0

    def flush(confidence: Optional[float]) -> None:
        word = clean_word("".join(buffer).strip().lower())
        if word:
            timestamps.append(
                WordTimestamp(
                    word=word,
                    start_time_ms=word_start,
                    end_time_ms=max(word_start, word_end),
                    confidence=PROVIDER_CONFIDENCE if confidence is None else confidence,
                )
            )
        buffer.clear()

    last_index = len(characters) - 1
    for index, timing in enumerate(characters):
        start = max(0, round_half_up(timing.start_time_ms))
        end = max(0, round_half_up(timing.end_time_ms))

        if timing.character.isspace():
            if buffer:
                flush(timing.confidence)
            continue

        if not buffer:
            word_start = start
        buffer.append(timing.character)
        word_end = end

        if index == last_index:
            flush(timing.confidence)

    return timestamps


def estimate_word_timings(
    text: str,
    total_duration_ms: float,
    rng: Optional[random.Random] = None,
) -> list[WordTimestamp]:
    """
    Spread words over a known duration when no alignment is available.

    Each word gets the average duration scaled by a random factor in
    [0.8, 1.4). Running time is tracked unrounded; emitted bounds are rounded.

    Args:
        text: Narrated text
        total_duration_ms: Audio duration in milliseconds
        rng: Optional random generator (seed it for reproducible output)

    Returns:
        Estimated word timestamps with confidence 0.5
    """
    words = split_words(text)
    if not words:
        return []

    rng = rng or random.Random()
    avg_word_duration = total_duration_ms / len(words)
    current_time = 0.0
    timestamps: list[WordTimestamp] = []

    for raw_word in words:
        word_duration = avg_word_duration * (JITTER_MIN + rng.random() * JITTER_SPAN)
        word = clean_word(raw_word.lower())
        if word:
            timestamps.append(
                WordTimestamp(
                    word=word,
                    start_time_ms=round_half_up(current_time),
                    end_time_ms=round_half_up(current_time + word_duration),
                    confidence=ESTIMATED_CONFIDENCE,
                )
            )
        current_time += word_duration

    return timestamps
