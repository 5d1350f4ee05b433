"""Utility functions for the Small Tales narration service."""

from small_tales.utils.text_utils import (
    clean_word,
    count_unique_words,
    estimate_audio_duration,
    extract_text_from_page,
    extract_unique_words,
)

__all__ = [
    "clean_word",
    "count_unique_words",
    "estimate_audio_duration",
    "extract_text_from_page",
    "extract_unique_words",
]
