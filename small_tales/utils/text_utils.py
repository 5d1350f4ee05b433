"""Text utility functions for narration processing."""

import re

MAX_WORD_LENGTH = 20
NARRATION_WORDS_PER_MINUTE = 175

# Dashes, sentence punctuation, brackets, quotes and symbols. The straight
# apostrophe is not in this class so contractions survive; typographic
# apostrophes are folded into it first.
_PUNCTUATION_RE = re.compile(r"[—–\-.,;:!?()\[\]\"“”‘’`~@#$%^&*+=<>{}|\\/]")
_WHITESPACE_RE = re.compile(r"\s+")
_LETTER_RE = re.compile(r"[a-zA-Z]")
_EDGE_RE = re.compile(r"^[^a-zA-Z']+|[^a-zA-Z']+$")


def clean_word(word: str) -> str:
    """Strip leading/trailing characters that are neither letters nor apostrophes."""
    return _EDGE_RE.sub("", word)


def split_words(text: str) -> list[str]:
    """Split text on whitespace runs, dropping empty tokens."""
    return [token for token in _WHITESPACE_RE.split(text) if token]


def extract_unique_words(text: str) -> list[str]:
    """
    Extract the distinct normalized words eligible for individual narration.

    Words are lower-cased, punctuation is removed (apostrophes inside
    contractions are kept), tokens longer than 20 characters or without a
    letter are dropped.

    Args:
        text: Raw story text

    Returns:
        Unique words in first-seen order
    """
    stripped = _PUNCTUATION_RE.sub(" ", text.lower().replace("’", "'"))

    unique: dict[str, None] = {}
    for token in split_words(stripped):
        if len(token) > MAX_WORD_LENGTH or not _LETTER_RE.search(token):
            continue
        word = clean_word(token)
        if word:
            unique[word] = None
    return list(unique)


def count_unique_words(text: str) -> int:
    """
    Count unique purely-alphabetic words, as used for cost estimates.

    Args:
        text: Raw story text

    Returns:
        Number of distinct alphabetic words of 1-20 characters
    """
    stripped = re.sub(r"[^A-Za-z0-9_\s]", " ", text.lower())
    words = {
        word
        for word in split_words(stripped)
        if len(word) <= MAX_WORD_LENGTH and re.fullmatch(r"[a-zA-Z]+", word)
    }
    return len(words)


def estimate_audio_duration(text: str, words_per_minute: int = NARRATION_WORDS_PER_MINUTE) -> int:
    """
    Estimate the spoken duration of text in milliseconds.

    Args:
        text: Text to estimate duration for
        words_per_minute: Average narration rate (default 175 WPM)

    Returns:
        Estimated duration in milliseconds
    """
    word_count = len(split_words(text))
    return round((word_count / words_per_minute) * 60 * 1000)


def extract_text_from_page(page_content: object) -> str:
    """
    Join the text of a story page's text elements.

    Args:
        page_content: Page content dict with an "elements" list

    Returns:
        Space-joined text of non-blank text elements, or "" when there are none
    """
    if not isinstance(page_content, dict) or not page_content.get("elements"):
        return ""

    texts = []
    for element in page_content["elements"]:
        if element.get("type") != "text":
            continue
        text = (element.get("properties") or {}).get("text") or ""
        if text.strip():
            texts.append(text)
    return " ".join(texts)
