"""Error Handler - narration error types and user-friendly error messages."""

from typing import Optional


class NarrationError(Exception):
    """Base class for narration pipeline failures."""


class NarrationInputError(NarrationError, ValueError):
    """Input rejected before any provider call (e.g. empty text)."""


class TTSConfigurationError(NarrationError, ValueError):
    """Speech provider is not configured (e.g. missing API key)."""


class TTSProviderError(NarrationError):
    """Speech provider request failed (non-2xx response or network error)."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


def format_error_message(
    operation: str,
    error: Exception,
    context: Optional[dict] = None,
    suggestion: Optional[str] = None,
) -> str:
    """
    Format a user-friendly error message.

    Args:
        operation: What operation was being performed (e.g., "Generating narration")
        error: The exception that occurred
        context: Additional context (e.g., {"voice_id": "8LVf...", "characters": 120})
        suggestion: Optional suggestion for how to fix the issue

    Returns:
        Formatted error message
    """
    error_type = type(error).__name__
    error_msg = str(error)

    context_str = ""
    if context:
        context_parts = [f"{k}={v}" for k, v in context.items()]
        context_str = f" ({', '.join(context_parts)})"

    message = f"❌ {operation} failed{context_str}\n"
    message += f"   Error: {error_type}: {error_msg}"

    if suggestion:
        message += f"\n   💡 Suggestion: {suggestion}"

    return message


def get_fallback_suggestion(service: str, error: Exception) -> Optional[str]:
    """
    Get a suggestion for how to handle a service failure.

    Args:
        service: Service name ("Narration" or "Word Recording")
        error: The exception

    Returns:
        Suggestion string or None
    """
    if isinstance(error, NarrationInputError):
        return "Provide non-empty story text to narrate."

    if isinstance(error, TTSConfigurationError):
        return "Set ELEVENLABS_API_KEY in your environment or .env file."

    error_msg = str(error).lower()
    status_code = getattr(error, "status_code", None)

    if service == "Narration":
        if status_code == 401 or "unauthorized" in error_msg:
            return "ElevenLabs rejected the API key. Check ELEVENLABS_API_KEY."
        elif status_code == 429 or "rate limit" in error_msg:
            return "Rate limit exceeded. Wait a few minutes and try again."
        elif "network" in error_msg or "timeout" in error_msg:
            return "Network error. Check your internet connection and try again."
        else:
            return "Narration generation failed. No audio was produced."

    elif service == "Word Recording":
        if status_code == 429 or "rate limit" in error_msg:
            return "Rate limit exceeded. Lower WORD_BATCH_SIZE or raise WORD_BATCH_DELAY_SECONDS."
        else:
            return "Word recording failed. The word is skipped; the narration is still usable."

    return None
