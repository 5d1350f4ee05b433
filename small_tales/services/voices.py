"""Narration voice catalog and voice setting presets."""

from typing import Optional

from small_tales.models.schemas import VoiceInfo, VoiceSettings

CUSTOM_VOICE_NAME = "Custom Voice"

NARRATION_VOICES: dict[str, VoiceInfo] = {
    # Female storytelling voices
    "clara": VoiceInfo(id="8LVfoRdkh4zgjr8v5ObE", name="Clara", gender="female", description="Calm, warm storytelling voice"),
    "domi": VoiceInfo(id="AZnzlk1XvdvUeBnXmlld", name="Domi", gender="female", description="Strong, confident narrator"),
    "bella": VoiceInfo(id="EXAVITQu4vr4xnSDxMaL", name="Bella", gender="female", description="Friendly, engaging voice"),
    "aria": VoiceInfo(id="9BWtsMINqrJLrRacOk9x", name="Aria", gender="female", description="Calm, informative voice"),
    "amelia": VoiceInfo(id="ZF6FPAbjXT4488VcRRnw", name="Amelia", gender="female", description="Clear, expressive, British accent narrator"),
    # Male storytelling voices
    "adam": VoiceInfo(id="pNInz6obpgDQGcFmaJgB", name="Adam", gender="male", description="Deep, authoritative narrator"),
    "sam": VoiceInfo(id="yoZ06aMxZJJ28mfd3POQ", name="Sam", gender="male", description="Clear, professional voice"),
    "josh": VoiceInfo(id="TxGEqnHWrfWFTfGW9XjX", name="Josh", gender="male", description="Deep, authoritative narrator"),
    "liam": VoiceInfo(id="TX3LPaxmHKxFdv7VOQHJ", name="Liam", gender="male", description="Young, energetic warm narrator"),
    # Child-friendly
    "dorothy": VoiceInfo(id="ThT5KcBeYPX3keUQqHPh", name="Dorothy", gender="female", description="Gentle, child-friendly voice"),
}

VOICE_PRESETS: dict[str, VoiceSettings] = {
    "storytelling": VoiceSettings(stability=0.5, similarity_boost=0.75, style=0.0, use_speaker_boost=True),
    "dramatic": VoiceSettings(stability=0.3, similarity_boost=0.8, style=0.2, use_speaker_boost=True),
    "calm": VoiceSettings(stability=0.7, similarity_boost=0.7, style=0.0, use_speaker_boost=False),
    "energetic": VoiceSettings(stability=0.2, similarity_boost=0.9, style=0.3, use_speaker_boost=True),
    "children": VoiceSettings(stability=0.6, similarity_boost=0.8, style=0.1, use_speaker_boost=True),
}


def get_voice_info(voice_id: str) -> VoiceInfo:
    """Look up a voice by ID, falling back to a custom voice entry."""
    for voice in NARRATION_VOICES.values():
        if voice.id == voice_id:
            return voice
    return VoiceInfo(id=voice_id, name=CUSTOM_VOICE_NAME, description="Custom voice")


def resolve_voice_id(voice: Optional[str]) -> Optional[str]:
    """Accept either a catalog key ("clara") or a raw voice ID."""
    if not voice:
        return None
    entry = NARRATION_VOICES.get(voice.lower())
    return entry.id if entry else voice


def get_voice_preset(name: str) -> VoiceSettings:
    """
    Get a voice settings preset by name.

    Raises:
        KeyError: If the preset does not exist
    """
    try:
        return VOICE_PRESETS[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown voice preset '{name}'. Available: {', '.join(VOICE_PRESETS)}") from None
