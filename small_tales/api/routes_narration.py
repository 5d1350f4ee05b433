"""FastAPI routes for narration generation."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from small_tales.core.config import Settings
from small_tales.core.logging_config import get_logger
from small_tales.models.schemas import (
    CostEstimate,
    EstimateCostRequest,
    GenerateNarrationRequest,
    GenerateNarrationResponse,
    NarrationResource,
    VoiceInfo,
    VoiceSettings,
)
from small_tales.services.narration_engine import NarrationEngine, estimate_cost
from small_tales.services.voices import NARRATION_VOICES, VOICE_PRESETS
from small_tales.storage.repository import NarrationRepository
from small_tales.utils.error_handler import (
    NarrationInputError,
    TTSConfigurationError,
    TTSProviderError,
    format_error_message,
    get_fallback_suggestion,
)

router = APIRouter(prefix="/narrations", tags=["narrations"])


def get_settings() -> Settings:
    from small_tales.core.config import settings

    return settings


def get_repository(settings: Settings = Depends(get_settings)) -> NarrationRepository:
    return NarrationRepository(settings, get_logger(__name__))


def get_narration_engine(settings: Settings = Depends(get_settings)) -> NarrationEngine:
    return NarrationEngine(settings, get_logger(__name__))


@router.post("/generate", response_model=GenerateNarrationResponse, response_model_by_alias=True)
async def generate_narration(
    request: GenerateNarrationRequest,
    engine: NarrationEngine = Depends(get_narration_engine),
    repository: NarrationRepository = Depends(get_repository),
) -> GenerateNarrationResponse:
    """
    Generate a narration resource and store it.

    Pipeline:
    full narration → word timestamps → unique words → word recordings → assembly
    """
    logger = get_logger(__name__, voice_id=request.voice_id)
    logger.info(f"Narration request: {len(request.text)} characters")

    try:
        narration = await engine.generate_narration(
            request.text,
            voice_id=request.voice_id,
            model_id=request.model_id,
            voice_settings=request.voice_settings,
            include_word_recordings=request.include_word_recordings,
        )
    except NarrationInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (TTSConfigurationError, TTSProviderError) as e:
        logger.error(
            format_error_message(
                "Generating narration",
                e,
                context={"characters": len(request.text)},
                suggestion=get_fallback_suggestion("Narration", e),
            )
        )
        status_code = 500 if isinstance(e, TTSConfigurationError) else 502
        raise HTTPException(status_code=status_code, detail=str(e))

    repository.save_narration(narration)
    return GenerateNarrationResponse(success=True, narration=narration)


@router.get("/voices", response_model=dict[str, VoiceInfo])
async def list_voices() -> dict[str, VoiceInfo]:
    """List the narration voice catalog."""
    return NARRATION_VOICES


@router.get("/presets", response_model=dict[str, VoiceSettings])
async def list_presets() -> dict[str, VoiceSettings]:
    """List the voice setting presets."""
    return VOICE_PRESETS


@router.post("/estimate", response_model=CostEstimate)
async def estimate_narration_cost(request: EstimateCostRequest) -> CostEstimate:
    """Estimate the provider cost of a narration."""
    return estimate_cost(request.text, request.include_word_recordings)


@router.get("/{narration_id}", response_model=NarrationResource, response_model_by_alias=True)
async def get_narration(
    narration_id: str,
    repository: NarrationRepository = Depends(get_repository),
) -> Any:
    """Get a stored narration."""
    narration = repository.load_narration(narration_id)
    if not narration:
        raise HTTPException(status_code=404, detail=f"Narration {narration_id} not found")
    return narration


@router.get("/{narration_id}/export")
async def export_narration(
    narration_id: str,
    repository: NarrationRepository = Depends(get_repository),
) -> Response:
    """Export a narration as a downloadable JSON file."""
    narration = repository.load_narration(narration_id)
    if not narration:
        raise HTTPException(status_code=404, detail=f"Narration {narration_id} not found")

    return Response(
        content=narration.model_dump_json(indent=2, by_alias=True),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{narration_id}.json"'},
    )
