"""Media generation routes."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from common.error_messages import GenerationError, RequestValidationError
from config import Config
from generation.models import (
    GenerationRequest,
    GenerationResponse,
    GenerationOptions,
    ErrorResponse,
    MediaType,
    AspectRatio,
    MotionStrength,
    SceneCount,
)
from generation.prompts import STYLE_MODIFIERS
from generation.services import generate_media
from utils.logger import get_logger

logger = get_logger("generation")
router = APIRouter(tags=["generation"])


def get_provider_key() -> str:
    """Provider credential handed to the service layer."""
    return Config.FAL_KEY


def get_provider_client():
    """Provider client override hook; None lets the service build a fal client."""
    return None


@router.post(
    "/api/generate",
    response_model=GenerationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def generate(
    req: GenerationRequest,
    api_key: str = Depends(get_provider_key),
    client=Depends(get_provider_client),
):
    """
    Generate an image or a short video.

    Accepts:
      { mediaType, prompt, aspectRatio, style, motionStrength?, sceneCount?,
        characterConsistency?, loopable?, videoDuration?, sourceImage? }

    Returns:
      { result: "<media url>" } on success, { error: "..." } otherwise
    """
    logger.info(f"Generation request - mode: {req.media_type}, aspect_ratio: {req.aspect_ratio}, style: {req.style}")

    try:
        url = generate_media(req, api_key=api_key, client=client)
    except RequestValidationError as e:
        # Client errors, not retried
        logger.warning(f"Rejected {req.media_type} request: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.public_message})
    except GenerationError as e:
        logger.error(f"Generation failed for {req.media_type}: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.public_message})

    return GenerationResponse(result=url)


@router.get("/api/generate/options", response_model=GenerationOptions, response_model_by_alias=True)
def generation_options():
    """List the values a client can offer for each generation option."""
    return GenerationOptions(
        media_types=[m.value for m in MediaType],
        styles=list(STYLE_MODIFIERS.keys()),
        aspect_ratios=[r.value for r in AspectRatio],
        motion_strengths=[s.value for s in MotionStrength],
        scene_counts=[s.value for s in SceneCount],
    )
