"""Media generation services - fal.ai integration."""
from typing import Optional, Dict, Any

import fal_client
from pydantic import ValidationError

from common.error_messages import (
    ErrorCode,
    RequestValidationError,
    ConfigurationError,
    UnsupportedMediaTypeError,
    ProviderError,
)
from generation.models import (
    GenerationRequest,
    MediaType,
    MotionStrength,
    ImageSize,
    ProviderCall,
    ImageResult,
    VideoResult,
    lookup_media_type,
)
from generation.prompts import enhance_prompt
from utils.logger import get_logger

logger = get_logger("generation.services")


TEXT_TO_IMAGE_MODEL = "fal-ai/flux/dev"
IMAGE_TO_IMAGE_MODEL = "fal-ai/flux/dev/image-to-image"
TEXT_TO_VIDEO_MODEL = "fal-ai/fast-svd/text-to-video"
IMAGE_TO_VIDEO_MODEL = "fal-ai/fast-svd"

NUM_INFERENCE_STEPS = 28
GUIDANCE_SCALE = 3.5
IMAGE_TO_IMAGE_STRENGTH = 0.75
VIDEO_FPS = 24

ASPECT_RATIO_DIMENSIONS: Dict[str, ImageSize] = {
    "1:1": ImageSize(width=1024, height=1024),
    "16:9": ImageSize(width=1344, height=768),
    "9:16": ImageSize(width=768, height=1344),
}

VIDEO_SIZES: Dict[str, str] = {
    "16:9": "landscape_16_9",
    "9:16": "portrait_9_16",
}
DEFAULT_VIDEO_SIZE = "square"

MOTION_BUCKET_IDS: Dict[MotionStrength, int] = {
    MotionStrength.LOW: 127,
    MotionStrength.MEDIUM: 180,
    MotionStrength.HIGH: 255,
}


def get_aspect_ratio_dimensions(ratio: str) -> ImageSize:
    """Pixel dimensions for an aspect ratio; unknown ratios get the square size."""
    return ASPECT_RATIO_DIMENSIONS.get(ratio, ASPECT_RATIO_DIMENSIONS["1:1"])


def get_video_size(ratio: str) -> str:
    """Provider video-size token for an aspect ratio."""
    return VIDEO_SIZES.get(ratio, DEFAULT_VIDEO_SIZE)


def get_motion_bucket_id(strength: Optional[MotionStrength]) -> int:
    return MOTION_BUCKET_IDS[strength or MotionStrength.MEDIUM]


def parse_media_type(media_type: str) -> MediaType:
    mode = lookup_media_type(media_type)
    if mode is None:
        raise UnsupportedMediaTypeError()
    return mode


def validate_request(request: GenerationRequest) -> None:
    """
    Check the mode-specific required fields.

    A prompt is required for every mode except image-to-video, and a source
    image is required for the image-conditioned modes. Unknown modes pass
    through so the builder can reject them.

    Raises:
        RequestValidationError: if a required field is missing
    """
    if not request.prompt and request.media_type != MediaType.IMAGE_TO_VIDEO.value:
        raise RequestValidationError(error_code=ErrorCode.PROMPT_REQUIRED)

    needs_image = request.media_type in (MediaType.IMAGE_TO_IMAGE.value, MediaType.IMAGE_TO_VIDEO.value)
    if needs_image and not request.source_image:
        raise RequestValidationError(error_code=ErrorCode.SOURCE_IMAGE_REQUIRED)


def build_provider_call(request: GenerationRequest) -> ProviderCall:
    """
    Translate a request into the provider model id and input arguments.

    Args:
        request: A validated generation request

    Returns:
        ProviderCall with model_id and arguments

    Raises:
        UnsupportedMediaTypeError: if media_type is not one of the four modes
    """
    media_type = parse_media_type(request.media_type)
    enhanced_prompt = enhance_prompt(request.prompt, request.style, request)

    if media_type == MediaType.TEXT_TO_IMAGE:
        dimensions = get_aspect_ratio_dimensions(request.aspect_ratio)
        return ProviderCall(
            model_id=TEXT_TO_IMAGE_MODEL,
            arguments={
                "prompt": enhanced_prompt,
                "image_size": dimensions.model_dump(),
                "num_inference_steps": NUM_INFERENCE_STEPS,
                "guidance_scale": GUIDANCE_SCALE,
                "num_images": 1,
            },
        )

    if media_type == MediaType.IMAGE_TO_IMAGE:
        dimensions = get_aspect_ratio_dimensions(request.aspect_ratio)
        return ProviderCall(
            model_id=IMAGE_TO_IMAGE_MODEL,
            arguments={
                "prompt": enhanced_prompt,
                "image_url": request.source_image,
                "image_size": dimensions.model_dump(),
                "num_inference_steps": NUM_INFERENCE_STEPS,
                "guidance_scale": GUIDANCE_SCALE,
                "strength": IMAGE_TO_IMAGE_STRENGTH,
            },
        )

    video_arguments: Dict[str, Any] = {
        "video_size": get_video_size(request.aspect_ratio),
        "motion_bucket_id": get_motion_bucket_id(request.motion_strength),
        "fps": VIDEO_FPS,
    }

    if media_type == MediaType.TEXT_TO_VIDEO:
        return ProviderCall(
            model_id=TEXT_TO_VIDEO_MODEL,
            arguments={"prompt": enhanced_prompt, **video_arguments},
        )

    # image-to-video: the endpoint is conditioned on the image alone
    return ProviderCall(
        model_id=IMAGE_TO_VIDEO_MODEL,
        arguments={"image_url": request.source_image, **video_arguments},
    )


def extract_media_url(media_type: str, response: Any) -> str:
    """
    Pull the media URL out of a provider response.

    Image modes return {"images": [{"url": ...}, ...]}, video modes return
    {"video": {"url": ...}}.

    Raises:
        ProviderError: if the response does not have the expected shape
    """
    mode = parse_media_type(media_type)
    try:
        if mode.is_video:
            return VideoResult.model_validate(response).video.url
        return ImageResult.model_validate(response).images[0].url
    except ValidationError as e:
        logger.error(f"Unexpected provider response for {mode.value}: {e}")
        raise ProviderError(error_code=ErrorCode.NO_CONTENT_GENERATED)


def generate_media(
    request: GenerationRequest,
    api_key: str,
    client: Optional[Any] = None,
) -> str:
    """
    Run one generation job and return the URL of the produced media.

    Args:
        request: The generation request
        api_key: fal.ai credential
        client: Object exposing subscribe(application, arguments=..., with_logs=...);
                a fal_client.SyncClient is created from api_key when omitted

    Returns:
        URL of the generated image or video

    Raises:
        RequestValidationError: missing prompt or source image
        ConfigurationError: api_key is empty
        UnsupportedMediaTypeError: unknown media type
        ProviderError: the provider call failed or returned no media
    """
    validate_request(request)

    if not api_key:
        raise ConfigurationError("FAL_KEY not configured. Please set FAL_KEY environment variable.")

    call = build_provider_call(request)
    logger.info(
        f"Submitting {request.media_type} job to {call.model_id} "
        f"(aspect_ratio: {request.aspect_ratio}, style: {request.style})"
    )
    if request.video_duration:
        logger.debug(f"Requested video duration {request.video_duration}s is not forwarded to {call.model_id}")

    if client is None:
        client = fal_client.SyncClient(key=api_key)

    try:
        response = client.subscribe(call.model_id, arguments=call.arguments, with_logs=False)
    except Exception as e:
        logger.error(f"Provider call to {call.model_id} failed: {e}")
        raise ProviderError(str(e) or None) from e

    url = extract_media_url(request.media_type, response)
    logger.info(f"Generation completed for {request.media_type}: {url}")
    return url
