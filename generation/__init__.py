"""Media generation module."""
from generation.models import GenerationRequest, MediaType
from generation.prompts import STYLE_MODIFIERS, enhance_prompt
from generation.services import build_provider_call, extract_media_url, generate_media

__all__ = [
    "GenerationRequest",
    "MediaType",
    "STYLE_MODIFIERS",
    "enhance_prompt",
    "build_provider_call",
    "extract_media_url",
    "generate_media"
]
