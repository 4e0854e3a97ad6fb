"""Media generation Pydantic models."""
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaType(str, Enum):
    """Generation modes offered to the client."""
    TEXT_TO_IMAGE = "text-to-image"
    IMAGE_TO_IMAGE = "image-to-image"
    TEXT_TO_VIDEO = "text-to-video"
    IMAGE_TO_VIDEO = "image-to-video"

    @property
    def is_video(self) -> bool:
        return self in (MediaType.TEXT_TO_VIDEO, MediaType.IMAGE_TO_VIDEO)


class AspectRatio(str, Enum):
    """Output frame proportions."""
    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class MotionStrength(str, Enum):
    """Amount of motion requested for video modes."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SceneCount(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


class GenerationRequest(BaseModel):
    """One generation job, as posted by the client."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Kept as a plain string so unknown modes surface as "Unsupported media type"
    media_type: str = Field("", alias="mediaType", description="Generation mode, e.g. text-to-image")
    prompt: str = Field("", description="Free-text prompt (optional for image-to-video)")
    aspect_ratio: str = Field(AspectRatio.SQUARE.value, alias="aspectRatio", description="1:1, 16:9 or 9:16")
    style: str = Field("realistic", description="Style key, e.g. anime or watercolor")
    motion_strength: Optional[MotionStrength] = Field(None, alias="motionStrength", description="Video motion amount")
    scene_count: Optional[SceneCount] = Field(None, alias="sceneCount", description="Single or multi-scene video")
    character_consistency: bool = Field(False, alias="characterConsistency", description="Keep characters consistent across the video")
    loopable: bool = Field(False, description="Ask for a seamlessly looping video")
    video_duration: Optional[int] = Field(None, alias="videoDuration", description="Requested duration in seconds (not forwarded to the provider)")
    source_image: Optional[str] = Field(None, alias="sourceImage", description="Data URL or remote URL of the conditioning image")

    @field_validator("media_type", "prompt", "aspect_ratio", "style", mode="before")
    @classmethod
    def _null_to_fallback(cls, value: Any, info) -> Any:
        # An explicit null means "not given"; a null style means no style descriptor
        if value is None:
            return NULL_FALLBACKS[info.field_name]
        return value

    @property
    def mode(self) -> Optional[MediaType]:
        """The media type as an enum, or None when it is not one of the four modes."""
        return lookup_media_type(self.media_type)


NULL_FALLBACKS: Dict[str, str] = {
    "media_type": "",
    "prompt": "",
    "aspect_ratio": AspectRatio.SQUARE.value,
    "style": "",
}


def lookup_media_type(value: str) -> Optional[MediaType]:
    try:
        return MediaType(value)
    except ValueError:
        return None


class GenerationResponse(BaseModel):
    """Successful generation: URL of the produced media."""
    result: str = Field(..., description="URL of the generated image or video")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")


class GenerationOptions(BaseModel):
    """Selectable values a client can offer for each option."""
    model_config = ConfigDict(populate_by_name=True)

    media_types: List[str] = Field(..., alias="mediaTypes")
    styles: List[str]
    aspect_ratios: List[str] = Field(..., alias="aspectRatios")
    motion_strengths: List[str] = Field(..., alias="motionStrengths")
    scene_counts: List[str] = Field(..., alias="sceneCounts")


class ImageSize(BaseModel):
    width: int
    height: int


class ProviderCall(BaseModel):
    """Model identifier and input arguments for a single provider invocation."""
    model_id: str
    arguments: Dict[str, Any]


# Provider response shapes

class MediaFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str


class ImageResult(BaseModel):
    """Response shape of the image endpoints."""
    model_config = ConfigDict(extra="ignore")

    images: List[MediaFile] = Field(..., min_length=1)


class VideoResult(BaseModel):
    """Response shape of the video endpoints."""
    model_config = ConfigDict(extra="ignore")

    video: MediaFile
