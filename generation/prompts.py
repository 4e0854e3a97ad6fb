"""Prompt enhancement - style and motion descriptors appended to the user's prompt."""
from typing import Dict, Optional

from generation.models import GenerationRequest, MotionStrength, SceneCount


STYLE_MODIFIERS: Dict[str, str] = {
    "realistic": "highly detailed, photorealistic, 8k quality",
    "anime": "anime style, vibrant colors, detailed illustration",
    "2d": "2D art style, flat colors, artistic illustration",
    "3d": "3D rendered, high quality CGI, detailed modeling",
    "cinematic": "cinematic lighting, film quality, dramatic composition",
    "oil-painting": "oil painting style, textured brushstrokes, classical art",
    "watercolor": "watercolor painting style, soft colors, artistic",
}

MOTION_DESCRIPTORS: Dict[MotionStrength, str] = {
    MotionStrength.HIGH: "dynamic motion, energetic movement",
    MotionStrength.LOW: "subtle motion, gentle movement",
}
DEFAULT_MOTION_DESCRIPTOR = "smooth natural motion"

CHARACTER_CONSISTENCY_SUFFIX = "consistent character appearance throughout"
MULTI_SCENE_SUFFIX = "multiple dynamic scenes, seamless transitions"
LOOP_SUFFIX = "seamless loop, continuous motion"


def get_motion_descriptor(strength: Optional[MotionStrength]) -> str:
    """Motion phrase for a strength; medium and unset share the default."""
    return MOTION_DESCRIPTORS.get(strength, DEFAULT_MOTION_DESCRIPTOR)


def enhance_prompt(prompt: str, style: str, request: GenerationRequest) -> str:
    """
    Append style and motion descriptors to a prompt.

    The style descriptor is added for every mode when the style key is known.
    Video modes additionally get a motion descriptor and, when requested,
    character consistency, multi-scene and loop descriptors, in that order.

    Args:
        prompt: The user's prompt (may be empty for image-to-video)
        style: Style key looked up in STYLE_MODIFIERS
        request: Full request, used for the mode and video options

    Returns:
        The enhanced prompt
    """
    enhanced = prompt

    modifier = STYLE_MODIFIERS.get(style)
    if modifier:
        enhanced = f"{enhanced}, {modifier}"

    mode = request.mode
    if mode is not None and mode.is_video:
        enhanced += f", {get_motion_descriptor(request.motion_strength)}"

        if request.character_consistency:
            enhanced += f", {CHARACTER_CONSISTENCY_SUFFIX}"

        if request.scene_count == SceneCount.MULTI:
            enhanced += f", {MULTI_SCENE_SUFFIX}"

        if request.loopable:
            enhanced += f", {LOOP_SUFFIX}"

    return enhanced
