"""Tests for provider request construction and response handling."""
import pytest

from common.error_messages import (
    ErrorCode,
    RequestValidationError,
    ConfigurationError,
    UnsupportedMediaTypeError,
    ProviderError,
)
from generation.models import GenerationRequest, MotionStrength
from generation.services import (
    build_provider_call,
    extract_media_url,
    generate_media,
    get_aspect_ratio_dimensions,
    get_motion_bucket_id,
    get_video_size,
    validate_request,
)
from tests.conftest import FakeFalClient, IMAGE_RESPONSE, VIDEO_RESPONSE

SOURCE_IMAGE = "data:image/png;base64,iVBORw0KGgo="


def make_request(**overrides):
    fields = {"mediaType": "text-to-image", "prompt": "a lighthouse at dusk", "style": "realistic"}
    fields.update(overrides)
    return GenerationRequest(**fields)


@pytest.mark.parametrize("ratio,size", [
    ("1:1", (1024, 1024)),
    ("16:9", (1344, 768)),
    ("9:16", (768, 1344)),
    ("4:3", (1024, 1024)),
])
def test_aspect_ratio_dimensions(ratio, size):
    dims = get_aspect_ratio_dimensions(ratio)
    assert (dims.width, dims.height) == size


@pytest.mark.parametrize("ratio,token", [
    ("16:9", "landscape_16_9"),
    ("9:16", "portrait_9_16"),
    ("1:1", "square"),
    ("21:9", "square"),
])
def test_video_size(ratio, token):
    assert get_video_size(ratio) == token


@pytest.mark.parametrize("strength,bucket", [
    (MotionStrength.LOW, 127),
    (MotionStrength.MEDIUM, 180),
    (MotionStrength.HIGH, 255),
    (None, 180),
])
def test_motion_bucket_id(strength, bucket):
    assert get_motion_bucket_id(strength) == bucket


def test_text_to_image_call():
    call = build_provider_call(make_request(aspectRatio="16:9"))

    assert call.model_id == "fal-ai/flux/dev"
    assert call.arguments == {
        "prompt": "a lighthouse at dusk, highly detailed, photorealistic, 8k quality",
        "image_size": {"width": 1344, "height": 768},
        "num_inference_steps": 28,
        "guidance_scale": 3.5,
        "num_images": 1,
    }


def test_image_to_image_call():
    call = build_provider_call(make_request(mediaType="image-to-image", aspectRatio="9:16", sourceImage=SOURCE_IMAGE))

    assert call.model_id == "fal-ai/flux/dev/image-to-image"
    assert call.arguments["image_url"] == SOURCE_IMAGE
    assert call.arguments["image_size"] == {"width": 768, "height": 1344}
    assert call.arguments["strength"] == 0.75
    assert call.arguments["num_inference_steps"] == 28
    assert call.arguments["guidance_scale"] == 3.5
    assert "num_images" not in call.arguments


def test_text_to_video_call():
    call = build_provider_call(make_request(mediaType="text-to-video", aspectRatio="16:9", motionStrength="high"))

    assert call.model_id == "fal-ai/fast-svd/text-to-video"
    assert call.arguments["video_size"] == "landscape_16_9"
    assert call.arguments["motion_bucket_id"] == 255
    assert call.arguments["fps"] == 24
    assert call.arguments["prompt"].endswith("dynamic motion, energetic movement")


def test_image_to_video_call_has_no_prompt():
    call = build_provider_call(make_request(mediaType="image-to-video", prompt="", sourceImage=SOURCE_IMAGE))

    assert call.model_id == "fal-ai/fast-svd"
    assert call.arguments == {
        "image_url": SOURCE_IMAGE,
        "video_size": "square",
        "motion_bucket_id": 180,
        "fps": 24,
    }


def test_unsupported_media_type():
    with pytest.raises(UnsupportedMediaTypeError) as exc_info:
        build_provider_call(make_request(mediaType="text-to-audio"))

    assert exc_info.value.message == "Unsupported media type"
    assert exc_info.value.status_code == 500


def test_extract_image_url():
    assert extract_media_url("text-to-image", IMAGE_RESPONSE) == "https://fal.media/files/out.png"


def test_extract_video_url():
    assert extract_media_url("image-to-video", VIDEO_RESPONSE) == "https://fal.media/files/out.mp4"


@pytest.mark.parametrize("media_type,response", [
    ("text-to-image", {"images": []}),
    ("image-to-image", VIDEO_RESPONSE),
    ("text-to-video", IMAGE_RESPONSE),
    ("text-to-video", None),
])
def test_extract_rejects_unexpected_shapes(media_type, response):
    with pytest.raises(ProviderError) as exc_info:
        extract_media_url(media_type, response)

    assert exc_info.value.error_code == ErrorCode.NO_CONTENT_GENERATED


def test_missing_prompt_is_rejected():
    with pytest.raises(RequestValidationError) as exc_info:
        validate_request(make_request(prompt=""))

    assert exc_info.value.message == "Prompt is required"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("media_type", ["image-to-image", "image-to-video"])
def test_missing_source_image_is_rejected(media_type):
    with pytest.raises(RequestValidationError) as exc_info:
        validate_request(make_request(mediaType=media_type))

    assert exc_info.value.message == "Source image is required for this mode"


def test_image_to_video_without_prompt_is_valid():
    validate_request(make_request(mediaType="image-to-video", prompt="", sourceImage=SOURCE_IMAGE))


def test_generate_media_calls_provider():
    fake = FakeFalClient(response=IMAGE_RESPONSE)

    url = generate_media(make_request(), api_key="key", client=fake)

    assert url == "https://fal.media/files/out.png"
    assert len(fake.calls) == 1
    assert fake.calls[0]["application"] == "fal-ai/flux/dev"
    assert fake.calls[0]["with_logs"] is False


def test_generate_media_requires_credential():
    fake = FakeFalClient(response=IMAGE_RESPONSE)

    with pytest.raises(ConfigurationError):
        generate_media(make_request(), api_key="", client=fake)

    assert fake.calls == []


def test_validation_runs_before_credential_check():
    with pytest.raises(RequestValidationError):
        generate_media(make_request(mediaType="image-to-image"), api_key="")


def test_provider_failure_keeps_message():
    fake = FakeFalClient(error=RuntimeError("Insufficient credits"))

    with pytest.raises(ProviderError) as exc_info:
        generate_media(make_request(mediaType="text-to-video"), api_key="key", client=fake)

    assert exc_info.value.message == "Insufficient credits"


def test_default_client_is_built_from_key(monkeypatch):
    created = {}

    def fake_sync_client(key):
        created["key"] = key
        return FakeFalClient(response=VIDEO_RESPONSE)

    monkeypatch.setattr("generation.services.fal_client.SyncClient", fake_sync_client)

    url = generate_media(make_request(mediaType="text-to-video"), api_key="secret-key")

    assert created["key"] == "secret-key"
    assert url == "https://fal.media/files/out.mp4"
