"""Pytest configuration and shared fixtures."""
import os
import tempfile

import pytest

# Settings are read at import time; keep test runs away from real credentials and ./logs
os.environ["FAL_KEY"] = "test-fal-key"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="media_studio_logs_")

from fastapi.testclient import TestClient  # noqa: E402

from app import app  # noqa: E402
from generation.routes import get_provider_client, get_provider_key  # noqa: E402


IMAGE_RESPONSE = {
    "images": [{"url": "https://fal.media/files/out.png", "width": 1024, "height": 1024}],
    "seed": 42,
}
VIDEO_RESPONSE = {"video": {"url": "https://fal.media/files/out.mp4"}, "seed": 7}


class FakeFalClient:
    """Stands in for fal_client.SyncClient and records every subscribe call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def subscribe(self, application, arguments, with_logs=False):
        self.calls.append({"application": application, "arguments": arguments, "with_logs": with_logs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client():
    return FakeFalClient(response=IMAGE_RESPONSE)


@pytest.fixture
def api_key():
    return "test-fal-key"


@pytest.fixture
def client(fake_client, api_key):
    app.dependency_overrides[get_provider_client] = lambda: fake_client
    app.dependency_overrides[get_provider_key] = lambda: api_key
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
