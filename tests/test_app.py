"""Tests for application-level behaviour: health, error shapes, log masking."""
import json

from app import mask_sensitive_data


def test_healthz(client):
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_invalid_json_body_returns_400(client):
    resp = client.post("/api/generate", content=b"{not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_mask_sensitive_fields():
    masked = mask_sensitive_data({"prompt": "a cat", "FAL_KEY": "abc", "nested": [{"api_key": "xyz"}]})

    assert masked == {"prompt": "a cat", "FAL_KEY": "***MASKED***", "nested": [{"api_key": "***MASKED***"}]}


def test_mask_elides_data_urls_in_json_strings():
    body = json.dumps({"mediaType": "image-to-image", "sourceImage": "data:image/png;base64," + "A" * 5000})

    masked = mask_sensitive_data(body)

    assert "AAAA" not in masked
    assert "<data url," in masked
    assert json.loads(masked)["mediaType"] == "image-to-image"
