import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

# Add src to sys.path
sys.path.append(os.path.join(os.path.dirname(__file__), "../src"))

from main import app
from app.common.models import PhotoInfo
from app.photo_info.services.extractor import PhotoInfoExtractor
from core.config import configs
from core.dependencies import get_photo_info_extractor

URL = "/api/photo-info"


@pytest.fixture
def client():
    return TestClient(app)


def upload(content, filename="photo.jpg"):
    return {"file": (filename, content, "image/jpeg")}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").status_code == 200


def test_photo_info(client, jpeg_bytes):
    resp = client.post(URL, files=upload(jpeg_bytes))
    assert resp.status_code == 200

    body = resp.json()
    assert body["make"] == "Apple"
    assert body["focal_length"] == 6.86
    assert body["gps_position"] == [51.5042361, -0.0465306, 6.49]
    assert body["gps_accuracy"]["grade"] == "A"
    assert body["gps_speed"] == {"value": 1.8, "unit": "km/h"}
    assert body["orientation"] == "landscape"
    assert body["date_time"] == "2024-10-19T01:01:24"
    assert body["original_tags"] is None


def test_photo_info_with_original_tags(client, jpeg_bytes):
    resp = client.post(URL, params={"include_original_tags": True}, files=upload(jpeg_bytes))
    assert resp.status_code == 200
    assert resp.json()["original_tags"]["Make"] == {"value": "Apple", "description": "Apple"}


def test_photo_info_unreadable_upload(client):
    resp = client.post(URL, files=upload(b"definitely not an image", "notes.txt"))
    assert resp.status_code == 200

    body = resp.json()
    assert body["make"] is None
    assert body["angle_of_view"] is None
    assert body["orientation"] == "square"


def test_upload_spelling_a_server_path(client, jpeg_path):
    resp = client.post(URL, files=upload(str(jpeg_path).encode()))
    assert resp.status_code == 200

    body = resp.json()
    assert body["make"] is None
    assert body["gps_position"] is None


def test_empty_upload(client):
    resp = client.post(URL, files=upload(b""))
    assert resp.status_code == 400


def test_mapped(client, jpeg_bytes):
    resp = client.post(f"{URL}/mapped", files=upload(jpeg_bytes))
    assert resp.status_code == 200

    body = resp.json()
    assert body["Make"]["display_name"] == "Camera Make"
    assert body["FocalLength"]["formatted_value"] == "6.86 mm"
    assert body["FNumber"]["formatted_value"] == "f/1.78"


def test_grouped(client, jpeg_bytes):
    resp = client.post(f"{URL}/grouped", files=upload(jpeg_bytes))
    assert resp.status_code == 200

    body = resp.json()
    assert body["camera"]["Camera Model"] == "iPhone 14 Pro"
    assert body["gps"]["Altitude"] == "6.49 m"
    assert body["vendor"] == {}
    assert len(body) == 8


def test_comprehensive(client, jpeg_bytes):
    resp = client.post(f"{URL}/comprehensive", files=upload(jpeg_bytes))
    assert resp.status_code == 200

    body = resp.json()
    assert body["original"]["model"] == "iPhone 14 Pro"
    assert body["original"]["original_tags"]["Model"]["description"] == "iPhone 14 Pro"
    assert body["mapped"]["Model"]["formatted_value"] == "iPhone 14 Pro"
    assert body["grouped"]["exposure"]["Aperture"] == "f/1.78"


def test_extractor_dependency_override(client, jpeg_bytes):
    extractor = MagicMock(spec=PhotoInfoExtractor)
    extractor.get_photo_info = AsyncMock(return_value=PhotoInfo(make="Leica"))
    app.dependency_overrides[get_photo_info_extractor] = lambda: extractor
    try:
        resp = client.post(URL, params={"debug": True}, files=upload(jpeg_bytes))
    finally:
        app.dependency_overrides.clear()

    assert resp.json()["make"] == "Leica"
    extractor.get_photo_info.assert_awaited_once_with(jpeg_bytes, include_original_tags=False, debug=True)


def test_metrics_endpoint(client):
    resp = client.get("/metrics/")
    assert resp.status_code == 200
    assert "photo_info_decode_failures_total" in resp.text


def test_upload_too_large(client, jpeg_bytes, monkeypatch):
    monkeypatch.setattr(configs, "MAX_UPLOAD_BYTES", 16)
    resp = client.post(URL, files=upload(jpeg_bytes))
    assert resp.status_code == 413


def test_upload_at_the_limit(client, jpeg_bytes, monkeypatch):
    monkeypatch.setattr(configs, "MAX_UPLOAD_BYTES", len(jpeg_bytes))
    resp = client.post(URL, files=upload(jpeg_bytes))
    assert resp.status_code == 200
    assert resp.json()["make"] == "Apple"
