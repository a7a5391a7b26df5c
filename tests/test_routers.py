"""API tests for the hairstyle and saved-analysis routes."""

import pytest

from conftest import JPEG_BYTES
from hairstyle_advisor import config
from hairstyle_advisor.core import saved_ops
from hairstyle_advisor.routers.hairstyles import router as hairstyles_router

DEVICE = {"X-Device-Id": "device-123"}


def _upload(data: bytes = JPEG_BYTES, content_type: str = "image/jpeg") -> dict:
    return {"photo": ("face.jpg", data, content_type)}


# -------------------------
# Hairstyle routes
# -------------------------
def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "hairstyle-advisor-api"
    assert set(body) >= {"gemini_configured", "storage_configured", "image_generation_enabled"}


def test_classify_face_shape(client):
    response = client.post("/api/v1/face-shape", files=_upload())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["label"] == body["face_shape"].capitalize()
    assert 0.7 <= body["confidence"] <= 1.0
    assert body["message"]


def test_guided_suggestions_with_explicit_shape(client):
    response = client.post(
        "/api/v1/hairstyles", files=_upload(), data={"face_shape": "square"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["face_shape"] == "Square"
    assert body["confidence"] == 1.0
    assert body["gender"] == "female"
    assert body["is_fallback"] is False
    assert len(body["hairstyles"]) == 5
    assert body["hairstyles"][0]["name"] == "Textured Bob"
    assert body["hairstyles"][0]["is_ai_generated"] is True
    assert body["markdown_content"].startswith("You appear to be a woman")


def test_guided_suggestions_detect_shape_when_omitted(client, mocker):
    detect = mocker.spy(hairstyles_router, "detect_face_shape")

    response = client.post("/api/v1/hairstyles", files=_upload())

    assert response.status_code == 200
    detect.assert_called_once()
    assert response.json()["face_shape"] != "Custom"


def test_direct_suggestions(client):
    response = client.post("/api/v1/hairstyles/direct", files=_upload())

    assert response.status_code == 200
    body = response.json()
    assert body["face_shape"] == "Custom"
    assert body["confidence"] is None
    assert len(body["hairstyles"]) == 5


def test_unknown_face_shape_is_unprocessable(client):
    response = client.post(
        "/api/v1/hairstyles", files=_upload(), data={"face_shape": "triangle"}
    )

    assert response.status_code == 422


@pytest.mark.parametrize(
    "upload, status",
    [
        (("face.jpg", b"", "image/jpeg"), 400),
        (("notes.txt", b"hello", "text/plain"), 400),
    ],
)
def test_invalid_uploads_rejected(client, upload, status):
    response = client.post("/api/v1/hairstyles/direct", files={"photo": upload})

    assert response.status_code == status


def test_oversized_upload_rejected(client, monkeypatch):
    monkeypatch.setattr(config, "MAX_UPLOAD_BYTES", 16)

    response = client.post("/api/v1/face-shape", files=_upload())

    assert response.status_code == 413


# -------------------------
# Saved analysis routes
# -------------------------
SAVED_RECORD = {
    "id": "analysis-1",
    "device_id": "device-123",
    "face_shape": "Oval",
    "summary": "Balanced proportions.",
    "image_url": None,
    "suggestions": [
        {
            "id": "s1",
            "name": "Textured Bob",
            "description": "Frames the face.",
            "image_url": "https://cdn.test/textured-bob.png",
            "is_ai_generated": True,
            "is_favorite": False,
        }
    ],
    "created_at": "2026-01-01T00:00:00+00:00",
}


def test_saved_routes_require_device_id(client):
    response = client.get("/api/v1/saved")

    assert response.status_code == 400


def test_save_analysis(client, mocker):
    save = mocker.patch.object(
        saved_ops, "save_analysis", mocker.AsyncMock(return_value=SAVED_RECORD)
    )
    payload = {
        "face_shape": "Oval",
        "summary": "Balanced proportions.",
        "suggestions": [
            {
                "name": "Textured Bob",
                "description": "Frames the face.",
                "image_url": "https://cdn.test/textured-bob.png",
                "is_ai_generated": True,
            }
        ],
    }

    response = client.post("/api/v1/saved", json=payload, headers=DEVICE)

    assert response.status_code == 200
    assert response.json()["record"]["id"] == "analysis-1"
    kwargs = save.await_args.kwargs
    assert kwargs["device_id"] == "device-123"
    assert kwargs["suggestions"][0]["name"] == "Textured Bob"


def test_save_analysis_requires_suggestions(client):
    payload = {"face_shape": "Oval", "summary": "x", "suggestions": []}

    response = client.post("/api/v1/saved", json=payload, headers=DEVICE)

    assert response.status_code == 422


def test_save_analysis_storage_failure_is_500(client, mocker):
    mocker.patch.object(
        saved_ops, "save_analysis", mocker.AsyncMock(side_effect=RuntimeError("db down"))
    )
    payload = {
        "face_shape": "Custom",
        "summary": "x",
        "suggestions": [{"name": "Bob", "description": "Short."}],
    }

    response = client.post("/api/v1/saved", json=payload, headers=DEVICE)

    assert response.status_code == 500


def test_list_saved_analyses(client, mocker):
    listing = mocker.patch.object(
        saved_ops,
        "list_saved_analyses",
        mocker.AsyncMock(
            return_value={
                "records": [SAVED_RECORD],
                "total": 3,
                "limit": 1,
                "offset": 0,
                "has_more": True,
            }
        ),
    )

    response = client.get("/api/v1/saved?limit=1", headers=DEVICE)

    assert response.status_code == 200
    assert response.json()["has_more"] is True
    listing.assert_awaited_once_with(device_id="device-123", limit=1, offset=0)


@pytest.mark.parametrize("query", ["limit=0", "limit=101", "offset=-1"])
def test_list_saved_analyses_validates_paging(client, query):
    response = client.get(f"/api/v1/saved?{query}", headers=DEVICE)

    assert response.status_code == 400


def test_get_saved_analysis_of_other_device_is_404(client, mocker):
    mocker.patch.object(
        saved_ops, "get_saved_analysis", mocker.AsyncMock(return_value=SAVED_RECORD)
    )

    response = client.get("/api/v1/saved/analysis-1", headers={"X-Device-Id": "other"})

    assert response.status_code == 404


def test_get_saved_analysis(client, mocker):
    mocker.patch.object(
        saved_ops, "get_saved_analysis", mocker.AsyncMock(return_value=SAVED_RECORD)
    )

    response = client.get("/api/v1/saved/analysis-1", headers=DEVICE)

    assert response.status_code == 200
    assert response.json()["record"]["face_shape"] == "Oval"


@pytest.mark.parametrize("deleted, status", [(True, 200), (False, 404)])
def test_delete_saved_analysis(client, mocker, deleted, status):
    mocker.patch.object(
        saved_ops, "delete_saved_analysis", mocker.AsyncMock(return_value=deleted)
    )

    response = client.delete("/api/v1/saved/analysis-1", headers=DEVICE)

    assert response.status_code == status


def test_toggle_favorite(client, mocker):
    favorited = {
        **SAVED_RECORD,
        "suggestions": [{**SAVED_RECORD["suggestions"][0], "is_favorite": True}],
    }
    toggle = mocker.patch.object(
        saved_ops, "toggle_favorite", mocker.AsyncMock(return_value=favorited)
    )

    response = client.post(
        "/api/v1/saved/analysis-1/suggestions/s1/favorite", headers=DEVICE
    )

    assert response.status_code == 200
    assert response.json()["record"]["suggestions"][0]["is_favorite"] is True
    toggle.assert_awaited_once_with("analysis-1", "s1", "device-123")


def test_toggle_favorite_unknown_suggestion_is_404(client, mocker):
    mocker.patch.object(saved_ops, "toggle_favorite", mocker.AsyncMock(return_value=None))

    response = client.post(
        "/api/v1/saved/analysis-1/suggestions/nope/favorite", headers=DEVICE
    )

    assert response.status_code == 404
