"""Tests for the Gemini REST client, using httpx.MockTransport."""

import base64
import json

import httpx
import pytest

from conftest import JPEG_BYTES, PNG_BYTES
from hairstyle_advisor.core import gemini, storage_ops
from hairstyle_advisor.core.errors import EmptyResponse, UpstreamUnavailable
from hairstyle_advisor.models import Classification, FaceShape


@pytest.fixture(autouse=True)
def gemini_key(monkeypatch):
    monkeypatch.setattr(gemini, "GEMINI_KEY", "test-key")


@pytest.fixture(autouse=True)
def no_storage(monkeypatch):
    monkeypatch.setattr(storage_ops, "is_configured", lambda: False)


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _text_body(text: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}]}, "finishReason": finish_reason}
        ]
    }


@pytest.mark.parametrize(
    "data, expected",
    [
        (PNG_BYTES, "image/png"),
        (JPEG_BYTES, "image/jpeg"),
        (b"GIF89a" + b"\x00" * 8, "image/gif"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
        (b"unknown", "image/jpeg"),
    ],
)
def test_detect_mime_type(data, expected):
    assert gemini.detect_mime_type(data) == expected


async def test_text_request_payload_and_result():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_text_body("## Intro\n## Bob\nNice."))

    classification = Classification(face_shape=FaceShape.ROUND, confidence=0.9)
    async with _client(handler) as client:
        text = await gemini.generate_recommendation_text(
            PNG_BYTES, classification, language="English", client=client
        )

    assert text == "## Intro\n## Bob\nNice."
    assert seen["url"].endswith(f"/{gemini.GEMINI_TEXT_MODEL}:generateContent")
    assert seen["key"] == "test-key"

    parts = seen["body"]["contents"][0]["parts"]
    assert "round face shape" in parts[0]["text"]
    assert parts[1]["inline_data"]["mime_type"] == "image/png"
    assert base64.b64decode(parts[1]["inline_data"]["data"]) == PNG_BYTES
    assert "English" in seen["body"]["systemInstruction"]["parts"][0]["text"]


async def test_direct_mode_prompt_asks_model_to_find_face_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_text_body("ok"))

    async with _client(handler) as client:
        await gemini.generate_recommendation_text(JPEG_BYTES, None, client=client)

    system_text = seen["body"]["systemInstruction"]["parts"][0]["text"]
    assert "Determine the face shape yourself" in system_text
    assert "Mongolian" in system_text


async def test_missing_key_is_upstream_unavailable(monkeypatch):
    monkeypatch.setattr(gemini, "GEMINI_KEY", None)

    with pytest.raises(UpstreamUnavailable):
        await gemini.generate_recommendation_text(JPEG_BYTES)


async def test_empty_photo_rejected():
    with pytest.raises(ValueError):
        await gemini.generate_recommendation_text(b"")


async def test_http_error_maps_to_upstream_unavailable():
    async with _client(lambda request: httpx.Response(429, text="quota")) as client:
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await gemini.generate_recommendation_text(JPEG_BYTES, client=client)

    assert exc_info.value.status_code == 429


async def test_network_error_maps_to_upstream_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with _client(handler) as client:
        with pytest.raises(UpstreamUnavailable):
            await gemini.generate_recommendation_text(JPEG_BYTES, client=client)


async def test_error_body_maps_to_upstream_unavailable():
    body = {"error": {"code": 403, "message": "denied"}}
    async with _client(lambda request: httpx.Response(200, json=body)) as client:
        with pytest.raises(UpstreamUnavailable):
            await gemini.generate_recommendation_text(JPEG_BYTES, client=client)


@pytest.mark.parametrize(
    "body",
    [
        {"candidates": []},
        {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
        {"candidates": [{"content": {"parts": []}, "finishReason": "SAFETY"}]},
    ],
)
async def test_blank_answers_are_empty_responses(body):
    async with _client(lambda request: httpx.Response(200, json=body)) as client:
        with pytest.raises(EmptyResponse):
            await gemini.generate_recommendation_text(JPEG_BYTES, client=client)


async def test_non_json_body_is_empty_response():
    async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(EmptyResponse):
            await gemini.generate_recommendation_text(JPEG_BYTES, client=client)


async def test_image_returned_as_data_uri_without_storage():
    image_b64 = base64.b64encode(PNG_BYTES).decode("utf-8")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "candidates": [
                    {
                        "content": {
                            "parts": [
                                {"text": "Here you go"},
                                {"inlineData": {"mimeType": "image/png", "data": image_b64}},
                            ]
                        }
                    }
                ]
            },
        )

    async with _client(handler) as client:
        url = await gemini.generate_hairstyle_image("a bob", JPEG_BYTES, client=client)

    assert url == f"data:image/png;base64,{image_b64}"
    assert seen["url"].endswith(f"/{gemini.GEMINI_IMAGE_MODEL}:generateContent")
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[0]["inline_data"]["mime_type"] == "image/jpeg"
    assert parts[1] == {"text": "a bob"}


async def test_image_uploaded_when_storage_configured(monkeypatch, mocker):
    monkeypatch.setattr(storage_ops, "is_configured", lambda: True)
    upload = mocker.patch.object(
        storage_ops,
        "upload_result_image",
        mocker.AsyncMock(return_value="https://storage.test/hairstyles/x.png"),
    )
    body = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "inline_data": {
                                "mime_type": "image/png",
                                "data": base64.b64encode(PNG_BYTES).decode("utf-8"),
                            }
                        }
                    ]
                }
            }
        ]
    }

    async with _client(lambda request: httpx.Response(200, json=body)) as client:
        url = await gemini.generate_hairstyle_image("a bob", client=client)

    assert url == "https://storage.test/hairstyles/x.png"
    upload.assert_awaited_once()
    assert upload.await_args.kwargs["file_bytes"] == PNG_BYTES
    assert upload.await_args.kwargs["content_type"] == "image/png"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="internal"),
        httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "no image"}]}}]}),
        httpx.Response(200, text="not json"),
    ],
)
async def test_image_failures_return_none(response):
    async with _client(lambda request: response) as client:
        assert await gemini.generate_hairstyle_image("a bob", client=client) is None


async def test_image_skipped_without_key(monkeypatch):
    monkeypatch.setattr(gemini, "GEMINI_KEY", None)

    assert await gemini.generate_hairstyle_image("a bob") is None
