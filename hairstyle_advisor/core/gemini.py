import base64
import json
import uuid
from typing import Any, Dict, Optional, Tuple

import httpx

# Import from centralized config
from hairstyle_advisor.config import (
    GEMINI_API_BASE,
    GEMINI_IMAGE_MODEL,
    GEMINI_KEY,
    GEMINI_TEXT_MODEL,
    IMAGE_TIMEOUT_SECONDS,
    TEXT_TIMEOUT_SECONDS,
    logger,
)
from hairstyle_advisor.core import storage_ops
from hairstyle_advisor.core.errors import EmptyResponse, UpstreamUnavailable
from hairstyle_advisor.core.prompt_templates import (
    build_recommendation_prompt,
    build_system_instruction,
)
from hairstyle_advisor.models import Classification

logger.info(f"Gemini module initialized with API key: {bool(GEMINI_KEY)}")

_MIME_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
)

_EXTENSIONS = {
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/jpeg": "jpg",
}


def detect_mime_type(photo: bytes) -> str:
    """Guess the image MIME type from magic bytes, defaulting to JPEG."""
    for signature, mime_type in _MIME_SIGNATURES:
        if photo.startswith(signature):
            return mime_type
    if photo[:4] == b"RIFF" and photo[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def _inline_image_part(photo: bytes) -> Dict[str, Any]:
    return {
        "inline_data": {
            "mime_type": detect_mime_type(photo),
            "data": base64.b64encode(photo).decode("utf-8"),
        }
    }


async def _post_generate_content(
    model: str,
    payload: Dict[str, Any],
    timeout: float,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """POST a generateContent request and return the decoded JSON body."""
    url = f"{GEMINI_API_BASE}/{model}:generateContent"
    headers = {"Content-Type": "application/json", "x-goog-api-key": GEMINI_KEY}

    if client is not None:
        response = await client.post(url, json=payload, headers=headers, timeout=timeout)
    else:
        async with httpx.AsyncClient(timeout=timeout) as http_client:
            response = await http_client.post(url, json=payload, headers=headers)

    response.raise_for_status()
    return response.json()


def _extract_text(api_result: Dict[str, Any]) -> str:
    if "candidates" not in api_result or not api_result["candidates"]:
        raise EmptyResponse("Gemini API returned no candidates")

    candidate = api_result["candidates"][0]
    finish_reason = candidate.get("finishReason")
    if finish_reason and finish_reason != "STOP":
        logger.warning(f"Gemini text generation finished with reason: {finish_reason}")

    parts = candidate.get("content", {}).get("parts", [])
    text_output = "".join(part.get("text", "") for part in parts if "text" in part)

    if not text_output.strip():
        raise EmptyResponse("Gemini response contained no text output")

    return text_output


def _extract_image(api_result: Dict[str, Any]) -> Optional[Tuple[str, str]]:
    """Return ``(base64_data, mime_type)`` of the first image part, if any."""
    for candidate in api_result.get("candidates") or []:
        for part in candidate.get("content", {}).get("parts", []):
            # Check both camelCase and snake_case formats
            inline = part.get("inlineData") or part.get("inline_data")
            if inline and inline.get("data"):
                mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                return inline["data"], mime_type
    return None


async def generate_recommendation_text(
    photo: bytes,
    classification: Optional[Classification] = None,
    language: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Ask Gemini for hairstyle recommendations for the person in ``photo``.

    Args:
        photo: Encoded image bytes of the user's photo
        classification: Face shape to guide the answer; None selects direct mode
        language: Language the stylist should answer in
        client: Optional shared httpx client

    Returns:
        The Markdown text of the first candidate

    Raises:
        ValueError: If photo is empty
        UpstreamUnavailable: If the API key is missing or the call fails
        EmptyResponse: If the response holds no text
    """
    if not photo:
        raise ValueError("photo must be non-empty encoded image bytes")

    if not GEMINI_KEY:
        raise UpstreamUnavailable("GEMINI_KEY is not configured")

    mode = "direct" if classification is None else classification.face_shape.value
    system_instruction = build_system_instruction(classification, language)
    prompt = build_recommendation_prompt(classification, language)

    logger.info(f"Requesting hairstyle recommendations (mode={mode})")
    logger.debug(f"Recommendation prompt: {prompt}")

    payload = {
        "systemInstruction": {"parts": [{"text": system_instruction}]},
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}, _inline_image_part(photo)],
            }
        ],
        "generationConfig": {
            "temperature": 0.7,
            "topK": 32,
            "topP": 0.95,
            "maxOutputTokens": 4096,
        },
    }

    try:
        api_result = await _post_generate_content(
            GEMINI_TEXT_MODEL, payload, TEXT_TIMEOUT_SECONDS, client
        )
    except httpx.HTTPStatusError as exc:
        raise UpstreamUnavailable(
            f"Gemini API HTTP error: {exc.response.status_code} - {exc.response.text[:500]}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.RequestError as exc:
        raise UpstreamUnavailable(f"Network error calling Gemini API: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise EmptyResponse("Gemini API returned a non-JSON body") from exc

    if "error" in api_result:
        raise UpstreamUnavailable(f"Gemini API error: {api_result['error']}")

    text_output = _extract_text(api_result)
    logger.info(f"Recommendation text received ({len(text_output)} chars)")
    logger.debug(f"Recommendation raw text: {text_output[:500]}...")
    return text_output


async def generate_hairstyle_image(
    prompt: str,
    photo: Optional[bytes] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """
    Generate one hairstyle reference image.

    Best effort: every failure is logged and reported as None so the caller
    can apply its own retry and fallback policy.

    Args:
        prompt: Image prompt for one hairstyle
        photo: Optional source photo used as a visual guide
        client: Optional shared httpx client

    Returns:
        Public URL (or data URI when storage is not configured), or None
    """
    if not GEMINI_KEY:
        logger.warning("GEMINI_KEY is not configured; skipping image generation")
        return None

    content_parts = []
    if photo:
        content_parts.append(_inline_image_part(photo))
    content_parts.append({"text": prompt})

    payload = {
        "contents": [{"parts": content_parts}],
        "generationConfig": {
            "temperature": 0.4,
            "topK": 32,
            "topP": 1,
            "maxOutputTokens": 4096,
        },
    }

    try:
        api_result = await _post_generate_content(
            GEMINI_IMAGE_MODEL, payload, IMAGE_TIMEOUT_SECONDS, client
        )

        image = _extract_image(api_result)
        if image is None:
            logger.warning("No image found in Gemini API response")
            return None

        image_base64, mime_type = image
        return await _publish_image(image_base64, mime_type)

    except httpx.HTTPStatusError as exc:
        logger.error(
            f"Gemini image HTTP error: {exc.response.status_code} - {exc.response.text[:500]}"
        )
        return None
    except httpx.RequestError as exc:
        logger.error(f"Network error calling Gemini image API: {exc}")
        return None
    except Exception as exc:
        logger.error(f"Hairstyle image generation failed: {exc}")
        return None


async def _publish_image(image_base64: str, mime_type: str) -> str:
    """Upload generated bytes to storage, or inline them when storage is absent."""
    if not storage_ops.is_configured():
        return f"data:{mime_type};base64,{image_base64}"

    extension = _EXTENSIONS.get(mime_type, "png")
    return await storage_ops.upload_result_image(
        file_bytes=base64.b64decode(image_base64),
        filename=f"hairstyle_{uuid.uuid4().hex}.{extension}",
        content_type=mime_type,
    )


__all__ = [
    "detect_mime_type",
    "generate_recommendation_text",
    "generate_hairstyle_image",
]
