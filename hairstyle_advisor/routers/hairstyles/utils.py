"""Utility helpers for the hairstyle router."""

from fastapi import HTTPException, UploadFile

from hairstyle_advisor import config
from hairstyle_advisor.config import logger
from hairstyle_advisor.models import SuggestionResult

from .models import HairstyleSuggestion, SuggestionResponse


async def read_photo(upload: UploadFile) -> bytes:
    """Read and validate an uploaded photo."""
    if upload.content_type and not upload.content_type.startswith("image/"):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported content type: {upload.content_type}",
        )

    data = await upload.read()
    await upload.close()

    if not data:
        raise HTTPException(status_code=400, detail="Uploaded photo is empty")
    if len(data) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Photo exceeds the {config.MAX_UPLOAD_BYTES} byte limit",
        )

    logger.debug(f"Photo received: {upload.filename} ({len(data)} bytes)")
    return data


def build_suggestion_response(result: SuggestionResult) -> SuggestionResponse:
    return SuggestionResponse(
        success=True,
        face_shape=result.face_shape_label,
        confidence=result.classification.confidence if result.classification else None,
        description=result.summary,
        markdown_content=result.raw_text,
        gender=result.gender,
        is_fallback=result.is_fallback,
        hairstyles=[HairstyleSuggestion(**record.to_dict()) for record in result.records],
    )
