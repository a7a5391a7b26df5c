"""FastAPI router for face shape and hairstyle suggestion endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from hairstyle_advisor import config
from hairstyle_advisor.config import logger
from hairstyle_advisor.core import storage_ops
from hairstyle_advisor.core.face_shape import describe_face_shape, detect_face_shape
from hairstyle_advisor.models import Classification, FaceShape
from hairstyle_advisor.services.suggestion_service import (
    SuggestionService,
    get_suggestion_service,
)

from .models import FaceShapeResponse, SuggestionResponse
from .utils import build_suggestion_response, read_photo

router = APIRouter(prefix="/api/v1", tags=["Hairstyles"])


@router.post("/face-shape", response_model=FaceShapeResponse)
async def classify_face_shape(
    photo: UploadFile = File(..., description="Front-facing photo"),
) -> FaceShapeResponse:
    """Classify the face shape in an uploaded photo."""

    data = await read_photo(photo)
    classification = detect_face_shape(data)

    return FaceShapeResponse(
        success=True,
        face_shape=classification.face_shape.value,
        label=classification.face_shape.label,
        confidence=classification.confidence,
        message=describe_face_shape(classification.face_shape),
    )


@router.post("/hairstyles", response_model=SuggestionResponse)
async def suggest_hairstyles(
    photo: UploadFile = File(..., description="Front-facing photo"),
    face_shape: Optional[FaceShape] = Form(
        default=None, description="Known face shape; detected when omitted"
    ),
    service: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionResponse:
    """Return five hairstyle suggestions guided by the face shape."""

    data = await read_photo(photo)

    if face_shape is not None:
        classification = Classification(face_shape=face_shape, confidence=1.0)
    else:
        classification = detect_face_shape(data)

    logger.info(
        "Hairstyle suggestion request received",
        extra={"face_shape": classification.face_shape.value},
    )

    result = await service.suggest(data, classification)
    return build_suggestion_response(result)


@router.post("/hairstyles/direct", response_model=SuggestionResponse)
async def suggest_hairstyles_direct(
    photo: UploadFile = File(..., description="Front-facing photo"),
    service: SuggestionService = Depends(get_suggestion_service),
) -> SuggestionResponse:
    """Return five hairstyle suggestions; the model infers the face shape itself."""

    data = await read_photo(photo)
    logger.info("Direct hairstyle suggestion request received")

    result = await service.suggest(data, None)
    return build_suggestion_response(result)


@router.get("/health")
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "hairstyle-advisor-api",
        "version": "1.0.0",
        "gemini_configured": bool(config.GEMINI_KEY),
        "storage_configured": storage_ops.is_configured(),
        "image_generation_enabled": config.ENABLE_IMAGE_GENERATION,
    }
