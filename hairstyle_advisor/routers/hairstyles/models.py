"""Pydantic models used by the hairstyle router."""

from typing import List, Optional

from pydantic import BaseModel, Field

from hairstyle_advisor.models import Gender


class FaceShapeResponse(BaseModel):
    """Response model for face shape classification."""

    success: bool
    face_shape: str = Field(..., description="Detected face shape category")
    label: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    message: str


class HairstyleSuggestion(BaseModel):
    """One recommended hairstyle."""

    name: str
    description: str
    image_url: Optional[str] = Field(None, description="Reference image URL")
    is_ai_generated: bool = False
    is_favorite: bool = False


class SuggestionResponse(BaseModel):
    """Response model for hairstyle suggestions."""

    success: bool
    face_shape: str = Field(..., description="Face shape label, or 'Custom' in direct mode")
    confidence: Optional[float] = None
    description: str = Field(..., description="Introductory analysis summary")
    markdown_content: Optional[str] = Field(
        None, description="Full Markdown answer from the stylist model"
    )
    gender: Gender
    is_fallback: bool = Field(
        ..., description="True when the static suggestion set was served"
    )
    hairstyles: List[HairstyleSuggestion] = Field(default_factory=list)
