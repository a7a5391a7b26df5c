"""Pydantic models for saved analysis endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


class SavedSuggestionIn(BaseModel):
    """A hairstyle suggestion as submitted for saving."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    is_ai_generated: bool = False


class SaveAnalysisRequest(BaseModel):
    """Request payload for saving an analysis."""

    face_shape: str = Field(..., min_length=1, description="Face shape label or 'Custom'")
    summary: str
    image_url: Optional[str] = Field(None, description="URL of the analysed photo")
    suggestions: List[SavedSuggestionIn] = Field(..., min_length=1)


class SavedAnalysisResponse(BaseModel):
    """Response payload wrapping one saved analysis."""

    success: bool
    record: dict


class SavedAnalysisListResponse(BaseModel):
    """Paginated saved analyses."""

    success: bool
    records: List[dict]
    total: int
    limit: int
    offset: int
    has_more: bool


class MessageResponse(BaseModel):
    """Generic success response with message."""

    success: bool
    message: str
