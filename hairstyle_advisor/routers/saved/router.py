"""FastAPI router for saved analyses and favorite hairstyles."""

from fastapi import APIRouter, Depends, HTTPException

from hairstyle_advisor.config import logger
from hairstyle_advisor.core import saved_ops

from .dependencies import require_device_id
from .models import (
    MessageResponse,
    SaveAnalysisRequest,
    SavedAnalysisListResponse,
    SavedAnalysisResponse,
)

router = APIRouter(prefix="/api/v1/saved", tags=["Saved Analyses"])


@router.post("", response_model=SavedAnalysisResponse)
async def save_analysis(
    payload: SaveAnalysisRequest,
    device_id: str = Depends(require_device_id),
) -> SavedAnalysisResponse:
    """Persist an analysis with its hairstyle suggestions."""
    try:
        record = await saved_ops.save_analysis(
            device_id=device_id,
            face_shape=payload.face_shape,
            summary=payload.summary,
            suggestions=[s.model_dump() for s in payload.suggestions],
            image_url=payload.image_url,
        )
        return SavedAnalysisResponse(success=True, record=record)

    except Exception as exc:
        logger.error("Failed to save analysis", extra={"error": str(exc)})
        raise HTTPException(status_code=500, detail=f"Failed to save analysis: {exc}")


@router.get("", response_model=SavedAnalysisListResponse)
async def list_saved_analyses(
    limit: int = 20,
    offset: int = 0,
    device_id: str = Depends(require_device_id),
) -> SavedAnalysisListResponse:
    """Fetch the device's saved analyses, newest first."""
    try:
        if limit < 1 or limit > 100:
            raise HTTPException(
                status_code=400, detail="Limit must be between 1 and 100"
            )
        if offset < 0:
            raise HTTPException(status_code=400, detail="Offset must be non-negative")

        history = await saved_ops.list_saved_analyses(
            device_id=device_id, limit=limit, offset=offset
        )
        return SavedAnalysisListResponse(success=True, **history)

    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Failed to fetch saved analyses", extra={"error": str(exc)})
        raise HTTPException(
            status_code=500, detail=f"Failed to fetch saved analyses: {exc}"
        )


@router.get("/{analysis_id}", response_model=SavedAnalysisResponse)
async def get_saved_analysis(
    analysis_id: str,
    device_id: str = Depends(require_device_id),
) -> SavedAnalysisResponse:
    """Fetch a single saved analysis by ID."""
    try:
        record = await saved_ops.get_saved_analysis(analysis_id)
        if not record or record.get("device_id") != device_id:
            raise HTTPException(status_code=404, detail="Saved analysis not found")

        return SavedAnalysisResponse(success=True, record=record)

    except HTTPException:
        raise
    except Exception as exc:
        logger.error(
            "Failed to fetch saved analysis",
            extra={"analysis_id": analysis_id, "error": str(exc)},
        )
        raise HTTPException(
            status_code=500, detail=f"Failed to fetch saved analysis: {exc}"
        )


@router.delete("/{analysis_id}", response_model=MessageResponse)
async def delete_saved_analysis(
    analysis_id: str,
    device_id: str = Depends(require_device_id),
) -> MessageResponse:
    """Delete a saved analysis."""
    try:
        deleted = await saved_ops.delete_saved_analysis(analysis_id, device_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Saved analysis not found")

        return MessageResponse(success=True, message="Saved analysis deleted")

    except HTTPException:
        raise
    except Exception as exc:
        logger.error(
            "Failed to delete saved analysis",
            extra={"analysis_id": analysis_id, "error": str(exc)},
        )
        raise HTTPException(
            status_code=500, detail=f"Failed to delete saved analysis: {exc}"
        )


@router.post(
    "/{analysis_id}/suggestions/{suggestion_id}/favorite",
    response_model=SavedAnalysisResponse,
)
async def toggle_favorite_suggestion(
    analysis_id: str,
    suggestion_id: str,
    device_id: str = Depends(require_device_id),
) -> SavedAnalysisResponse:
    """Toggle the favorite flag of one saved hairstyle suggestion."""
    try:
        record = await saved_ops.toggle_favorite(analysis_id, suggestion_id, device_id)
        if not record:
            raise HTTPException(
                status_code=404, detail="Saved analysis or suggestion not found"
            )

        return SavedAnalysisResponse(success=True, record=record)

    except HTTPException:
        raise
    except Exception as exc:
        logger.error(
            "Failed to toggle favorite",
            extra={"analysis_id": analysis_id, "error": str(exc)},
        )
        raise HTTPException(status_code=500, detail=f"Failed to toggle favorite: {exc}")
