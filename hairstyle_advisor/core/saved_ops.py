"""
Database operations for saved hairstyle analyses.
Handles CRUD operations and favorite toggling for a device's saved results.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from supabase import Client, create_client

from hairstyle_advisor import config
from hairstyle_advisor.config import logger


# Initialize Supabase client
_supabase_client: Optional[Client] = None

TABLE_NAME = "saved_analyses"

# Re-read and retry when another writer changed the row between read and update
TOGGLE_MAX_ATTEMPTS = 3


def _get_supabase_client() -> Client:
    """Get or create the Supabase client instance."""
    global _supabase_client

    if _supabase_client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_KEY:
            error_msg = "SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured"
            logger.error(error_msg)
            raise ValueError(error_msg)

        try:
            _supabase_client = create_client(
                config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY
            )
            logger.info(
                "Supabase client initialized successfully for saved analysis operations"
            )
        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise

    return _supabase_client


def _prepare_suggestions(suggestions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Assign a durable id to every suggestion and reset its favorite flag."""
    prepared = []
    for suggestion in suggestions:
        prepared.append(
            {
                "id": suggestion.get("id") or uuid.uuid4().hex,
                "name": suggestion["name"],
                "description": suggestion["description"],
                "image_url": suggestion.get("image_url"),
                "is_ai_generated": bool(suggestion.get("is_ai_generated", False)),
                "is_favorite": False,
            }
        )
    return prepared


async def save_analysis(
    device_id: str,
    face_shape: str,
    summary: str,
    suggestions: List[Dict[str, Any]],
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Persist an analysis together with its hairstyle suggestions.

    Args:
        device_id: Identifier of the device that owns the record
        face_shape: Face shape label shown with the result (e.g. 'Oval', 'Custom')
        summary: Analysis summary text
        suggestions: Suggestion dicts with name, description, image_url, is_ai_generated
        image_url: Optional URL of the analysed photo

    Returns:
        Dict containing the created record with 'id' field

    Raises:
        Exception: If database operation fails
    """
    try:
        client = _get_supabase_client()
        now = datetime.now(timezone.utc).isoformat()

        record_data = {
            "device_id": device_id,
            "face_shape": face_shape,
            "summary": summary,
            "image_url": image_url,
            "suggestions": _prepare_suggestions(suggestions),
            "created_at": now,
            "updated_at": now,
        }

        logger.info(f"Saving analysis for device: {device_id}")

        query = client.table(TABLE_NAME).insert(record_data)
        response = await asyncio.to_thread(query.execute)

        if response.data and len(response.data) > 0:
            record = response.data[0]
            logger.info(f"Successfully saved analysis with ID: {record.get('id')}")
            return record
        else:
            error_msg = "Failed to save analysis: No data returned"
            logger.error(error_msg)
            raise Exception(error_msg)

    except Exception as e:
        logger.error(f"Error saving analysis: {e}")
        raise


async def get_saved_analysis(analysis_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a saved analysis by ID.

    Returns:
        Dict containing the record, or None if not found
    """
    try:
        client = _get_supabase_client()

        query = client.table(TABLE_NAME).select("*").eq("id", analysis_id)
        response = await asyncio.to_thread(query.execute)

        if response.data and len(response.data) > 0:
            return response.data[0]
        else:
            logger.warning(f"Saved analysis {analysis_id} not found")
            return None

    except Exception as e:
        logger.error(f"Error retrieving saved analysis {analysis_id}: {e}")
        raise


async def list_saved_analyses(
    device_id: str,
    limit: int = 20,
    offset: int = 0,
) -> Dict[str, Any]:
    """
    Get paginated saved analyses for a device, newest first.

    Returns:
        Dict containing records, total, limit, offset and has_more
    """
    try:
        client = _get_supabase_client()

        logger.info(
            f"Fetching saved analyses for device {device_id} (limit={limit}, offset={offset})"
        )

        query = (
            client.table(TABLE_NAME)
            .select("*", count="exact")  # type: ignore
            .eq("device_id", device_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
        )
        response = await asyncio.to_thread(query.execute)

        records = response.data or []
        total = response.count if response.count is not None else 0

        return {
            "records": records,
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": (offset + limit) < total,
        }

    except Exception as e:
        logger.error(f"Error fetching saved analyses for device {device_id}: {e}")
        raise


async def delete_saved_analysis(analysis_id: str, device_id: str) -> bool:
    """
    Delete a saved analysis owned by ``device_id``.

    Returns:
        True if a record was deleted
    """
    try:
        client = _get_supabase_client()

        logger.info(f"Deleting saved analysis {analysis_id} for device {device_id}")

        query = (
            client.table(TABLE_NAME)
            .delete()
            .eq("id", analysis_id)
            .eq("device_id", device_id)
        )
        response = await asyncio.to_thread(query.execute)

        success = bool(response.data and len(response.data) > 0)
        if not success:
            logger.warning(
                f"Failed to delete saved analysis {analysis_id} - not found or not owned"
            )
        return success

    except Exception as e:
        logger.error(f"Error deleting saved analysis {analysis_id}: {e}")
        raise


async def toggle_favorite(
    analysis_id: str, suggestion_id: str, device_id: str
) -> Optional[Dict[str, Any]]:
    """
    Flip the favorite flag of one suggestion inside a saved analysis.

    The update only applies if ``updated_at`` still holds the value that was
    read, so concurrent toggles on the same row never overwrite each other.

    Returns:
        The updated record, or None if the analysis or suggestion is unknown

    Raises:
        Exception: If the row keeps changing underneath every attempt
    """
    for attempt in range(1, TOGGLE_MAX_ATTEMPTS + 1):
        record = await get_saved_analysis(analysis_id)
        if not record or record.get("device_id") != device_id:
            return None

        suggestions = record.get("suggestions") or []
        if not any(s.get("id") == suggestion_id for s in suggestions):
            logger.warning(
                f"Suggestion {suggestion_id} not found in saved analysis {analysis_id}"
            )
            return None

        updated = [
            {**s, "is_favorite": not s.get("is_favorite", False)}
            if s.get("id") == suggestion_id
            else s
            for s in suggestions
        ]

        try:
            client = _get_supabase_client()

            query = (
                client.table(TABLE_NAME)
                .update(
                    {
                        "suggestions": updated,
                        "updated_at": datetime.now(timezone.utc).isoformat(),
                    }
                )
                .eq("id", analysis_id)
                .eq("device_id", device_id)
            )
            previous = record.get("updated_at")
            if previous is None:
                query = query.is_("updated_at", "null")
            else:
                query = query.eq("updated_at", previous)

            response = await asyncio.to_thread(query.execute)

        except Exception as e:
            logger.error(f"Error toggling favorite in analysis {analysis_id}: {e}")
            raise

        if response.data and len(response.data) > 0:
            logger.info(
                f"Toggled favorite for suggestion {suggestion_id} in analysis {analysis_id}"
            )
            return response.data[0]

        logger.warning(
            f"Saved analysis {analysis_id} changed during favorite toggle "
            f"(attempt {attempt}/{TOGGLE_MAX_ATTEMPTS})"
        )

    error_msg = f"Failed to toggle favorite in analysis {analysis_id}: concurrent updates"
    logger.error(error_msg)
    raise Exception(error_msg)
