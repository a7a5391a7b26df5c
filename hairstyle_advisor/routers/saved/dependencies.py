"""FastAPI dependencies for saved analysis endpoints."""

from typing import Optional

from fastapi import Header, HTTPException


async def require_device_id(
    device_id: Optional[str] = Header(default=None, alias="X-Device-Id"),
) -> str:
    """Return the caller's device id or reject the request."""
    if not device_id or not device_id.strip():
        raise HTTPException(
            status_code=400,
            detail="Bad Request: X-Device-Id header is required",
        )
    return device_id.strip()
