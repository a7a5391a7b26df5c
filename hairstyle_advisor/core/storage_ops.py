"""
Storage operations module for Supabase Storage.
Handles uploads of generated hairstyle images.
"""

import asyncio
from typing import Optional
from supabase import Client, create_client
import uuid

from hairstyle_advisor import config
from hairstyle_advisor.config import logger


# Initialize Supabase client
_supabase_client: Optional[Client] = None

# Storage bucket name
STORAGE_BUCKET = "images"
RESULT_FOLDER = "hairstyles"


def is_configured() -> bool:
    """Return True when Supabase credentials are available."""
    return bool(config.SUPABASE_URL and config.SUPABASE_SERVICE_KEY)


def _get_supabase_client() -> Client:
    """
    Get or create the Supabase client instance.

    Returns:
        Client: Supabase client instance

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured
    """
    global _supabase_client

    if _supabase_client is None:
        if not is_configured():
            error_msg = "SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured"
            logger.error(error_msg)
            raise ValueError(error_msg)

        try:
            _supabase_client = create_client(
                config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY
            )
            logger.info(
                "Supabase client initialized successfully for storage operations"
            )
        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise

    return _supabase_client


def generate_public_url(path: str) -> str:
    """
    Generate a public URL for a file in Supabase Storage.

    Args:
        path: Path to the file in storage (e.g., 'hairstyles/filename.png')

    Returns:
        str: Public URL to access the file
    """
    try:
        client = _get_supabase_client()

        # Get public URL from Supabase Storage
        public_url = client.storage.from_(STORAGE_BUCKET).get_public_url(path)

        logger.debug(f"Generated public URL for path: {path}")
        return public_url

    except Exception as e:
        logger.error(f"Error generating public URL for path {path}: {e}")
        raise


async def upload_result_image(
    file_bytes: bytes, filename: str, content_type: str = "image/png"
) -> str:
    """
    Upload a generated hairstyle image to Supabase Storage.

    Args:
        file_bytes: Image file content as bytes
        filename: Original filename (only the extension is kept)
        content_type: MIME type of the file (default: image/png)

    Returns:
        str: Public URL of the uploaded file

    Raises:
        Exception: If upload fails
    """
    try:
        client = _get_supabase_client()

        # Generate unique filename
        file_extension = filename.split(".")[-1] if "." in filename else "png"
        unique_filename = f"{uuid.uuid4()}.{file_extension}"
        storage_path = f"{RESULT_FOLDER}/{unique_filename}"

        logger.info(f"Uploading hairstyle image: {unique_filename}")

        # supabase-py is synchronous; keep the upload off the event loop
        await asyncio.to_thread(
            client.storage.from_(STORAGE_BUCKET).upload,
            path=storage_path,
            file=file_bytes,
            file_options={"content-type": content_type},
        )

        # Generate public URL
        public_url = await asyncio.to_thread(generate_public_url, storage_path)

        logger.info(f"Successfully uploaded hairstyle image to: {public_url}")
        return public_url

    except Exception as e:
        logger.error(f"Error uploading hairstyle image: {e}")
        raise
