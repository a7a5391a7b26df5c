"""
Configuration module for the Hairstyle Advisor API
Contains logger setup and environment variables
"""

import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# -------------------------
# Logger Setup
# -------------------------
def setup_logger(
    name: str = __name__, log_file: str = "hairstyle_advisor.log"
) -> logging.Logger:
    """
    Set up and return a logger with both file and console handlers

    Args:
        name: Logger name (usually __name__)
        log_file: Path to log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # File handler
    file_handler = logging.FileHandler(log_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    # Add handlers to logger
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Create the main application logger
LOG_FILE = os.getenv("LOG_FILE", "hairstyle_advisor.log")
logger = setup_logger("hairstyle_advisor", LOG_FILE)

# -------------------------
# Environment Variables
# -------------------------
GEMINI_KEY = os.getenv("GEMINI_KEY")
GEMINI_TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image-preview")
GEMINI_API_BASE = os.getenv(
    "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta/models"
)

# Language the stylist answers in; gender tokens are matched in Mongolian and English
RESPONSE_LANGUAGE = os.getenv("RESPONSE_LANGUAGE", "Mongolian")

TEXT_TIMEOUT_SECONDS = float(os.getenv("TEXT_TIMEOUT_SECONDS", "60"))
IMAGE_TIMEOUT_SECONDS = float(os.getenv("IMAGE_TIMEOUT_SECONDS", "120"))
IMAGE_MAX_ATTEMPTS = int(os.getenv("IMAGE_MAX_ATTEMPTS", "2"))
IMAGE_RETRY_DELAY_SECONDS = float(os.getenv("IMAGE_RETRY_DELAY_SECONDS", "1.0"))
IMAGE_SYNTHESIS_BUDGET_SECONDS = float(
    os.getenv("IMAGE_SYNTHESIS_BUDGET_SECONDS", "300")
)
ENABLE_IMAGE_GENERATION = _env_bool("ENABLE_IMAGE_GENERATION", True)
FALLBACK_IMAGE_URL_TEMPLATE = os.getenv(
    "FALLBACK_IMAGE_URL_TEMPLATE", "https://i.imgur.com/example{number}.jpg"
)

MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_KEY = os.getenv("SUPABASE_SERVICE_KEY")


@dataclass(frozen=True)
class PipelineSettings:
    """Snapshot of the knobs the suggestion pipeline reads per request."""

    response_language: str = RESPONSE_LANGUAGE
    image_max_attempts: int = IMAGE_MAX_ATTEMPTS
    image_retry_delay_seconds: float = IMAGE_RETRY_DELAY_SECONDS
    image_synthesis_budget_seconds: float = IMAGE_SYNTHESIS_BUDGET_SECONDS
    enable_image_generation: bool = ENABLE_IMAGE_GENERATION
    fallback_image_url_template: str = FALLBACK_IMAGE_URL_TEMPLATE


# Log configuration status
logger.info("Configuration loaded successfully")
logger.debug(f"GEMINI_KEY configured: {bool(GEMINI_KEY)}")
logger.debug(f"GEMINI_TEXT_MODEL: {GEMINI_TEXT_MODEL}")
logger.debug(f"GEMINI_IMAGE_MODEL: {GEMINI_IMAGE_MODEL}")
logger.debug(f"ENABLE_IMAGE_GENERATION: {ENABLE_IMAGE_GENERATION}")
logger.debug(f"SUPABASE_URL configured: {bool(SUPABASE_URL)}")
logger.debug(f"SUPABASE_SERVICE_KEY configured: {bool(SUPABASE_SERVICE_KEY)}")
