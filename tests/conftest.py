"""Shared pytest fixtures for the Hairstyle Advisor tests.

Provides:
- Sample photo bytes
- Pipeline settings and a sleep that only records delays
- Scripted text and image generators
- FastAPI test client with the suggestion service overridden
"""

import asyncio
import re
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from hairstyle_advisor.config import PipelineSettings
from hairstyle_advisor.main import app
from hairstyle_advisor.models import Classification, FaceShape
from hairstyle_advisor.services.suggestion_service import (
    SuggestionService,
    get_suggestion_service,
)

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01" + b"\x00" * 64
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

_HAIRSTYLE_IN_PROMPT = re.compile(r'"([^"]+)"')

FIVE_STYLES_TEXT = (
    "You appear to be a woman with an oval face and long straight hair.\n"
    "## Textured Bob\nFrames the face and adds movement.\n"
    "## Curtain Bangs\nSoftens the forehead.\n"
    "## Layered Lob\nKeeps length while adding volume.\n"
    "## Sleek Ponytail\nShows off balanced proportions.\n"
    "## Soft Waves\nAdds texture around the cheekbones.\n"
)


def image_url_for(name: str) -> str:
    return f"https://cdn.test/{name.lower().replace(' ', '-')}.png"


class ScriptedTextGenerator:
    """Text generator returning a fixed answer or raising a fixed error."""

    def __init__(self, text: str = FIVE_STYLES_TEXT, error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[Optional[Classification]] = []

    async def __call__(self, photo: bytes, classification: Optional[Classification]) -> str:
        self.calls.append(classification)
        if self.error is not None:
            raise self.error
        return self.text


class ScriptedImageGenerator:
    """Image generator scripted per hairstyle name found in the prompt."""

    def __init__(
        self,
        failing: tuple = (),
        delays: Optional[Dict[str, float]] = None,
        always_fail: bool = False,
        error: Optional[Exception] = None,
    ):
        self.failing = failing
        self.delays = delays or {}
        self.always_fail = always_fail
        self.error = error
        self.prompts: List[str] = []
        self.completed: List[str] = []

    async def __call__(self, prompt: str, photo: Optional[bytes]) -> Optional[str]:
        self.prompts.append(prompt)
        name = _HAIRSTYLE_IN_PROMPT.search(prompt).group(1)
        if name in self.delays:
            await asyncio.sleep(self.delays[name])
        self.completed.append(name)
        if self.error is not None:
            raise self.error
        if self.always_fail or name in self.failing:
            return None
        return image_url_for(name)

    def calls_for(self, name: str) -> int:
        return sum(1 for prompt in self.prompts if f'"{name}"' in prompt)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records the requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def photo() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def oval() -> Classification:
    return Classification(face_shape=FaceShape.OVAL, confidence=0.9)


@pytest.fixture
def settings() -> PipelineSettings:
    return PipelineSettings(
        response_language="English",
        image_max_attempts=2,
        image_retry_delay_seconds=1.0,
        image_synthesis_budget_seconds=5.0,
        enable_image_generation=True,
        fallback_image_url_template="https://i.imgur.com/example{number}.jpg",
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_service(settings, recording_sleep):
    """Factory building a service around scripted collaborators."""

    def _make(
        text_generator=None,
        image_generator=None,
        service_settings: Optional[PipelineSettings] = None,
    ) -> SuggestionService:
        return SuggestionService(
            text_generator=text_generator or ScriptedTextGenerator(),
            image_generator=image_generator or ScriptedImageGenerator(),
            settings=service_settings or settings,
            sleep=recording_sleep,
        )

    return _make


@pytest.fixture
def client(make_service) -> Generator[TestClient, None, None]:
    """Test client whose suggestion service never leaves the process."""
    service = make_service()
    app.dependency_overrides[get_suggestion_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
