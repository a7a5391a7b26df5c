"""Suggestion pipeline: recommendation text, parsing, and concurrent image synthesis."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, Union

from hairstyle_advisor.config import PipelineSettings, logger
from hairstyle_advisor.core import gemini
from hairstyle_advisor.core.errors import (
    EmptyResponse,
    ParseFailure,
    UpstreamUnavailable,
)
from hairstyle_advisor.core.mock_catalog import get_mock_suggestions
from hairstyle_advisor.core.parser import parse_recommendations
from hairstyle_advisor.core.prompt_templates import build_hairstyle_image_prompt
from hairstyle_advisor.models import (
    RECOMMENDATION_COUNT,
    Classification,
    FaceShape,
    Gender,
    RecommendationRecord,
    SuggestionResult,
)

# Fallback image numbering continues after the static catalog's first set
FALLBACK_IMAGE_OFFSET = 16

TextGenerator = Callable[[bytes, Optional[Classification]], Awaitable[str]]
ImageGenerator = Callable[[str, Optional[bytes]], Awaitable[Optional[str]]]
SleepFunc = Callable[[float], Awaitable[Any]]


def _log(level: int, message: str, **context: Any) -> None:
    """Helper to emit structured logs with contextual metadata."""
    logger.log(level, "%s | context=%s", message, context)


class SuggestionStage(str, Enum):
    CLASSIFYING = "classifying"
    REQUESTING_TEXT = "requesting_text"
    PARSING = "parsing"
    NORMALIZING_COUNT = "normalizing_count"
    SYNTHESIZING_IMAGES = "synthesizing_images"
    USING_MOCK_FALLBACK = "using_mock_fallback"
    ASSEMBLED = "assembled"


@dataclass(slots=True)
class SynthesisOutcome:
    """Result of one record's image workflow; written only by its own worker."""

    position: int
    image_url: Optional[str] = None
    attempts: int = 0

    @property
    def succeeded(self) -> bool:
        return self.image_url is not None


def placeholder_record(
    number: int, classification: Optional[Classification]
) -> RecommendationRecord:
    if classification is None:
        description = "A complementary hairstyle for your features."
    else:
        description = (
            f"A complementary hairstyle for {classification.face_shape.value} face shape."
        )
    return RecommendationRecord(name=f"Additional Hairstyle {number}", description=description)


def normalize_records(
    records: Sequence[RecommendationRecord],
    classification: Optional[Classification],
) -> Tuple[RecommendationRecord, ...]:
    """Truncate or pad ``records`` to exactly five entries, keeping order."""
    normalized = list(records[:RECOMMENDATION_COUNT])
    while len(normalized) < RECOMMENDATION_COUNT:
        normalized.append(placeholder_record(len(normalized) + 1, classification))
    return tuple(normalized)


def fallback_image_url(position: int, template: str) -> str:
    return template.format(number=position + FALLBACK_IMAGE_OFFSET)


class SuggestionService:
    """Coordinates one suggestion request from photo to five annotated records.

    Every upstream or parsing failure is absorbed: callers always receive a
    structurally valid ``SuggestionResult``.
    """

    def __init__(
        self,
        text_generator: Optional[TextGenerator] = None,
        image_generator: Optional[ImageGenerator] = None,
        settings: Optional[PipelineSettings] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self._text_generator = text_generator
        self._image_generator = image_generator
        self._settings = settings or PipelineSettings()
        self._sleep = sleep

    @property
    def settings(self) -> PipelineSettings:
        return self._settings

    async def suggest(
        self, photo: bytes, classification: Optional[Classification]
    ) -> SuggestionResult:
        """Run the pipeline; ``classification=None`` selects direct mode."""
        if not photo:
            raise ValueError("photo must be non-empty encoded image bytes")

        request_id = uuid.uuid4().hex[:12]
        start_time = time.time()
        _log(
            logging.INFO,
            "suggestion_request_started",
            request_id=request_id,
            mode="direct" if classification is None else "guided",
            face_shape=classification.face_shape.value if classification else None,
            photo_bytes=len(photo),
        )

        try:
            result = await self._run(request_id, photo, classification)
        except Exception as exc:
            _log(
                logging.ERROR,
                "suggestion_pipeline_error",
                request_id=request_id,
                error=str(exc),
            )
            result = self._mock_fallback(request_id, classification, reason=str(exc))

        _log(
            logging.INFO,
            "suggestion_assembled",
            request_id=request_id,
            is_fallback=result.is_fallback,
            ai_images=sum(record.is_ai_generated for record in result.records),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )
        return result

    async def _run(
        self,
        request_id: str,
        photo: bytes,
        classification: Optional[Classification],
    ) -> SuggestionResult:
        self._transition(
            request_id,
            SuggestionStage.CLASSIFYING,
            confidence=classification.confidence if classification else None,
        )
        self._transition(request_id, SuggestionStage.REQUESTING_TEXT)
        try:
            raw_text = await self._request_text(photo, classification)
        except (UpstreamUnavailable, EmptyResponse) as exc:
            _log(
                logging.WARNING,
                "text_generation_failed",
                request_id=request_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return self._mock_fallback(request_id, classification, reason=str(exc))

        self._transition(request_id, SuggestionStage.PARSING)
        try:
            parsed = parse_recommendations(raw_text, classification)
        except ParseFailure as exc:
            _log(
                logging.WARNING,
                "recommendation_parse_failed",
                request_id=request_id,
                error=str(exc),
                raw_preview=raw_text[:200],
            )
            return self._mock_fallback(request_id, classification, reason=str(exc))

        _log(
            logging.INFO,
            "recommendations_parsed",
            request_id=request_id,
            strategy=parsed.strategy,
            count=len(parsed.records),
            gender=parsed.gender.value,
        )

        self._transition(request_id, SuggestionStage.NORMALIZING_COUNT)
        records = normalize_records(parsed.records, classification)

        self._transition(request_id, SuggestionStage.SYNTHESIZING_IMAGES)
        outcomes = await self._synthesize_all(
            request_id, records, photo, classification, parsed.gender
        )

        annotated = []
        for record, outcome in zip(records, outcomes):
            if outcome.succeeded:
                annotated.append(
                    replace(record, image_url=outcome.image_url, is_ai_generated=True)
                )
            else:
                annotated.append(
                    replace(
                        record,
                        image_url=fallback_image_url(
                            outcome.position, self._settings.fallback_image_url_template
                        ),
                        is_ai_generated=False,
                    )
                )

        self._transition(request_id, SuggestionStage.ASSEMBLED)
        return SuggestionResult(
            classification=classification,
            summary=parsed.summary,
            records=tuple(annotated),
            gender=parsed.gender,
            raw_text=raw_text,
            is_fallback=False,
            image_attempts=tuple(outcome.attempts for outcome in outcomes),
        )

    async def _request_text(
        self, photo: bytes, classification: Optional[Classification]
    ) -> str:
        if self._text_generator is not None:
            return await self._text_generator(photo, classification)
        return await gemini.generate_recommendation_text(
            photo, classification, language=self._settings.response_language
        )

    async def _request_image(self, prompt: str, photo: Optional[bytes]) -> Optional[str]:
        generator = self._image_generator or gemini.generate_hairstyle_image
        try:
            return await generator(prompt, photo)
        except Exception as exc:
            _log(logging.ERROR, "image_generator_error", error=str(exc))
            return None

    async def _synthesize_all(
        self,
        request_id: str,
        records: Sequence[RecommendationRecord],
        photo: bytes,
        classification: Optional[Classification],
        gender: Gender,
    ) -> List[SynthesisOutcome]:
        if not self._settings.enable_image_generation:
            _log(logging.INFO, "image_generation_disabled", request_id=request_id)
            return [SynthesisOutcome(position=index) for index in range(len(records))]

        workers = [
            self._synthesize_record(
                request_id,
                SynthesisOutcome(position=index),
                build_hairstyle_image_prompt(record.name, classification, gender),
                photo,
            )
            for index, record in enumerate(records)
        ]
        settled = await asyncio.gather(*workers)

        # Final order is decided by position, never by completion time
        outcomes: List[Optional[SynthesisOutcome]] = [None] * len(records)
        for outcome in settled:
            outcomes[outcome.position] = outcome
        return outcomes  # type: ignore[return-value]

    async def _synthesize_record(
        self,
        request_id: str,
        outcome: SynthesisOutcome,
        prompt: str,
        photo: bytes,
    ) -> SynthesisOutcome:
        budget = self._settings.image_synthesis_budget_seconds
        try:
            await asyncio.wait_for(
                self._attempt_synthesis(request_id, outcome, prompt, photo),
                timeout=budget if budget > 0 else None,
            )
        except asyncio.TimeoutError:
            _log(
                logging.WARNING,
                "image_budget_exhausted",
                request_id=request_id,
                position=outcome.position,
                attempts=outcome.attempts,
                budget_seconds=budget,
            )
            outcome.image_url = None

        if not outcome.succeeded:
            _log(
                logging.INFO,
                "record_fallback_image",
                request_id=request_id,
                position=outcome.position,
                attempts=outcome.attempts,
            )
        return outcome

    async def _attempt_synthesis(
        self,
        request_id: str,
        outcome: SynthesisOutcome,
        prompt: str,
        photo: bytes,
    ) -> None:
        max_attempts = self._settings.image_max_attempts
        for attempt in range(1, max_attempts + 1):
            outcome.attempts = attempt
            _log(
                logging.DEBUG,
                "image_attempt_started",
                request_id=request_id,
                position=outcome.position,
                attempt=attempt,
            )

            image_url = await self._request_image(prompt, photo)
            if image_url:
                outcome.image_url = image_url
                _log(
                    logging.INFO,
                    "image_attempt_succeeded",
                    request_id=request_id,
                    position=outcome.position,
                    attempt=attempt,
                )
                return

            _log(
                logging.WARNING,
                "image_attempt_failed",
                request_id=request_id,
                position=outcome.position,
                attempt=attempt,
            )
            if attempt < max_attempts:
                await self._sleep(self._settings.image_retry_delay_seconds)

    def _mock_fallback(
        self,
        request_id: str,
        classification: Optional[Classification],
        reason: str,
    ) -> SuggestionResult:
        self._transition(request_id, SuggestionStage.USING_MOCK_FALLBACK, reason=reason)
        mock = get_mock_suggestions(
            classification.face_shape if classification is not None else None
        )
        self._transition(request_id, SuggestionStage.ASSEMBLED)
        return SuggestionResult(
            classification=classification,
            summary=mock.summary,
            records=mock.records,
            gender=mock.gender,
            raw_text=None,
            is_fallback=True,
            image_attempts=(0,) * RECOMMENDATION_COUNT,
        )

    @staticmethod
    def _transition(request_id: str, stage: SuggestionStage, **context: Any) -> None:
        _log(
            logging.DEBUG,
            "suggestion_stage",
            request_id=request_id,
            stage=stage.value,
            **context,
        )


_default_service: Optional[SuggestionService] = None


def get_suggestion_service() -> SuggestionService:
    """Return the process-wide service instance (FastAPI dependency)."""
    global _default_service
    if _default_service is None:
        _default_service = SuggestionService()
    return _default_service


async def get_hairstyle_suggestions(
    face_shape: Union[FaceShape, str, Classification],
    photo: bytes,
    service: Optional[SuggestionService] = None,
) -> SuggestionResult:
    """Classification-guided suggestions for ``photo``."""
    if isinstance(face_shape, Classification):
        classification = face_shape
    else:
        classification = Classification(face_shape=FaceShape(face_shape), confidence=1.0)
    return await (service or get_suggestion_service()).suggest(photo, classification)


async def get_direct_hairstyle_suggestions(
    photo: bytes,
    service: Optional[SuggestionService] = None,
) -> SuggestionResult:
    """Suggestions where the model infers the face shape itself."""
    return await (service or get_suggestion_service()).suggest(photo, None)


__all__ = [
    "SuggestionService",
    "SuggestionStage",
    "SynthesisOutcome",
    "normalize_records",
    "placeholder_record",
    "fallback_image_url",
    "get_suggestion_service",
    "get_hairstyle_suggestions",
    "get_direct_hairstyle_suggestions",
]
