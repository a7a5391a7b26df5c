"""Domain types shared by the suggestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

DIRECT_MODE_LABEL = "Custom"
RECOMMENDATION_COUNT = 5


class FaceShape(str, Enum):
    OVAL = "oval"
    ROUND = "round"
    SQUARE = "square"
    HEART = "heart"
    DIAMOND = "diamond"
    RECTANGULAR = "rectangular"
    OBLONG = "oblong"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    UNSPECIFIED = "unspecified"

    @property
    def subject(self) -> str:
        """Noun used when describing the person in image prompts."""
        return "person" if self is Gender.UNSPECIFIED else self.value


@dataclass(frozen=True)
class Classification:
    face_shape: FaceShape
    confidence: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"confidence must be within [0, 1], got {self.confidence}"
            )


@dataclass(frozen=True)
class RecommendationRecord:
    """One named hairstyle suggestion, optionally paired with a reference image."""

    name: str
    description: str
    image_url: Optional[str] = None
    is_ai_generated: bool = False
    is_favorite: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
            "is_ai_generated": self.is_ai_generated,
            "is_favorite": self.is_favorite,
        }


@dataclass(frozen=True)
class SuggestionResult:
    """Terminal artifact of one suggestion request."""

    classification: Optional[Classification]
    summary: str
    records: Tuple[RecommendationRecord, ...]
    gender: Gender = Gender.UNSPECIFIED
    raw_text: Optional[str] = None
    is_fallback: bool = False
    image_attempts: Tuple[int, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if len(self.records) != RECOMMENDATION_COUNT:
            raise ValueError(
                f"SuggestionResult requires exactly {RECOMMENDATION_COUNT} records, "
                f"got {len(self.records)}"
            )

    @property
    def face_shape_label(self) -> str:
        if self.classification is None:
            return DIRECT_MODE_LABEL
        return self.classification.face_shape.label
