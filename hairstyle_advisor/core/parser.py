"""Turn the stylist model's Markdown answer into recommendation records.

Parsing is an ordered chain of strategies. Each strategy is a pure function
``text -> StrategyMatch | None``; the first one that yields at least one
record wins. Nothing here performs I/O or keeps state between calls.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from hairstyle_advisor.core.errors import ParseFailure
from hairstyle_advisor.models import (
    RECOMMENDATION_COUNT,
    Classification,
    Gender,
    RecommendationRecord,
)

# Level-2/3 headings or "1." markers at the start of the text or of a line
_SECTION_SPLIT = re.compile(r"(?:^|\n)(?:#{2,3}|\d+\.)\s+")

# Bullet or numbered item: label up to ":" or end of line, then the description
# up to the next item or blank line (LF or CRLF).
_LIST_ITEM = re.compile(
    r"^[ \t]*(?:\d+\.|[*\-•])[ \t]+"
    r"(?P<label>[^:\n]+):?"
    r"(?P<description>.*?)"
    r"(?=\r?\n[ \t]*(?:\d+\.|[*\-•])[ \t]+|\r?\n[ \t]*\r?\n|\Z)",
    re.MULTILINE | re.DOTALL,
)

_EMPHASIS = re.compile(r"[*_#]")
_LEADING_EMPHASIS = re.compile(r"^[*_]+")

_GENDER_TOKENS = {
    "эрэгтэй": Gender.MALE,
    "эр": Gender.MALE,
    "male": Gender.MALE,
    "man": Gender.MALE,
    "men": Gender.MALE,
    "эмэгтэй": Gender.FEMALE,
    "эм": Gender.FEMALE,
    "female": Gender.FEMALE,
    "woman": Gender.FEMALE,
    "women": Gender.FEMALE,
}
_GENDER_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(_GENDER_TOKENS, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class StrategyMatch:
    records: Tuple[RecommendationRecord, ...]
    summary: Optional[str] = None


@dataclass(frozen=True)
class ParsedRecommendations:
    summary: str
    records: Tuple[RecommendationRecord, ...]
    gender: Gender
    strategy: str


def infer_gender(text: str) -> Gender:
    """Return the gender named by the first gender token in ``text``."""
    match = _GENDER_PATTERN.search(text or "")
    if not match:
        return Gender.UNSPECIFIED
    return _GENDER_TOKENS[match.group(1).lower()]


def _clean_name(raw: str) -> str:
    return _EMPHASIS.sub("", raw).strip().rstrip(":").strip()


def _record_from_segment(segment: str) -> Optional[RecommendationRecord]:
    lines = [line.rstrip() for line in segment.strip().split("\n") if line.strip()]
    if not lines:
        return None

    name = _clean_name(lines[0])
    description = "\n".join(lines[1:]).strip()
    if not name or not description:
        return None
    return RecommendationRecord(name=name, description=description)


def parse_sections(text: str) -> Optional[StrategyMatch]:
    """Split on headings / numbered markers; segment 0 is the introduction."""
    segments = [segment for segment in _SECTION_SPLIT.split(text) if segment.strip()]
    if len(segments) < 2:
        return None

    records = []
    for segment in segments[1 : RECOMMENDATION_COUNT + 1]:
        record = _record_from_segment(segment)
        if record is not None:
            records.append(record)

    if not records:
        return None
    return StrategyMatch(records=tuple(records), summary=segments[0].strip())


def parse_list_items(text: str) -> Optional[StrategyMatch]:
    """Collect ``- label: description`` style items anywhere in the text."""
    records = []
    for match in _LIST_ITEM.finditer(text):
        name = _clean_name(match.group("label"))
        description = _LEADING_EMPHASIS.sub("", match.group("description").strip())
        description = description.strip()
        if name and description:
            records.append(RecommendationRecord(name=name, description=description))

    if not records:
        return None
    return StrategyMatch(records=tuple(records))


STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[StrategyMatch]]], ...] = (
    ("sections", parse_sections),
    ("list_items", parse_list_items),
)


def default_summary(classification: Classification | None) -> str:
    if classification is None:
        return "Hairstyles selected for your features."
    return f"Hairstyles selected for your {classification.face_shape.value} face shape."


def parse_recommendations(
    raw_text: str, classification: Classification | None = None
) -> ParsedRecommendations:
    """Parse the model answer into a summary, ordered records and a gender.

    Raises:
        ParseFailure: If no strategy extracts a single complete record
    """
    if not raw_text or not raw_text.strip():
        raise ParseFailure("Recommendation text is empty")

    gender = infer_gender(raw_text)

    for strategy_name, strategy in STRATEGIES:
        match = strategy(raw_text)
        if match is None:
            continue
        summary = match.summary or default_summary(classification)
        return ParsedRecommendations(
            summary=summary,
            records=match.records,
            gender=gender,
            strategy=strategy_name,
        )

    raise ParseFailure("No hairstyle recommendations could be extracted")


__all__ = [
    "StrategyMatch",
    "ParsedRecommendations",
    "STRATEGIES",
    "infer_gender",
    "parse_sections",
    "parse_list_items",
    "default_summary",
    "parse_recommendations",
]
