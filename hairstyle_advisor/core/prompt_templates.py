"""Prompt templates and builders for the hairstyle recommendation and image flows."""

from __future__ import annotations
from dataclasses import dataclass

from hairstyle_advisor.models import Classification, Gender


# --- RECOMMENDATION PROMPTS ---

SYSTEM_INSTRUCTION_TEMPLATE = """You are a professional hairstylist who studies a person's face shape, distinctive features, current hairstyle and overall appearance, then recommends the hairstyles that suit them best.

When analysing the photo, follow these steps:
1) First identify the person's gender (male/female/other) and state it in the introduction.
2) {FACE_SHAPE_STEP}
3) Describe the current hairstyle: length, texture and colour.
4) Recommend exactly {COUNT} hairstyles that fit the person's age, look and clothing.

For every hairstyle give:
a) a clear, specific name,
b) a detailed explanation of why it suits this person.

Format:
- Start with a short introduction paragraph without any heading.
- Then write one "## " heading per hairstyle with ONLY the hairstyle name on the heading line, followed by its explanation on the next lines.
- Do not add any closing section after the last hairstyle.

Consider gender, face shape, hair type and texture, facial features and current style. All answers must be well structured Markdown written in {LANGUAGE}.
"""

GUIDED_USER_PROMPT_TEMPLATE = """This person's face shape has been identified as {FACE_SHAPE}. Analyse the photo carefully and recommend {COUNT} hairstyles that suit someone with a {FACE_SHAPE} face shape. Explain for each one why it fits this person's face shape, hair type/texture and overall look. Answer in {LANGUAGE} using Markdown."""

DIRECT_USER_PROMPT_TEMPLATE = """Please recommend hairstyles that suit my appearance. Analyse my photo and suggest {COUNT} hairstyles for me. Explain for each one why it fits my face shape, hair type/texture and overall look. Answer in {LANGUAGE} using Markdown."""


@dataclass(frozen=True)
class PromptDefaults:
    """Default configuration values for hairstyle prompts."""

    language: str = "Mongolian"
    recommendation_count: int = 5
    guided_face_shape_step: str = (
        "Confirm the face shape you were given and explain what characterises it."
    )
    direct_face_shape_step: str = (
        "Determine the face shape yourself (oval, round, square, heart, diamond, "
        "rectangular or oblong) and explain what characterises it."
    )
    photo_style: str = (
        "high-end salon photography, neutral studio background, high-quality "
        "professional lighting, photorealistic"
    )


DEFAULTS = PromptDefaults()


def build_system_instruction(
    classification: Classification | None,
    language: str | None = None,
    count: int | None = None,
) -> str:
    """Render the stylist system instruction for guided or direct mode."""
    step = (
        DEFAULTS.guided_face_shape_step
        if classification is not None
        else DEFAULTS.direct_face_shape_step
    )
    return SYSTEM_INSTRUCTION_TEMPLATE.format(
        FACE_SHAPE_STEP=step,
        COUNT=count or DEFAULTS.recommendation_count,
        LANGUAGE=language or DEFAULTS.language,
    )


def build_recommendation_prompt(
    classification: Classification | None,
    language: str | None = None,
    count: int | None = None,
) -> str:
    """Render the user message that accompanies the photo."""
    lang = language or DEFAULTS.language
    total = count or DEFAULTS.recommendation_count
    if classification is None:
        return DIRECT_USER_PROMPT_TEMPLATE.format(COUNT=total, LANGUAGE=lang)
    return GUIDED_USER_PROMPT_TEMPLATE.format(
        FACE_SHAPE=classification.face_shape.value,
        COUNT=total,
        LANGUAGE=lang,
    )


# --- IMAGE PROMPTS ---

GUIDED_IMAGE_PROMPT_TEMPLATE = """Create a professional salon portrait photograph showing a {SUBJECT} with a {FACE_SHAPE} face shape featuring the hairstyle: "{HAIRSTYLE}". The image should be a clear view of a {SUBJECT} with this exact hairstyle, showing how it complements a {FACE_SHAPE} face shape. Style: {PHOTO_STYLE}. Show the complete hairstyle with excellent detail. The person should match the demographics shown in the reference image."""

DIRECT_IMAGE_PROMPT_TEMPLATE = """Create a professional salon portrait photograph showing a {SUBJECT} with the hairstyle: "{HAIRSTYLE}". The image should be a clear view of a {SUBJECT} with this exact hairstyle from a front-facing angle. Style: {PHOTO_STYLE}. Show the complete hairstyle with excellent detail. Make the hairstyle the main focus of the image. The person should match the demographics shown in the reference image."""


def build_hairstyle_image_prompt(
    hairstyle_name: str,
    classification: Classification | None,
    gender: Gender = Gender.UNSPECIFIED,
    photo_style: str | None = None,
) -> str:
    """Render the image-generation prompt for one recommended hairstyle."""
    if not hairstyle_name:
        raise ValueError("Image prompt requires a hairstyle name.")

    style = photo_style or DEFAULTS.photo_style
    if classification is None:
        return DIRECT_IMAGE_PROMPT_TEMPLATE.format(
            SUBJECT=gender.subject,
            HAIRSTYLE=hairstyle_name,
            PHOTO_STYLE=style,
        )
    return GUIDED_IMAGE_PROMPT_TEMPLATE.format(
        SUBJECT=gender.subject,
        FACE_SHAPE=classification.face_shape.value,
        HAIRSTYLE=hairstyle_name,
        PHOTO_STYLE=style,
    )


__all__ = [
    "SYSTEM_INSTRUCTION_TEMPLATE",
    "GUIDED_USER_PROMPT_TEMPLATE",
    "DIRECT_USER_PROMPT_TEMPLATE",
    "GUIDED_IMAGE_PROMPT_TEMPLATE",
    "DIRECT_IMAGE_PROMPT_TEMPLATE",
    "DEFAULTS",
    "PromptDefaults",
    "build_system_instruction",
    "build_recommendation_prompt",
    "build_hairstyle_image_prompt",
]
