"""Placeholder face-shape classifier.

Real landmark-based detection is not implemented; a shape is drawn at random
so the rest of the pipeline can be exercised end to end.
"""

import random
from typing import Optional

from hairstyle_advisor.config import logger
from hairstyle_advisor.models import Classification, FaceShape

MIN_CONFIDENCE = 0.7

_DESCRIPTIONS = {
    FaceShape.OVAL: "Balanced proportions with gentle curves; most hairstyles will flatter you.",
    FaceShape.ROUND: "Soft angles with similar width and length; go for lengthening styles.",
    FaceShape.SQUARE: "Strong jawline and forehead of similar width; soften with layers and waves.",
    FaceShape.HEART: "Wider forehead tapering to a narrow chin; add volume near the jaw.",
    FaceShape.DIAMOND: "Cheekbones are the widest point; add width at the forehead and jaw.",
    FaceShape.RECTANGULAR: "Longer than wide with straight sides; bangs and side volume help.",
    FaceShape.OBLONG: "Long face with minimal angles; width-building cuts balance the length.",
}


def detect_face_shape(
    photo: bytes, rng: Optional[random.Random] = None
) -> Classification:
    """Classify the face in ``photo``.

    Returns a uniformly random shape with confidence in [0.7, 1.0). An empty
    photo yields ``oval`` at 0.5 confidence.
    """
    if not photo:
        logger.warning("Face shape detection called without image data")
        return Classification(face_shape=FaceShape.OVAL, confidence=0.5)

    rng = rng or random.Random()
    shapes = list(FaceShape)
    face_shape = shapes[rng.randrange(len(shapes))]
    confidence = MIN_CONFIDENCE + rng.random() * (1.0 - MIN_CONFIDENCE)

    logger.info(
        f"Face shape detected: {face_shape.value} (confidence={confidence:.2f})"
    )
    return Classification(face_shape=face_shape, confidence=confidence)


def describe_face_shape(face_shape: FaceShape) -> str:
    return _DESCRIPTIONS.get(face_shape, "Face analyzed.")


__all__ = ["detect_face_shape", "describe_face_shape", "MIN_CONFIDENCE"]
