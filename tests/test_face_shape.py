import random

import pytest

from hairstyle_advisor.core.face_shape import (
    MIN_CONFIDENCE,
    describe_face_shape,
    detect_face_shape,
)
from hairstyle_advisor.models import Classification, FaceShape


def test_detect_face_shape_is_seedable(photo):
    first = detect_face_shape(photo, rng=random.Random(7))
    second = detect_face_shape(photo, rng=random.Random(7))

    assert first == second
    assert MIN_CONFIDENCE <= first.confidence < 1.0


def test_detect_face_shape_covers_every_shape(photo):
    rng = random.Random(0)
    seen = {detect_face_shape(photo, rng=rng).face_shape for _ in range(200)}

    assert seen == set(FaceShape)


def test_empty_photo_defaults_to_oval():
    classification = detect_face_shape(b"")

    assert classification == Classification(face_shape=FaceShape.OVAL, confidence=0.5)


@pytest.mark.parametrize("confidence", [-0.1, 1.5])
def test_confidence_outside_unit_interval_rejected(confidence):
    with pytest.raises(ValueError):
        Classification(face_shape=FaceShape.ROUND, confidence=confidence)


def test_every_shape_has_a_description():
    for shape in FaceShape:
        assert describe_face_shape(shape) != "Face analyzed."
