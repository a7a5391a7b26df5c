"""Static suggestion sets served when live generation is unusable.

The catalog is built once at import time and exposed read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from hairstyle_advisor.models import FaceShape, Gender, RecommendationRecord

_IMAGE_URL = "https://i.imgur.com/example{number}.jpg"


@dataclass(frozen=True)
class MockSuggestionSet:
    summary: str
    records: Tuple[RecommendationRecord, ...]
    gender: Gender = Gender.UNSPECIFIED


def _records(first_image: int, *entries: Tuple[str, str]) -> Tuple[RecommendationRecord, ...]:
    return tuple(
        RecommendationRecord(
            name=name,
            description=description,
            image_url=_IMAGE_URL.format(number=first_image + offset),
            is_ai_generated=False,
        )
        for offset, (name, description) in enumerate(entries)
    )


_BY_FACE_SHAPE = {
    FaceShape.OVAL: MockSuggestionSet(
        summary=(
            "You have an oval face shape, which is considered the most versatile for "
            "hairstyles. Your face is about one and a half times longer than it is wide, "
            "with your forehead slightly wider than your jaw."
        ),
        records=_records(
            1,
            ("Classic Medium-Length Layers", "Layers that start at the chin and continue downward will frame your face beautifully while maintaining its natural balance."),
            ("Textured Pixie Cut", "Your oval face shape can handle the shortness of a pixie cut. Add texture on top for some volume and style versatility."),
            ("Long Layers with Side-Swept Bangs", "This style adds softness around your face while the side-swept bangs create a gentle frame."),
            ("Modern Shag", "A shag haircut with lots of layers works well with your face shape, adding texture and movement."),
            ("Sleek Bob", "A bob that hits at the jawline or slightly below complements your oval face shape by adding structure."),
        ),
    ),
    FaceShape.ROUND: MockSuggestionSet(
        summary=(
            "You have a round face shape with soft angles and similar width and length "
            "measurements. Your cheekbones are the widest part of your face, with a "
            "rounded jawline and forehead."
        ),
        records=_records(
            6,
            ("Long Layered Cut", "Long layers create the illusion of length and help slim a round face."),
            ("Side-Parted Bob", "An asymmetrical bob with a deep side part adds angles to soften roundness."),
            ("Voluminous Pixie with Height", "Adding volume at the crown elongates your face shape and creates a balancing effect."),
            ("Long Side-Swept Bangs", "Side-swept bangs create diagonal lines across your face, adding definition and angles."),
            ("Shoulder-Length Cut with Face-Framing Layers", "Layers that start at the chin help create structure and lengthen a round face."),
        ),
    ),
    FaceShape.SQUARE: MockSuggestionSet(
        summary=(
            "You have a square face shape with a strong jawline and forehead that are "
            "approximately the same width. Your face has defined angles and a shorter "
            "length compared to width."
        ),
        records=_records(
            11,
            ("Soft Layered Cut", "Soft layers help balance the angularity of your square face shape."),
            ("Wavy Lob (Long Bob)", "Waves add softness to counterbalance your strong jawline."),
            ("Side-Swept Pixie", "A pixie cut with longer pieces on top softens your facial angles."),
            ("Curtain Bangs", "These frame your face and soften the squareness of your forehead."),
            ("Long Layers with Face-Framing Pieces", "Long layers starting below the chin soften your jawline."),
        ),
    ),
    FaceShape.HEART: MockSuggestionSet(
        summary=(
            "You have a heart-shaped face with a wider forehead that tapers to a narrower "
            "chin. Your cheekbones are typically high and well-defined."
        ),
        records=_records(
            16,
            ("Chin-Length Bob", "A bob that hits at the chin adds width to the lower part of your face, creating balance."),
            ("Side-Parted Waves", "Waves with a side part add softness and balance to your features."),
            ("Long Layers with Side-Swept Bangs", "Side-swept bangs soften your forehead while long layers add movement."),
            ("Pixie with Longer Top", "A pixie cut with length on top balances your narrower chin."),
            ("Medium Length with Curtain Bangs", "Curtain bangs soften your forehead while medium length adds balance."),
        ),
    ),
    FaceShape.DIAMOND: MockSuggestionSet(
        summary=(
            "You have a diamond face shape with narrow forehead and jawline, and wider "
            "cheekbones. This creates distinctive angles and high definition in your face."
        ),
        records=_records(
            21,
            ("Textured Lob with Side Part", "A textured long bob with a side part softens your angular features while highlighting your cheekbones."),
            ("Wispy Bangs", "Wispy bangs add width to your forehead while softening your overall look."),
            ("Chin-Length Bob with Layers", "A layered bob adds width at your jawline, creating more balance with your cheekbones."),
            ("Mid-Length Waves", "Soft waves at mid-length add volume at your jawline and forehead."),
            ("Pixie with Textured Bangs", "A pixie cut with textured bangs adds width to your forehead while showing off your cheekbones."),
        ),
    ),
    FaceShape.RECTANGULAR: MockSuggestionSet(
        summary=(
            "You have a rectangular face shape with a longer face and straight sides. "
            "Your forehead, cheekbones, and jawline are similar in width."
        ),
        records=_records(
            26,
            ("Layered Mid-Length Cut with Bangs", "Bangs shorten your face visually while layers add width to the sides."),
            ("Voluminous Bob", "A bob with volume at the sides adds width to your face, creating better proportion."),
            ("Shoulder-Length Waves", "Waves add width and texture while the length balances your face shape."),
            ("Long Layers with Curtain Bangs", "Curtain bangs visually shorten your face while layers add softness."),
            ("Textured Pixie with Full Bangs", "Full bangs shorten your face while texture adds width at the sides."),
        ),
    ),
    FaceShape.OBLONG: MockSuggestionSet(
        summary=(
            "You have an oblong face shape that is longer than it is wide, with minimal "
            "angles. Your forehead, cheekbones, and jawline are similar in width."
        ),
        records=_records(
            31,
            ("Full Bangs with Layers", "Full bangs shorten your face visually, while layers add width."),
            ("Chin-Length Bob with Side-Swept Bangs", "This length adds width at your jawline while bangs break up the length of your face."),
            ("Layered Shag with Curtain Bangs", "A shag haircut with curtain bangs adds width and texture throughout."),
            ("Short Textured Pixie", "A pixie with texture on top adds width to counterbalance your face length."),
            ("Medium Cut with Face-Framing Layers", "Face-framing layers starting at the cheekbones add width and dimension."),
        ),
    ),
}

MOCK_SUGGESTIONS: Mapping[FaceShape, MockSuggestionSet] = MappingProxyType(_BY_FACE_SHAPE)

DIRECT_MOCK_SUGGESTIONS = MockSuggestionSet(
    summary="Таны зурагт үндэслэн хийсэн анализаар танд тохирох үсний загваруудыг санал болгож байна:",
    records=_records(
        1,
        ("Орчин үеийн текстурт боб", "Текстурт боб үс таны нүүрийг гоёмсгоор хүрээлэн, үсэнд хөдөлгөөн болон хэмжээс нэмнэ. Текстурт давхарга нь орчин үеийн, хялбар загвар бөгөөд хялбархан засаж болно."),
        ("Зөөлөн хөшиг баналтай үс", "Хөшиг баналт нь таны нүүрийг зөөлөн хүрээлж, төрхийг чинь тодотгоно. Энэ нь олон янзаар хэлбэржүүлж болох уян хатан загвар бөгөөд орчин үеийн харагдах төрхийг бий болгоно."),
        ("Давхарласан дунд урттай үс", "Дунд урттай үсэнд нүүрийг хүрээлсэн үсний давхаргууд нь таны төрхийг тодруулж, шулуун болон давлагаатай гэх мэт янз бүрийн загварчлалын боломжийг олгодог."),
        ("Дээд хэсэгтээ урт текстурт пикси", "Дээд хэсэгтээ нэмэлт уртай пикси үс таны нүүрний бүтцийг онцлон харуулж, орчин үеийн төрхийг бий болгоно. Энэ нь арчлахад хялбар боловч загварлаг харагдана."),
        ("Зөөлөн долгионтой лоб", "Урт боб буюу лоб үс дээр зөөлөн долгион нь таны үсэнд хөдөлгөөн, хэмжээс нэмж, нүүрийг тань гоёмсгоор хүрээлнэ. Энэхүү олон талт загвар нь өдөр тутмын болон албан ёсны арга хэмжээнд тохиромжтой."),
    ),
    gender=Gender.FEMALE,
)


def get_mock_suggestions(face_shape: FaceShape | None) -> MockSuggestionSet:
    """Return the static set for ``face_shape``; ``None`` selects the direct-mode set."""
    if face_shape is None:
        return DIRECT_MOCK_SUGGESTIONS
    return MOCK_SUGGESTIONS.get(face_shape, MOCK_SUGGESTIONS[FaceShape.OVAL])


__all__ = [
    "MockSuggestionSet",
    "MOCK_SUGGESTIONS",
    "DIRECT_MOCK_SUGGESTIONS",
    "get_mock_suggestions",
]
