"""Caption fitting: pick the largest font size that keeps a caption on the image."""

from typing import NamedTuple, Sequence

from .fonts import GlyphMetrics

DEFAULT_FONT_SIZES = (72, 48, 36, 24)


class CaptionFit(NamedTuple):
    """Result of fitting one caption."""

    width: int
    size: int


def text_width(face: GlyphMetrics, text: str, size: int) -> int:
    """Sum of glyph advances for ``text`` on a single line."""
    return sum(face.advance_width(ord(char), size) for char in text)


def fit_caption(
    face: GlyphMetrics,
    text: str,
    max_width: int,
    sizes: Sequence[int] = DEFAULT_FONT_SIZES,
) -> CaptionFit:
    """
    Choose the largest size from ``sizes`` at which ``text`` fits ``max_width``.

    The caption is never wrapped. When even the smallest size overflows, the
    smallest size is returned with a width of 0 so the caller still draws
    something instead of failing the render.

    Args:
        face: Glyph metrics source
        text: Caption text
        max_width: Pixel budget
        sizes: Candidate sizes in strictly descending order

    Returns:
        CaptionFit: Width in pixels and size in points

    Raises:
        ValueError: If ``sizes`` is empty or not strictly descending
    """
    if not sizes:
        raise ValueError("at least one candidate font size is required")
    if any(a <= b for a, b in zip(sizes, sizes[1:])):
        raise ValueError("candidate font sizes must be strictly descending")

    for size in sizes:
        width = text_width(face, text, size)
        if width <= max_width:
            return CaptionFit(width=width, size=size)

    return CaptionFit(width=0, size=sizes[-1])
