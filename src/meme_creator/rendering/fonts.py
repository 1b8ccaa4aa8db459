"""Font metrics provider.

Glyph advances are read straight from the font's ``hmtx`` table in design
units and scaled linearly, so widths never depend on hinting, display
resolution or the rasterizer. Pillow is only used to draw.
"""

from dataclasses import dataclass, field
from importlib import resources
from io import BytesIO
from pathlib import Path
from typing import Mapping, Optional, Protocol

from fontTools.ttLib import TTFont
from PIL import ImageFont

from ..exceptions import FontLoadError

# Fixed rendering resolution: one point is one pixel.
DPI = 72

EMBEDDED_FONT = "Lato-Regular.ttf"


class GlyphMetrics(Protocol):
    """Anything that can answer advance-width queries."""

    def advance_width(self, codepoint: int, size: int) -> int:
        ...


@dataclass(frozen=True)
class Face:
    """A loaded font program.

    Read-only after construction and safe to share between threads.

    Attributes:
        font_bytes: Raw font program, kept for rasterization
        units_per_em: Design units per em square
        advances: Unscaled advance width per mapped code point
        notdef_advance: Unscaled advance of glyph 0, used for unmapped code points
    """

    font_bytes: bytes = field(repr=False)
    units_per_em: int
    advances: Mapping[int, int] = field(repr=False)
    notdef_advance: int

    def advance_width(self, codepoint: int, size: int) -> int:
        """Horizontal advance of one glyph in whole pixels at ``size`` points."""
        advance = self.advances.get(codepoint, self.notdef_advance)
        scaled = advance * size * DPI // 72
        return (scaled + self.units_per_em // 2) // self.units_per_em

    def raster_font(self, size: int) -> ImageFont.FreeTypeFont:
        """Build a Pillow font for drawing at ``size`` points.

        A fresh FreeType face is created on every call so concurrent renders
        never share rasterizer state.
        """
        try:
            return ImageFont.truetype(
                BytesIO(self.font_bytes),
                size=size,
                layout_engine=ImageFont.Layout.BASIC,
            )
        except OSError as e:
            raise FontLoadError("rasterizer rejected font", original_error=e) from e


def load_face(font_bytes: bytes) -> Face:
    """Parse a TrueType/OpenType font program.

    Args:
        font_bytes: Raw font file contents

    Returns:
        Face: The loaded face

    Raises:
        FontLoadError: If the bytes are not a usable font program
    """
    if not font_bytes:
        raise FontLoadError("font program is empty")

    try:
        font = TTFont(BytesIO(font_bytes), lazy=False)
        units_per_em = font["head"].unitsPerEm
        metrics = font["hmtx"].metrics
        cmap = font.getBestCmap() or {}
        notdef = font.getGlyphOrder()[0]
        advances = {cp: metrics[name][0] for cp, name in cmap.items() if name in metrics}
        notdef_advance = metrics[notdef][0]
    # fontTools surfaces corrupt input as TTLibError, struct.error, KeyError and others
    except Exception as e:
        raise FontLoadError("not a valid font program", original_error=e) from e

    if units_per_em <= 0:
        raise FontLoadError("font declares no units per em")

    return Face(
        font_bytes=font_bytes,
        units_per_em=units_per_em,
        advances=advances,
        notdef_advance=notdef_advance,
    )


def default_font_bytes(path: Optional[str] = None) -> bytes:
    """Return the embedded font, or the font at ``path`` when given."""
    if path:
        return Path(path).read_bytes()
    return resources.files("meme_creator.fonts").joinpath(EMBEDDED_FONT).read_bytes()
