"""Meme compositing: draw top and bottom captions onto a template image."""

from dataclasses import dataclass
from io import BytesIO
from typing import Sequence, Tuple

from PIL import Image, ImageDraw, UnidentifiedImageError

from ..exceptions import DecodeError, GlyphDrawError
from ..utils.logging import get_logger
from .fitter import DEFAULT_FONT_SIZES, fit_caption
from .fonts import Face, load_face

logger = get_logger(__name__)

SUPPORTED_FORMATS = ("PNG", "JPEG")


@dataclass(frozen=True)
class CaptionLayout:
    """Placement policy for captions.

    Attributes:
        top_margin: Pixels between the top edge and the top caption, before the size offset
        bottom_band: Height of the band reserved for the bottom caption
        font_sizes: Candidate sizes, largest first
        fill: RGBA caption color
    """

    top_margin: int = 15
    bottom_band: int = 100
    font_sizes: Sequence[int] = DEFAULT_FONT_SIZES
    fill: Tuple[int, int, int, int] = (255, 255, 255, 255)


DEFAULT_LAYOUT = CaptionLayout()


def decode_image(data: bytes) -> Image.Image:
    """
    Decode template bytes, sniffing the format from content.

    Args:
        data: Encoded image

    Returns:
        Image.Image: Fully loaded image

    Raises:
        DecodeError: If the bytes are neither PNG nor JPEG, or decode to too many pixels
    """
    try:
        image = Image.open(BytesIO(data), formats=SUPPORTED_FORMATS)
        image.load()
    except Image.DecompressionBombError as e:
        raise DecodeError("template has too many pixels to decode", original_error=e) from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError("template is not a PNG or JPEG image", original_error=e) from e
    return image


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG."""
    output = BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def _draw_caption(
    draw: ImageDraw.ImageDraw,
    face: Face,
    text: str,
    canvas_width: int,
    baseline_origin: int,
    layout: CaptionLayout,
) -> None:
    if not text:
        return

    fit = fit_caption(face, text, canvas_width, layout.font_sizes)
    x = (canvas_width - fit.width) // 2
    y = baseline_origin + fit.size
    font = face.raster_font(fit.size)
    draw.text((x, y), text, font=font, fill=layout.fill, anchor="ls")


def compose(
    face: Face,
    source: Image.Image,
    top: str,
    bottom: str,
    layout: CaptionLayout = DEFAULT_LAYOUT,
) -> Image.Image:
    """
    Copy ``source`` onto a new RGBA canvas and draw both captions.

    The captions are fitted independently and may end up at different sizes.
    Empty captions draw nothing.

    Args:
        face: Loaded font face
        source: Template image
        top: Top caption
        bottom: Bottom caption
        layout: Placement policy

    Returns:
        Image.Image: The composed canvas

    Raises:
        GlyphDrawError: If rasterization fails; no partial canvas is returned
    """
    # convert() always returns a new image, so the template stays untouched
    canvas = source.convert("RGBA")
    width, height = canvas.size

    draw = ImageDraw.Draw(canvas)
    try:
        _draw_caption(draw, face, top, width, layout.top_margin, layout)
        _draw_caption(draw, face, bottom, width, height - layout.bottom_band, layout)
    except (OSError, ValueError, TypeError) as e:
        logger.error("caption_draw_failed", error=str(e))
        raise GlyphDrawError("drawing caption failed", original_error=e) from e

    return canvas


def render_meme(
    font_bytes: bytes,
    source: Image.Image,
    top: str,
    bottom: str,
    layout: CaptionLayout = DEFAULT_LAYOUT,
) -> Image.Image:
    """Load ``font_bytes`` and compose a meme.

    Raises:
        FontLoadError: If the font program is invalid
        GlyphDrawError: If rasterization fails
    """
    return compose(load_face(font_bytes), source, top, bottom, layout)
