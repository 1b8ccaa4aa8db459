"""Caption fitting and compositing engine."""

from .compositor import CaptionLayout, compose, decode_image, encode_png, render_meme
from .fitter import DEFAULT_FONT_SIZES, CaptionFit, fit_caption
from .fonts import Face, default_font_bytes, load_face

__all__ = [
    "CaptionFit",
    "CaptionLayout",
    "DEFAULT_FONT_SIZES",
    "Face",
    "compose",
    "decode_image",
    "default_font_bytes",
    "encode_png",
    "fit_caption",
    "load_face",
    "render_meme",
]
