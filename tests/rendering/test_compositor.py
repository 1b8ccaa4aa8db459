"""Tests for meme compositing."""

from io import BytesIO

import pytest
from PIL import Image, ImageChops, ImageDraw

from meme_creator.exceptions import DecodeError, FontLoadError, GlyphDrawError
from meme_creator.rendering import (
    CaptionLayout,
    Face,
    compose,
    decode_image,
    encode_png,
    fit_caption,
    render_meme,
)

from tests.utils.images import encode_image

WHITE = (255, 255, 255, 255)


def changed_box(before: Image.Image, after: Image.Image):
    """Bounding box of pixels that differ, or None."""
    return ImageChops.difference(before.convert("RGBA"), after.convert("RGBA")).getbbox(alpha_only=False)


@pytest.mark.parametrize("size", [(500, 500), (320, 180), (1024, 768), (60, 40)])
@pytest.mark.parametrize("fmt", ["PNG", "JPEG"])
def test_output_matches_source_dimensions(face: Face, size, fmt: str) -> None:
    source = decode_image(encode_image(size=size, fmt=fmt))

    result = compose(face, source, "TOP TEXT", "BOTTOM TEXT")

    assert result.size == size
    assert result.mode == "RGBA"


def test_empty_captions_reproduce_source(face: Face) -> None:
    source = decode_image(encode_image(size=(300, 200), color=(12, 200, 99)))

    result = compose(face, source, "", "")

    assert changed_box(source, result) is None


def test_transparency_is_preserved(face: Face) -> None:
    source = Image.new("RGBA", (200, 200), (10, 20, 30, 0))

    result = compose(face, source, "", "")

    assert result.getpixel((100, 100)) == (10, 20, 30, 0)


def test_source_image_is_not_modified(face: Face) -> None:
    source = Image.new("RGB", (500, 500), (0, 0, 0))
    before = source.copy()

    compose(face, source, "ONE", "DOES NOT SIMPLY")

    assert changed_box(before, source) is None


def test_top_caption_is_drawn_centered_near_top(face: Face) -> None:
    source = Image.new("RGB", (500, 500), (0, 0, 0))

    result = compose(face, source, "ONE", "")
    box = changed_box(source, result)

    assert box is not None
    left, upper, right, lower = box
    # baseline sits at 15 + 72 for a caption that fits at the largest size
    assert upper >= 15
    assert lower <= 15 + 72 + 20
    assert abs((left + right) / 2 - 250) <= 10
    assert WHITE in set(result.crop(box).getdata())


def test_bottom_caption_is_drawn_in_bottom_band(face: Face) -> None:
    source = Image.new("RGB", (500, 500), (0, 0, 0))

    result = compose(face, source, "", "DOES NOT SIMPLY")
    box = changed_box(source, result)

    assert box is not None
    fit = fit_caption(face, "DOES NOT SIMPLY", 500)
    baseline = 500 - 100 + fit.size
    assert box[1] >= 500 - 100
    assert box[1] < baseline <= box[3] + 20


def test_captions_are_fitted_independently(face: Face) -> None:
    top, bottom = "HI", "THIS CAPTION IS MUCH TOO LONG FOR THE LARGEST SIZE"
    top_fit = fit_caption(face, top, 500)
    bottom_fit = fit_caption(face, bottom, 500)
    assert top_fit.size != bottom_fit.size

    source = Image.new("RGB", (500, 500), (0, 0, 0))
    result = compose(face, source, top, bottom)

    upper, lower = (0, 0, 500, 250), (0, 250, 500, 500)
    top_box = changed_box(source.crop(upper), result.crop(upper))
    bottom_box = changed_box(source.crop(lower), result.crop(lower))
    assert top_box is not None
    assert bottom_box is not None
    assert (top_box[3] - top_box[1]) > (bottom_box[3] - bottom_box[1])


def test_layout_constants_move_captions(face: Face) -> None:
    source = Image.new("RGB", (500, 500), (0, 0, 0))

    default_box = changed_box(source, compose(face, source, "ONE", ""))
    shifted_box = changed_box(
        source, compose(face, source, "ONE", "", CaptionLayout(top_margin=115))
    )

    assert shifted_box[1] - default_box[1] == 100


def test_render_meme_loads_font(font_bytes: bytes) -> None:
    source = decode_image(encode_image())

    result = render_meme(font_bytes, source, "ONE", "DOES NOT SIMPLY")

    assert result.size == (500, 500)


def test_render_meme_rejects_corrupt_font() -> None:
    source = decode_image(encode_image())

    with pytest.raises(FontLoadError):
        render_meme(b"corrupt", source, "ONE", "TWO")


def test_draw_failure_is_atomic(face: Face, mocker) -> None:
    """A rasterizer failure surfaces as GlyphDrawError and returns nothing."""
    mocker.patch.object(ImageDraw.ImageDraw, "text", side_effect=OSError("raster failed"))
    source = decode_image(encode_image())

    with pytest.raises(GlyphDrawError) as exc_info:
        compose(face, source, "ONE", "TWO")
    assert not exc_info.value.retryable


def test_decode_detects_format_from_content() -> None:
    assert decode_image(encode_image(fmt="JPEG")).format == "JPEG"
    assert decode_image(encode_image(fmt="PNG")).format == "PNG"


@pytest.mark.parametrize("data", [b"", b"not an image", encode_image(fmt="GIF", mode="P", color=1)])
def test_decode_rejects_unsupported_bytes(data: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_image(data)


def test_encode_png_is_deterministic(face: Face) -> None:
    source = decode_image(encode_image())

    first = encode_png(compose(face, source, "ONE", "DOES NOT SIMPLY"))
    second = encode_png(compose(face, source, "ONE", "DOES NOT SIMPLY"))

    assert first == second
    assert Image.open(BytesIO(first)).format == "PNG"


def test_decode_rejects_decompression_bomb(mocker) -> None:
    """An image past Pillow's pixel limit is a terminal decode failure."""
    data = encode_image(size=(200, 200), mode="L", color=0)
    mocker.patch.object(Image, "MAX_IMAGE_PIXELS", 1000)

    with pytest.raises(DecodeError) as exc_info:
        decode_image(data)
    assert not exc_info.value.retryable
    assert isinstance(exc_info.value.original_error, Image.DecompressionBombError)
