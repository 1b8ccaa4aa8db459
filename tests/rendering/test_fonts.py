"""Tests for the font metrics provider."""

from dataclasses import FrozenInstanceError

import pytest
from PIL import ImageFont

from meme_creator.exceptions import ErrorCode, FontLoadError
from meme_creator.rendering import Face, default_font_bytes, load_face


def test_load_face_reads_units_per_em(face: Face) -> None:
    """The embedded font declares its design grid."""
    assert face.units_per_em > 0
    assert face.advances


@pytest.mark.parametrize("data", [b"", b"definitely not a font", b"\x00\x01\x00\x00" + b"\x00" * 8])
def test_load_face_rejects_invalid_bytes(data: bytes) -> None:
    """Anything that is not a font program raises FontLoadError."""
    with pytest.raises(FontLoadError) as exc_info:
        load_face(data)
    assert exc_info.value.code == ErrorCode.FONT_LOAD_ERROR
    assert not exc_info.value.retryable


def test_advance_width_scales_with_size(face: Face) -> None:
    """Advances grow linearly with the point size, within rounding."""
    at_72 = face.advance_width(ord("M"), 72)
    at_36 = face.advance_width(ord("M"), 36)

    assert at_72 > 0
    assert abs(at_72 - 2 * at_36) <= 1


def test_advance_width_is_stable(face: Face) -> None:
    """The same query always gives the same whole-pixel answer."""
    widths = {face.advance_width(ord("W"), 48) for _ in range(5)}
    assert len(widths) == 1
    assert isinstance(widths.pop(), int)


def test_advance_width_at_zero_size(face: Face) -> None:
    assert face.advance_width(ord("A"), 0) == 0


def test_unmapped_codepoint_uses_notdef(face: Face) -> None:
    """Code points missing from the cmap fall back to glyph 0."""
    private_use = 0xF8FF0
    expected = (face.notdef_advance * 72 + face.units_per_em // 2) // face.units_per_em
    assert face.advance_width(private_use, 72) == expected


def test_face_is_read_only(face: Face) -> None:
    with pytest.raises(FrozenInstanceError):
        face.units_per_em = 1  # type: ignore[misc]


def test_raster_font_matches_size(face: Face) -> None:
    font = face.raster_font(36)
    assert isinstance(font, ImageFont.FreeTypeFont)
    assert font.size == 36


def test_default_font_bytes_from_path(tmp_path, font_bytes: bytes) -> None:
    """A configured font path overrides the embedded font."""
    path = tmp_path / "custom.ttf"
    path.write_bytes(font_bytes)

    assert default_font_bytes(str(path)) == font_bytes
    assert default_font_bytes() == font_bytes
