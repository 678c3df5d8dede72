"""Tests for decoding uploaded photos."""

import base64

import pytest

from breedmatch.services.data_url import DecodedImage, InvalidDataURL, parse_data_url

PIXELS = b"\x89PNG\r\n\x1a\nfake-image-bytes"
ENCODED = base64.b64encode(PIXELS).decode()


def test_png_data_url():
    image = parse_data_url(f"data:image/png;base64,{ENCODED}")

    assert image.media_type == "image/png"
    assert image.data == PIXELS


def test_missing_media_type_defaults_to_jpeg():
    assert parse_data_url(f"data:;base64,{ENCODED}").media_type == "image/jpeg"


def test_bare_base64_is_accepted():
    image = parse_data_url(ENCODED)

    assert image.media_type == "image/jpeg"
    assert image.data == PIXELS


@pytest.mark.parametrize("value", [
    "data:image/jpeg;base64,",
    "data:image/jpeg;base64,not base64 at all!",
    "",
])
def test_invalid_data(value):
    with pytest.raises(InvalidDataURL):
        parse_data_url(value)


def test_to_data_url():
    image = DecodedImage(media_type="image/webp", data=PIXELS)
    assert image.to_data_url() == f"data:image/webp;base64,{ENCODED}"
