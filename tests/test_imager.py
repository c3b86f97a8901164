"""Tests for the Pillow-backed placeholder imager."""

from io import BytesIO

import pytest
from PIL import Image

from placeholder.images.imager import PlaceholderImager


def test_render_produces_png_of_requested_size() -> None:
    data = PlaceholderImager().render(320, 180)

    with Image.open(BytesIO(data)) as img:
        assert img.format == "PNG"
        assert img.size == (320, 180)


def test_render_square_crops_to_requested_side() -> None:
    data = PlaceholderImager(background="#ffffff").render(400, 200, square=64, text="hello")

    with Image.open(BytesIO(data)) as img:
        assert img.size == (64, 64)
        assert img.getpixel((0, 0)) == (255, 255, 255)


@pytest.mark.asyncio
async def test_send_image_returns_png_response() -> None:
    response = await PlaceholderImager().send_image(16, 8, None, " ")

    assert response.status_code == 200
    assert response.media_type == "image/png"
    with Image.open(BytesIO(response.body)) as img:
        assert img.size == (16, 8)
