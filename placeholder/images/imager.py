"""Placeholder image rendering.

The request handler only relies on the :class:`Imager` protocol; the
Pillow-backed :class:`PlaceholderImager` is the implementation installed on
the application by default.
"""

from __future__ import annotations

import asyncio
from io import BytesIO
from pathlib import Path
from typing import Protocol

from fastapi.responses import Response
from PIL import Image, ImageDraw, ImageFont

_MEDIA_TYPE = "image/png"
_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:\\Windows\\Fonts\\arial.ttf",
)


class Imager(Protocol):
    async def send_image(
        self,
        width: int,
        height: int,
        square: int | None,
        text: str | None,
    ) -> Response:
        """Produce the HTTP response carrying the rendered image."""
        ...


def _load_font(px: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for candidate in _FONT_CANDIDATES:
        if Path(candidate).exists():
            try:
                return ImageFont.truetype(candidate, px)
            except OSError:
                continue
    return ImageFont.load_default()


def _center_crop_square(img: Image.Image) -> Image.Image:
    side = min(img.width, img.height)
    left = (img.width - side) // 2
    top = (img.height - side) // 2
    return img.crop((left, top, left + side, top + side))


class PlaceholderImager:
    """Render a flat PNG with a centered label."""

    def __init__(self, *, background: str = "#cccccc", foreground: str = "#555555") -> None:
        self.background = background
        self.foreground = foreground

    def render(self, width: int, height: int, square: int | None = None, text: str | None = None) -> bytes:
        """Return PNG bytes for a ``width`` x ``height`` placeholder.

        The label is ``text`` when given, otherwise the requested dimensions. With
        ``square`` the canvas is center-cropped and scaled to ``square`` x ``square``.
        """

        img = Image.new("RGB", (width, height), color=self.background)
        label = text if text else f"{width}x{height}"
        font = _load_font(max(10, min(width, height) // 8))
        draw = ImageDraw.Draw(img)
        left, top, right, bottom = draw.textbbox((0, 0), label, font=font)
        x = (width - (right - left)) // 2 - left
        y = (height - (bottom - top)) // 2 - top
        draw.text((x, y), label, fill=self.foreground, font=font)

        if square is not None:
            img = _center_crop_square(img).resize((square, square), Image.Resampling.LANCZOS)

        buffer = BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    async def send_image(
        self,
        width: int,
        height: int,
        square: int | None,
        text: str | None,
    ) -> Response:
        content = await asyncio.to_thread(self.render, width, height, square, text)
        return Response(content=content, media_type=_MEDIA_TYPE)
