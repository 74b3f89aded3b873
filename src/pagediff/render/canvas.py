"""Minimal 2D drawing capability used by the debug renderer."""
from __future__ import annotations

from typing import Protocol, Tuple

from PIL import Image, ImageDraw, ImageFont

Color = Tuple[int, int, int]


class Canvas(Protocol):
    """The three drawing calls the renderer needs.

    Coordinates are pixels with the origin at the top-left corner.
    """

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, width: int) -> None:
        ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        ...

    def draw_text(self, x: float, y: float, text: str, color: Color, size: int) -> None:
        ...


class PillowCanvas:
    """:class:`Canvas` drawing onto a Pillow image in place."""

    def __init__(self, image: Image.Image) -> None:
        self.image = image
        self._draw = ImageDraw.Draw(image)
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, width: int) -> None:
        self._draw.rectangle(_box(x, y, w, h), outline=color, width=width)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self._draw.rectangle(_box(x, y, w, h), fill=color)

    def draw_text(self, x: float, y: float, text: str, color: Color, size: int) -> None:
        self._draw.text((x, y), text, fill=color, font=self._font(size))

    def _font(self, size: int):
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]


def _box(x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
    # ImageDraw boxes are inclusive on both ends
    x0, y0 = int(round(x)), int(round(y))
    x1 = max(x0, int(round(x + w)) - 1)
    y1 = max(y0, int(round(y + h)) - 1)
    return x0, y0, x1, y1
