"""Burn region boxes into copies of the inputs and encode the diff mask."""
from __future__ import annotations

import io
from typing import Iterable, Optional

from PIL import Image

from ..presets import RenderStyle
from ..types import DiffMask, RasterImage, Region
from .canvas import Canvas, PillowCanvas


def draw_regions(
    canvas: Canvas,
    width: int,
    height: int,
    regions: Iterable[Region],
    style: Optional[RenderStyle] = None,
) -> None:
    """Draw a box and an id tag for every region, in list order.

    The tag sits on top of the box's top-left corner; for boxes touching the
    top edge it is moved down to stay on the canvas.
    """

    style = style or RenderStyle()
    for region in regions:
        y_min, x_min, y_max, x_max = region.bounding_box
        x = x_min / 100 * width
        y = y_min / 100 * height
        w = (x_max - x_min) / 100 * width
        h = (y_max - y_min) / 100 * height

        canvas.stroke_rect(x, y, w, h, style.box_color, style.stroke_width)

        label_y = max(0.0, y - style.label_height)
        canvas.fill_rect(x, label_y, style.label_width, style.label_height, style.box_color)
        canvas.draw_text(x + 5, label_y, region.id, style.text_color, style.font_size)


def render(image: RasterImage, regions: Iterable[Region], style: Optional[RenderStyle] = None) -> bytes:
    """Return a JPEG copy of ``image`` with the regions outlined and labelled."""

    style = style or RenderStyle()
    copy = Image.fromarray(image.pixels).convert("RGB")
    draw_regions(PillowCanvas(copy), image.width, image.height, regions, style)
    buffer = io.BytesIO()
    copy.save(buffer, format="JPEG", quality=style.jpeg_quality)
    return buffer.getvalue()


def encode_mask(mask: DiffMask) -> bytes:
    """Lossless PNG of the mask with its alpha channel intact."""

    buffer = io.BytesIO()
    Image.fromarray(mask.pixels).save(buffer, format="PNG")
    return buffer.getvalue()
