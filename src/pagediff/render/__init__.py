"""Debug renderings of a comparison."""

from .annotate import draw_regions, encode_mask, render
from .canvas import Canvas, PillowCanvas

__all__ = ["Canvas", "PillowCanvas", "draw_regions", "encode_mask", "render"]
