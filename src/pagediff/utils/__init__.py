"""Utility functions used across the project."""

from .raster import is_pdf, load_image, page_count, rasterize_page

__all__ = [
    "is_pdf",
    "load_image",
    "page_count",
    "rasterize_page",
]
