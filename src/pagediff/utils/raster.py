"""Decode image files and rasterize PDF pages into :class:`RasterImage`."""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Union

import fitz
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import DecodeFailure, InvalidInput
from ..types import RasterImage

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes]

PDF_SUFFIXES = {".pdf"}


def is_pdf(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in PDF_SUFFIXES


def load_image(source: Source) -> RasterImage:
    """Decode a PNG/JPEG/... file (path or encoded bytes) into RGBA pixels."""

    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    try:
        with Image.open(handle) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as exc:
        raise DecodeFailure(f"Could not decode image {_describe(source)}: {exc}") from exc
    return RasterImage(np.array(rgba, dtype=np.uint8))


def page_count(pdf_path: Union[str, Path]) -> int:
    doc = open_pdf(pdf_path)
    try:
        return len(doc)
    finally:
        doc.close()


def rasterize_page(pdf_path: Union[str, Path], page_index: int, scale: float = 2.0) -> RasterImage:
    """Render one page at ``scale`` (1.0 = 72 dpi) as opaque RGBA."""

    doc = open_pdf(pdf_path)
    try:
        return render_page(doc, page_index, scale)
    finally:
        doc.close()


def render_page(doc: fitz.Document, page_index: int, scale: float = 2.0) -> RasterImage:
    if scale <= 0:
        raise InvalidInput(f"Render scale must be positive, got {scale}")
    if not 0 <= page_index < len(doc):
        raise InvalidInput(f"Page {page_index + 1} out of range (document has {len(doc)} pages)")
    page = doc[page_index]
    mat = fitz.Matrix(scale, scale)
    pix = page.get_pixmap(matrix=mat, colorspace=fitz.csRGB, alpha=False)
    if pix.width <= 0 or pix.height <= 0:
        raise InvalidInput(f"Page {page_index + 1} renders to an empty raster")
    rgb = np.frombuffer(pix.samples, dtype=np.uint8).reshape(pix.height, pix.stride)
    rgb = rgb[:, : pix.width * 3].reshape(pix.height, pix.width, 3)
    logger.debug("Rendered page %d at scale %.2f: %dx%d", page_index + 1, scale, pix.width, pix.height)
    return RasterImage.from_array(rgb)


def open_pdf(pdf_path: Union[str, Path]) -> fitz.Document:
    try:
        return fitz.open(str(pdf_path))
    except (RuntimeError, ValueError, OSError) as exc:
        raise DecodeFailure(f"Could not open PDF {pdf_path}: {exc}") from exc


def _describe(source: Source) -> str:
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    return str(source)
