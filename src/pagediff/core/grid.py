"""Grid differ: per-pixel color divergence aggregated into fixed-size cells."""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Tuple

import numpy as np

from ..errors import DimensionMismatch, InvalidInput
from ..presets import DiffParams
from ..types import MAGENTA, DiffMask, Grid, RasterImage
from .cancel import CancelToken

logger = logging.getLogger(__name__)


def check_same_size(old: RasterImage, new: RasterImage) -> None:
    """Raise unless both rasters have the same positive width and height."""

    for image in (old, new):
        if image.width <= 0 or image.height <= 0:
            raise InvalidInput(f"Image must have positive dimensions, got {image.width}x{image.height}")
    if old.size != new.size:
        raise DimensionMismatch(old.size, new.size)


def diff(
    old: RasterImage,
    new: RasterImage,
    params: Optional[DiffParams] = None,
    *,
    cancel: Optional[CancelToken] = None,
    workers: int = 1,
) -> Tuple[Grid, DiffMask]:
    """Classify every cell of the canvas and build the full resolution mask.

    A pixel differs when ``|dR| + |dG| + |dB|`` exceeds
    ``params.pixel_threshold``; alpha is ignored. A cell is changed when more
    than ``params.cell_changed_threshold`` of its pixels differ.

    The canvas is scanned one band of cell rows at a time. ``cancel`` is
    checked before every band. With ``workers > 1`` bands are scanned on a
    thread pool; bands write disjoint slices of the outputs so the result does
    not depend on scheduling.
    """

    params = params or DiffParams()
    check_same_size(old, new)

    height, width = old.height, old.width
    cell_size = int(params.cell_size)
    rows = math.ceil(height / cell_size)
    cols = math.ceil(width / cell_size)

    mask = np.zeros((height, width, 4), dtype=np.uint8)
    counts = np.zeros((rows, cols), dtype=np.int64)

    def scan_band(row: int) -> None:
        if cancel is not None:
            cancel.raise_if_cancelled()
        y0 = row * cell_size
        y1 = min(y0 + cell_size, height)
        differing = _differing_pixels(
            old.pixels[y0:y1], new.pixels[y0:y1], params.pixel_threshold
        )
        mask[y0:y1][differing] = MAGENTA
        counts[row] = _count_per_cell(differing, cell_size, cols)

    if workers > 1 and rows > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # list() drains the iterator so worker exceptions propagate here
            list(pool.map(scan_band, range(rows)))
    else:
        for row in range(rows):
            scan_band(row)

    changed = counts > params.cell_changed_threshold
    grid = Grid(cell_size=cell_size, changed=changed, counts=counts)
    logger.debug(
        "Scanned %dx%d image as %dx%d grid: %d changed cells",
        width,
        height,
        rows,
        cols,
        grid.changed_cells(),
    )
    return grid, DiffMask(mask)


def _differing_pixels(band_old: np.ndarray, band_new: np.ndarray, threshold: int) -> np.ndarray:
    delta = np.abs(band_old[:, :, :3].astype(np.int16) - band_new[:, :, :3].astype(np.int16))
    return delta.sum(axis=2) > threshold


def _count_per_cell(differing: np.ndarray, cell_size: int, cols: int) -> np.ndarray:
    band_height, width = differing.shape
    padded = np.zeros((band_height, cols * cell_size), dtype=np.int64)
    padded[:, :width] = differing
    return padded.reshape(band_height, cols, cell_size).sum(axis=(0, 2))
