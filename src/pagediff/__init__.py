"""Deterministic visual difference detection for rendered document pages."""

from __future__ import annotations

from .compare import compare_files, compare_images, compare_pdfs
from .core import CancelToken, cluster, diff
from .errors import Cancelled, DecodeFailure, DimensionMismatch, InvalidInput, PageDiffError
from .presets import DiffParams, RenderStyle, get_preset, iter_presets
from .render import encode_mask, render
from .types import ComparisonResult, DiffMask, Grid, PageComparison, RasterImage, Region

__all__ = [
    "compare_images",
    "compare_files",
    "compare_pdfs",
    "diff",
    "cluster",
    "render",
    "encode_mask",
    "CancelToken",
    "ComparisonResult",
    "DiffMask",
    "Grid",
    "PageComparison",
    "RasterImage",
    "Region",
    "DiffParams",
    "RenderStyle",
    "get_preset",
    "iter_presets",
    "PageDiffError",
    "InvalidInput",
    "DimensionMismatch",
    "DecodeFailure",
    "Cancelled",
]

__version__ = "0.3.0"
