"""Visual difference pipeline: diff, cluster, annotate, encode."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .core.cancel import CancelToken
from .core.cluster import cluster
from .core.grid import check_same_size, diff
from .errors import DimensionMismatch
from .presets import DiffParams, RenderStyle
from .render.annotate import encode_mask, render
from .types import ComparisonResult, PageComparison, RasterImage
from .utils import raster

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def compare_images(
    old: RasterImage,
    new: RasterImage,
    *,
    params: Optional[DiffParams] = None,
    style: Optional[RenderStyle] = None,
    include_mask: bool = True,
    annotate: bool = True,
    cancel: Optional[CancelToken] = None,
    workers: int = 1,
) -> ComparisonResult:
    """Compare two equally sized rasters.

    ``include_mask`` and ``annotate`` switch off the mask encoding and the
    two annotated copies; the regions are always computed. Errors from any
    stage propagate unchanged and no partial result is produced.
    """

    params = params or DiffParams()
    check_same_size(old, new)

    grid, mask = diff(old, new, params, cancel=cancel, workers=workers)
    regions = cluster(grid, grid.cell_size, old.width, old.height)

    annotated_old = annotated_new = mask_image = None
    if annotate:
        annotated_old = render(old, regions, style)
        annotated_new = render(new, regions, style)
    if include_mask:
        mask_image = encode_mask(mask)

    logger.debug("Comparison of %dx%d rasters found %d regions", old.width, old.height, len(regions))
    return ComparisonResult(
        width=old.width,
        height=old.height,
        regions=regions,
        annotated_old=annotated_old,
        annotated_new=annotated_new,
        mask_image=mask_image,
        params=params.to_dict(),
    )


def compare_files(old_path: PathLike, new_path: PathLike, **kwargs) -> ComparisonResult:
    """Decode two image files concurrently and compare them."""

    with ThreadPoolExecutor(max_workers=2) as pool:
        old_future = pool.submit(raster.load_image, old_path)
        new_future = pool.submit(raster.load_image, new_path)
        old, new = old_future.result(), new_future.result()
    return compare_images(old, new, **kwargs)


def compare_pdfs(
    old_pdf: PathLike,
    new_pdf: PathLike,
    *,
    scale: float = 2.0,
    pages: Optional[Iterable[int]] = None,
    **kwargs,
) -> List[PageComparison]:
    """Rasterize matching pages of two PDFs and compare each pair.

    ``pages`` holds zero-based page indexes; by default every page present in
    both documents is compared. Remaining ``kwargs`` go to
    :func:`compare_images`.
    """

    with raster.open_pdf(old_pdf) as doc_old, raster.open_pdf(new_pdf) as doc_new:
        page_count = min(len(doc_old), len(doc_new))
        if len(doc_old) != len(doc_new):
            logger.warning(
                "Page counts differ (%d vs %d); comparing the first %d pages",
                len(doc_old),
                len(doc_new),
                page_count,
            )
        indexes = range(page_count) if pages is None else list(pages)

        results: List[PageComparison] = []
        for index in indexes:
            image_old = raster.render_page(doc_old, index, scale)
            image_new = raster.render_page(doc_new, index, scale)
            if image_old.size != image_new.size:
                raise DimensionMismatch(image_old.size, image_new.size)
            result = compare_images(image_old, image_new, **kwargs)
            logger.info("Page %d: %d regions", index + 1, len(result.regions))
            results.append(PageComparison(index=index, scale=scale, result=result))
        return results
