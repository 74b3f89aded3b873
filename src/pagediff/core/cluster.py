"""Group changed cells into regions with normalized bounding boxes."""
from __future__ import annotations

import logging
from collections import deque
from typing import List

from ..errors import InvalidInput
from ..types import Grid, Region

logger = logging.getLogger(__name__)

# 8-connectivity: orthogonal first, then diagonal
_NEIGHBOURS = (
    (-1, 0), (1, 0), (0, -1), (0, 1),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)


def cluster(grid: Grid, cell_size: int, image_width: int, image_height: int) -> List[Region]:
    """Return one region per 8-connected component of changed cells.

    Components are discovered in row-major order and numbered ``"1"``,
    ``"2"``, ... in that order. Bounding boxes are ``(y_min, x_min, y_max,
    x_max)`` in percent of the image height and width, clamped to
    ``[0, 100]`` for the partial cells on the right and bottom edges.
    """

    if image_width <= 0 or image_height <= 0:
        raise InvalidInput(f"Image must have positive dimensions, got {image_width}x{image_height}")

    rows, cols = grid.rows, grid.cols
    changed = grid.changed.ravel().tolist()
    visited = bytearray(rows * cols)
    regions: List[Region] = []

    for r in range(rows):
        for c in range(cols):
            idx = r * cols + c
            if not changed[idx] or visited[idx]:
                continue

            visited[idx] = 1
            queue = deque([(r, c)])
            min_r = max_r = r
            min_c = max_c = c

            while queue:
                cur_r, cur_c = queue.popleft()
                min_r = min(min_r, cur_r)
                max_r = max(max_r, cur_r)
                min_c = min(min_c, cur_c)
                max_c = max(max_c, cur_c)

                for dr, dc in _NEIGHBOURS:
                    n_r, n_c = cur_r + dr, cur_c + dc
                    if 0 <= n_r < rows and 0 <= n_c < cols:
                        n_idx = n_r * cols + n_c
                        if changed[n_idx] and not visited[n_idx]:
                            visited[n_idx] = 1
                            queue.append((n_r, n_c))

            box = (
                max(0.0, min_r * cell_size / image_height * 100),
                max(0.0, min_c * cell_size / image_width * 100),
                min(100.0, (max_r + 1) * cell_size / image_height * 100),
                min(100.0, (max_c + 1) * cell_size / image_width * 100),
            )
            regions.append(Region(id=str(len(regions) + 1), bounding_box=box))

    logger.debug("Clustered %d changed cells into %d regions", grid.changed_cells(), len(regions))
    return regions
