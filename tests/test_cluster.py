import numpy as np
import pytest

from pagediff.core import cluster
from pagediff.errors import InvalidInput
from pagediff.types import Grid


def _grid(rows, cols, cells, cell_size=20):
    changed = np.zeros((rows, cols), dtype=bool)
    for r, c in cells:
        changed[r, c] = True
    return Grid(cell_size=cell_size, changed=changed, counts=changed.astype(np.int64) * 10)


def test_empty_grid_has_no_regions():
    assert cluster(_grid(5, 5, []), 20, 100, 100) == []


def test_single_cell_box_in_percent():
    regions = cluster(_grid(5, 5, [(1, 2)]), 20, 100, 100)
    assert len(regions) == 1
    assert regions[0].id == "1"
    assert regions[0].bounding_box == pytest.approx((20.0, 40.0, 40.0, 60.0))


def test_ids_follow_row_major_discovery():
    regions = cluster(_grid(5, 5, [(3, 0), (0, 4)]), 20, 100, 100)
    assert [r.id for r in regions] == ["1", "2"]
    # row 0 is scanned first, so the right-hand cell comes first
    assert regions[0].bounding_box == pytest.approx((0.0, 80.0, 20.0, 100.0))
    assert regions[1].bounding_box == pytest.approx((60.0, 0.0, 80.0, 20.0))


def test_diagonal_neighbours_merge():
    regions = cluster(_grid(5, 5, [(0, 0), (1, 1), (2, 2)]), 20, 100, 100)
    assert len(regions) == 1
    assert regions[0].bounding_box == pytest.approx((0.0, 0.0, 60.0, 60.0))


def test_gap_of_one_cell_separates_regions():
    regions = cluster(_grid(1, 5, [(0, 0), (0, 2)]), 20, 100, 20)
    assert len(regions) == 2


def test_concave_shape_is_one_region():
    # U shape: the BFS has to walk down, across and back up
    cells = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2)]
    regions = cluster(_grid(3, 3, cells), 20, 60, 60)
    assert len(regions) == 1
    assert regions[0].bounding_box == pytest.approx((0.0, 0.0, 100.0, 100.0))


def test_partial_edge_cells_are_clamped():
    # 50x50 image with 20px cells: the last row/column is only 10px wide
    regions = cluster(_grid(3, 3, [(2, 2)]), 20, 50, 50)
    assert regions[0].bounding_box == pytest.approx((80.0, 80.0, 100.0, 100.0))


def test_large_component_does_not_recurse():
    rows, cols = 400, 400
    changed = np.ones((rows, cols), dtype=bool)
    grid = Grid(cell_size=1, changed=changed, counts=changed.astype(np.int64))
    regions = cluster(grid, 1, cols, rows)
    assert len(regions) == 1
    assert regions[0].bounding_box == pytest.approx((0.0, 0.0, 100.0, 100.0))


def test_every_changed_cell_is_covered():
    rng = np.random.default_rng(3)
    changed = rng.random((30, 30)) > 0.6
    grid = Grid(cell_size=10, changed=changed, counts=changed.astype(np.int64))
    regions = cluster(grid, 10, 300, 300)

    owners = np.zeros(changed.shape, dtype=int)
    for region in regions:
        x0, y0, x1, y1 = region.to_pixels(30, 30)
        owners[y0:y1, x0:x1][changed[y0:y1, x0:x1]] += 1
    assert (owners[changed] >= 1).all()
    assert len({r.id for r in regions}) == len(regions)


def test_rejects_empty_image_size():
    with pytest.raises(InvalidInput):
        cluster(_grid(1, 1, [(0, 0)]), 20, 0, 20)
