import numpy as np
import pytest

from pagediff import compare_images
from pagediff.core import check_same_size
from pagediff.errors import DimensionMismatch, InvalidInput, PageDiffError
from pagediff.types import RasterImage


def _blank(width, height):
    return RasterImage.from_array(np.zeros((height, width, 4), dtype=np.uint8))


def test_mismatch_reports_both_sizes():
    with pytest.raises(DimensionMismatch) as excinfo:
        check_same_size(_blank(100, 100), _blank(200, 200))
    assert "100x100" in str(excinfo.value)
    assert "200x200" in str(excinfo.value)


def test_mismatch_in_one_axis_only():
    with pytest.raises(DimensionMismatch):
        compare_images(_blank(100, 50), _blank(100, 51))


def test_errors_share_a_base_class():
    assert issubclass(DimensionMismatch, PageDiffError)
    assert issubclass(InvalidInput, ValueError)


@pytest.mark.parametrize("shape", [(0, 0, 4), (10, 0, 4), (10, 10, 3), (10, 10)])
def test_invalid_pixel_arrays(shape):
    with pytest.raises(InvalidInput):
        RasterImage(np.zeros(shape, dtype=np.uint8))


def test_non_uint8_pixels_rejected():
    with pytest.raises(InvalidInput):
        RasterImage.from_array(np.zeros((4, 4, 3), dtype=np.float32))
