"""Data structures shared by the differ, the clusterer and the renderer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import InvalidInput

BoundingBox = Tuple[float, float, float, float]  # y_min, x_min, y_max, x_max in percent
RectPx = Tuple[int, int, int, int]

MAGENTA = (255, 0, 255, 255)


@dataclass(frozen=True, eq=False)
class RasterImage:
    """RGBA pixels, shape ``(height, width, 4)``, dtype ``uint8``."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = self.pixels
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidInput(f"Expected an RGBA array of shape (h, w, 4), got {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise InvalidInput(f"Image must have positive dimensions, got {pixels.shape[1]}x{pixels.shape[0]}")
        if pixels.dtype != np.uint8:
            raise InvalidInput(f"Expected uint8 pixels, got {pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "RasterImage":
        """Build an image from a flat row-major RGBA buffer."""

        if width <= 0 or height <= 0:
            raise InvalidInput(f"Image must have positive dimensions, got {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise InvalidInput(f"Buffer holds {len(data)} bytes, expected {expected} for {width}x{height} RGBA")
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4).copy()
        return cls(array)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RasterImage":
        """Accept gray ``(h, w)``, RGB ``(h, w, 3)`` or RGBA ``(h, w, 4)`` arrays.

        Missing alpha is filled in as fully opaque.
        """

        array = np.asarray(array)
        if array.dtype != np.uint8:
            raise InvalidInput(f"Expected uint8 pixels, got {array.dtype}")
        if array.ndim == 2:
            array = np.repeat(array[:, :, None], 3, axis=2)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise InvalidInput(f"Unsupported pixel array shape {array.shape}")
        if array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        return cls(np.ascontiguousarray(array))

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()


@dataclass(frozen=True, eq=False)
class Grid:
    """Per-cell change classification of one comparison."""

    cell_size: int
    changed: np.ndarray  # bool, (rows, cols)
    counts: np.ndarray  # differing pixels per cell, (rows, cols)

    @property
    def rows(self) -> int:
        return int(self.changed.shape[0])

    @property
    def cols(self) -> int:
        return int(self.changed.shape[1])

    def changed_cells(self) -> int:
        return int(np.count_nonzero(self.changed))


@dataclass(frozen=True, eq=False)
class DiffMask:
    """Full resolution mask: opaque magenta where pixels differ, transparent elsewhere."""

    pixels: np.ndarray  # uint8, (height, width, 4)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def differing(self) -> np.ndarray:
        """Boolean ``(height, width)`` array of differing pixels."""

        return self.pixels[:, :, 3] == 255


@dataclass(frozen=True)
class Region:
    id: str
    bounding_box: BoundingBox

    def to_pixels(self, width: int, height: int) -> RectPx:
        """Return ``(x0, y0, x1, y1)`` in pixel coordinates of a ``width`` x ``height`` image."""

        y_min, x_min, y_max, x_max = self.bounding_box
        return (
            int(round(x_min / 100.0 * width)),
            int(round(y_min / 100.0 * height)),
            int(round(x_max / 100.0 * width)),
            int(round(y_max / 100.0 * height)),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "boundingBox": [float(value) for value in self.bounding_box],
        }


@dataclass(frozen=True)
class ComparisonResult:
    width: int
    height: int
    regions: List[Region]
    annotated_old: Optional[bytes] = None
    annotated_new: Optional[bytes] = None
    mask_image: Optional[bytes] = None
    params: Dict[str, object] = field(default_factory=dict)

    def to_dict(self, include_images: bool = False) -> Dict[str, object]:
        data: Dict[str, object] = {
            "width": self.width,
            "height": self.height,
            "params": dict(self.params),
            "regions": [region.to_dict() for region in self.regions],
        }
        if include_images:
            from .report import to_data_url

            data["annotatedOld"] = to_data_url(self.annotated_old, "image/jpeg")
            data["annotatedNew"] = to_data_url(self.annotated_new, "image/jpeg")
            data["maskImage"] = to_data_url(self.mask_image, "image/png")
        return data


@dataclass(frozen=True)
class PageComparison:
    """Comparison of one page pair of two PDF documents."""

    index: int
    scale: float
    result: ComparisonResult

    def to_dict(self, include_images: bool = False) -> Dict[str, object]:
        data = {"page_index": self.index, "scale": self.scale}
        data.update(self.result.to_dict(include_images=include_images))
        return data
