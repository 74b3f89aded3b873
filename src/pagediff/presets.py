"""Comparison parameter presets and color helpers."""
from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .errors import InvalidInput

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class DiffParams:
    """Parameters driving the grid differ.

    ``pixel_threshold`` is compared against the sum of the absolute R, G and B
    differences of a pixel (0-765). A cell counts as changed when more than
    ``cell_changed_threshold`` of its pixels differ.
    """

    cell_size: int = 20
    pixel_threshold: int = 100
    cell_changed_threshold: int = 5

    def __post_init__(self) -> None:
        if not isinstance(self.cell_size, numbers.Integral) or isinstance(self.cell_size, bool):
            raise InvalidInput(f"cell_size must be a whole number of pixels, got {self.cell_size!r}")
        if self.cell_size < 1:
            raise InvalidInput(f"cell_size must be at least 1, got {self.cell_size}")
        if self.pixel_threshold < 0:
            raise InvalidInput(f"pixel_threshold must not be negative, got {self.pixel_threshold}")
        if self.cell_changed_threshold < 0:
            raise InvalidInput(
                f"cell_changed_threshold must not be negative, got {self.cell_changed_threshold}"
            )

    def to_dict(self) -> Dict[str, int]:
        return {
            "cell_size": self.cell_size,
            "pixel_threshold": self.pixel_threshold,
            "cell_changed_threshold": self.cell_changed_threshold,
        }

    def copy(self, **overrides: int) -> "DiffParams":
        return replace(self, **overrides)


@dataclass(frozen=True)
class RenderStyle:
    """Look of the boxes and id tags burned into annotated images."""

    box_color: Color = (255, 0, 0)
    text_color: Color = (255, 255, 255)
    stroke_width: int = 3
    label_width: int = 40
    label_height: int = 24
    font_size: int = 24
    jpeg_quality: int = 80

    def with_overrides(
        self,
        *,
        box_color: Optional[Color] = None,
        text_color: Optional[Color] = None,
        stroke_width: Optional[int] = None,
    ) -> "RenderStyle":
        return replace(
            self,
            box_color=self.box_color if box_color is None else box_color,
            text_color=self.text_color if text_color is None else text_color,
            stroke_width=self.stroke_width if stroke_width is None else stroke_width,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "box_color": self.box_color,
            "text_color": self.text_color,
            "stroke_width": self.stroke_width,
            "label_width": self.label_width,
            "label_height": self.label_height,
            "font_size": self.font_size,
            "jpeg_quality": self.jpeg_quality,
        }


@dataclass(frozen=True)
class Preset:
    """Bundle of differ parameters, render styling and metadata."""

    name: str
    description: str
    params: DiffParams
    style: RenderStyle

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "params": self.params.to_dict(),
            "style": self.style.to_dict(),
        }


_DEFAULT_STYLE = RenderStyle()

PRESETS: Mapping[str, Preset] = {
    "strict": Preset(
        name="strict",
        description="Only strong color changes covering a good part of a cell.",
        params=DiffParams(cell_size=20, pixel_threshold=150, cell_changed_threshold=20),
        style=_DEFAULT_STYLE,
    ),
    "balanced": Preset(
        name="balanced",
        description="Default mix of sensitivity and noise rejection.",
        params=DiffParams(),
        style=_DEFAULT_STYLE,
    ),
    "loose": Preset(
        name="loose",
        description="Maximum sensitivity; small cells and faint changes are reported.",
        params=DiffParams(cell_size=10, pixel_threshold=60, cell_changed_threshold=2),
        style=_DEFAULT_STYLE,
    ),
}


def get_preset(name: str) -> Preset:
    key = name.lower()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(sorted(PRESETS))}")
    return PRESETS[key]


def iter_presets() -> Iterable[Preset]:
    return PRESETS.values()


def parse_color(value: Optional[str]) -> Optional[Color]:
    """Parse ``#RRGGBB`` or ``r,g,b`` (0-255) into an RGB tuple."""

    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith("#"):
        hex_value = value[1:]
        if len(hex_value) not in (6, 8):
            raise ValueError("Hex colors must be #RRGGBB or #RRGGBBAA")
        return tuple(int(hex_value[i : i + 2], 16) for i in range(0, 6, 2))  # type: ignore[return-value]
    parts = value.replace(";", ",").split(",")
    if len(parts) != 3:
        raise ValueError("RGB colors must provide three comma separated numbers")
    rgb = tuple(int(p.strip()) for p in parts)
    if any(channel < 0 or channel > 255 for channel in rgb):
        raise ValueError("RGB channels must be between 0 and 255")
    return rgb  # type: ignore[return-value]
