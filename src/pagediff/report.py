"""JSON report helpers."""
from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import Optional, Sequence, Union

from .types import ComparisonResult, PageComparison

Report = Union[ComparisonResult, Sequence[PageComparison]]


def to_data_url(data: Optional[bytes], mime: str) -> Optional[str]:
    """Encode image bytes as a ``data:`` URL, the form downstream viewers consume."""

    if data is None:
        return None
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def report_to_dict(report: Report, include_images: bool = False):
    if isinstance(report, ComparisonResult):
        return report.to_dict(include_images=include_images)
    return [page.to_dict(include_images=include_images) for page in report]


def write_json_report(report: Report, path: str | Path, include_images: bool = False) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    data = report_to_dict(report, include_images=include_images)
    with out_path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, ensure_ascii=False, indent=2)


def diff_result_to_json(report: Report, include_images: bool = False) -> str:
    return json.dumps(report_to_dict(report, include_images=include_images), ensure_ascii=False, indent=2)
