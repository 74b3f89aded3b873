"""Command line interface for pagediff."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from .compare import compare_files, compare_pdfs
from .config import Settings, load_settings
from .errors import PageDiffError
from .presets import DiffParams, get_preset, parse_color
from .report import write_json_report
from .types import ComparisonResult
from .utils.raster import is_pdf

logger = logging.getLogger("pagediff")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagediff",
        description="Locate visually changed regions between two renderings of a page.",
    )
    parser.add_argument("old", nargs="?", help="Baseline image or PDF")
    parser.add_argument("new", nargs="?", help="Revised image or PDF")
    parser.add_argument("--out-dir", default=".", help="Directory for annotated images and masks")
    parser.add_argument("--json", help="Region report path (JSON); defaults to <out-dir>/regions.json")
    parser.add_argument("--embed-images", action="store_true", help="Embed images as data URLs in the JSON")
    parser.add_argument("--page", type=int, action="append", dest="pages", help="1-based PDF page (repeatable)")
    parser.add_argument("--scale", type=float, default=2.0, help="PDF render zoom (1.0 = 72 dpi)")
    parser.add_argument("--preset", help="Preset name (strict|balanced|loose)")
    parser.add_argument("--cell-size", type=int, help="Grid cell edge in pixels")
    parser.add_argument("--pixel-threshold", type=int, help="Per-pixel RGB difference threshold (0-765)")
    parser.add_argument("--cell-threshold", type=int, help="Differing pixels needed to flag a cell")
    parser.add_argument("--box-color", help="Box color as #RRGGBB or r,g,b")
    parser.add_argument("--workers", type=int, help="Threads scanning cell rows")
    parser.add_argument("--no-mask", action="store_true", help="Skip the diff mask image")
    parser.add_argument("--no-annotate", action="store_true", help="Skip the annotated copies")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress information")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__

        print(__version__)
        return 0

    if not args.old or not args.new:
        parser.error("the following arguments are required: old, new")
        return 2

    try:
        settings = load_settings()
    except PageDiffError as exc:
        parser.error(str(exc))
        return 2

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = _override_params(settings, args)
        style = settings.style
        if args.preset:
            style = get_preset(args.preset).style
        style = style.with_overrides(box_color=parse_color(args.box_color))
    except (KeyError, ValueError) as exc:
        parser.error(str(exc.args[0]) if exc.args else str(exc))
        return 2

    options = dict(
        params=params,
        style=style,
        include_mask=not args.no_mask,
        annotate=not args.no_annotate,
        workers=args.workers or settings.workers,
    )
    out_dir = Path(args.out_dir)
    json_path = Path(args.json) if args.json else out_dir / "regions.json"

    try:
        if is_pdf(args.old) and is_pdf(args.new):
            pages = [page - 1 for page in args.pages] if args.pages else None
            report = compare_pdfs(args.old, args.new, scale=args.scale, pages=pages, **options)
            for page in report:
                _write_images(page.result, out_dir, suffix=f"_p{page.index + 1}")
        else:
            report = compare_files(args.old, args.new, **options)
            _write_images(report, out_dir)
        write_json_report(report, json_path, include_images=args.embed_images)
    except PageDiffError as exc:
        logger.error("%s", exc)
        return 2

    logger.info("Report written to %s", json_path)
    return 0


def _override_params(settings: Settings, args: argparse.Namespace) -> DiffParams:
    base = settings.params
    if args.preset:
        base = get_preset(args.preset).params
    overrides = {}
    for field_name, arg_name in (
        ("cell_size", "cell_size"),
        ("pixel_threshold", "pixel_threshold"),
        ("cell_changed_threshold", "cell_threshold"),
    ):
        value = getattr(args, arg_name)
        if value is not None:
            overrides[field_name] = value
    return base.copy(**overrides)


def _write_images(result: ComparisonResult, out_dir: Path, suffix: str = "") -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for name, data in (
        (f"old_annotated{suffix}.jpg", result.annotated_old),
        (f"new_annotated{suffix}.jpg", result.annotated_new),
        (f"mask{suffix}.png", result.mask_image),
    ):
        if data is None:
            continue
        path = out_dir / name
        path.write_bytes(data)
        written.append(path)
    return written


if __name__ == "__main__":
    sys.exit(main())
