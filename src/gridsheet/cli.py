"""
Module: gridsheet.cli

Purpose:
    Command line front end. Collects image files, builds a validated
    LayoutConfig from a JSON file and/or flags, and writes the PDF.

Key Functions:
    - main(): Console script entry point
    - build_parser(): argparse definition
    - collect_sources(): Expand files/directories into ImageSources

Exit codes:
    0 success, 1 export failure, 2 configuration error

Used By:
    - `gridsheet` console script, `python -m gridsheet`
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .controller import DEFAULT_OUTPUT_NAME, ExportError, export_grid_pdf
from .images import ImageSource
from .images.loader import DEFAULT_MAX_WORKERS
from .layout import ConfigError, FitMode, LayoutConfig, Orientation, PageFormat

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_EXPORT_ERROR = 1
EXIT_CONFIG_ERROR = 2

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gridsheet",
        description="Tile PNG/JPEG images into a grid of fixed-size boxes on printable PDF pages.",
    )
    p.add_argument("inputs", nargs="+", help="Image files or folders (folder contents are taken in name order).")
    p.add_argument("-o", "--output", default=DEFAULT_OUTPUT_NAME, help=f"Output PDF path. Default: {DEFAULT_OUTPUT_NAME}")
    p.add_argument("--config", help="JSON file with layout options; flags override it.")
    p.add_argument("--page-format", choices=[f.value for f in PageFormat], type=str.upper, help="Page size. Default: A4")
    p.add_argument("--orientation", choices=[o.value for o in Orientation], type=str.lower, help="Default: portrait")
    p.add_argument("--box-width", type=float, metavar="CM", help="Box width in cm. Default: 8")
    p.add_argument("--box-height", type=float, metavar="CM", help="Box height in cm. Default: 8")
    p.add_argument("--gap", type=float, metavar="CM", help="Gap between boxes in cm. Default: 0.5")
    p.add_argument("--margin", type=float, metavar="CM", help="Page margin in cm. Default: 1.5")
    p.add_argument("--fit", choices=[m.value for m in FitMode], type=str.lower, help="contain (no crop) or cover (crop). Default: contain")
    p.add_argument("--no-clip", action="store_true", help="Let cover-mode images overspill their box instead of clipping.")
    p.add_argument("--no-borders", action="store_true", help="Do not draw box outlines.")
    p.add_argument("--title", help="PDF title metadata.")
    p.add_argument("--workers", type=int, default=DEFAULT_MAX_WORKERS, help=f"Threads for image decoding. Default: {DEFAULT_MAX_WORKERS}")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def load_config(args: argparse.Namespace) -> LayoutConfig:
    """
    Merge the optional JSON config file with explicit flags.

    Raises:
        ConfigError: On unreadable files or invalid values
    """
    options: Dict[str, Any] = {}

    if args.config:
        path = Path(args.config)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        options.update(data)

    overrides = {
        "page_format": args.page_format,
        "orientation": args.orientation,
        "box_width_cm": args.box_width,
        "box_height_cm": args.box_height,
        "gap_cm": args.gap,
        "margin_cm": args.margin,
        "fit_mode": args.fit,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    if args.no_clip:
        options["clip_overflow"] = False
    if args.no_borders:
        options["draw_borders"] = False

    return LayoutConfig.from_dict(options)


def collect_sources(inputs: Sequence[str]) -> List[ImageSource]:
    """
    Read input files in command line order.

    Directories contribute their regular files sorted by name
    (non-recursive). Unsupported types are kept here and skipped
    later by the export pipeline.

    Raises:
        OSError: If an input does not exist or cannot be read
    """
    sources: List[ImageSource] = []
    for raw in inputs:
        path = Path(raw)
        if path.is_dir():
            entries = sorted((p for p in path.iterdir() if p.is_file()), key=lambda p: p.name.lower())
            logger.debug(f"{path}: {len(entries)} file(s)")
            sources.extend(ImageSource.from_path(p) for p in entries)
        elif path.is_file():
            sources.append(ImageSource.from_path(path))
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return sources


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        sources = collect_sources(args.inputs)
    except OSError as e:
        logger.error(str(e))
        return EXIT_EXPORT_ERROR

    try:
        result = export_grid_pdf(
            sources,
            config,
            Path(args.output),
            max_workers=args.workers,
            title=args.title,
        )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR
    except ExportError as e:
        logger.error(str(e))
        return EXIT_EXPORT_ERROR

    logger.info(
        f"Exported {result.image_count} image(s) on {result.page_count} page(s) "
        f"to {result.output_path}"
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
