"""
Module: gridsheet.controller

Purpose:
    Orchestrate the complete export pipeline.
    Validate → Filter → Decode → Layout → Render

Key Functions:
    - generate_grid_document(): Images + config -> PDF bytes
    - export_grid_pdf(): Same, written to a file with a result summary

Key Classes:
    - ExportResult: Summary of a written export
    - ExportError: Exception for export failures

Dependencies:
    - gridsheet.layout: Geometry and pagination
    - gridsheet.images: Filtering and decoding
    - gridsheet.output: PDF rendering

Used By:
    - gridsheet.cli: Command line front end
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .images import ImageLoadError, filter_supported, load_images
from .images.loader import DEFAULT_MAX_WORKERS, SourceLike
from .layout import LayoutConfig, LayoutResult, layout_images, resolve_page_geometry
from .output import render_to_bytes

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "images-grid.pdf"


class ExportError(Exception):
    """Error during export pipeline."""
    pass


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        output_path: Path to the written PDF
        page_count: Number of pages generated
        image_count: Number of images placed
        skipped: Filenames excluded for unsupported type
        warnings: Any warnings during export
        metadata: Export metadata (timestamp, config, timing)

    Example:
        >>> result = export_grid_pdf(sources, LayoutConfig(), Path("out.pdf"))
        >>> print(f"{result.image_count} images on {result.page_count} pages")
    """
    output_path: Path
    page_count: int
    image_count: int
    skipped: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    metadata: dict = field(default_factory=dict)


def generate_grid_document(
    images: Sequence[SourceLike],
    config: LayoutConfig,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    title: Optional[str] = None,
) -> bytes:
    """
    Build a grid PDF from images.

    Either a complete document is returned or an exception is raised;
    no partial output is produced.

    Args:
        images: Ordered ImageSources or (filename, bytes) pairs.
            Files that are not PNG/JPEG are skipped.
        config: Layout configuration
        max_workers: Threads used to decode images
        title: Optional document title metadata

    Returns:
        PDF document bytes

    Raises:
        ConfigError: If the box does not fit the page (before any decoding)
        ExportError: If no supported images remain or one fails to decode

    Example:
        >>> pdf = generate_grid_document([("a.png", data)], LayoutConfig())
    """
    pdf, _, _ = _run_pipeline(images, config, max_workers=max_workers, title=title)
    return pdf


def export_grid_pdf(
    images: Sequence[SourceLike],
    config: LayoutConfig,
    output_path: Path,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    title: Optional[str] = None,
) -> ExportResult:
    """
    Build a grid PDF and write it to ``output_path``.

    Args:
        images: Ordered ImageSources or (filename, bytes) pairs
        config: Layout configuration
        output_path: Destination file (parent dirs are created)
        max_workers: Threads used to decode images
        title: Optional document title metadata

    Returns:
        ExportResult describing the written file

    Raises:
        ConfigError: If the box does not fit the page
        ExportError: If the export fails or the file cannot be written
    """
    start_time = time.perf_counter()
    output_path = Path(output_path)

    pdf, layout, skipped = _run_pipeline(
        images, config, max_workers=max_workers, title=title
    )

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(pdf)
    except OSError as e:
        raise ExportError(f"Failed to write {output_path}: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Wrote {output_path} ({len(pdf)} bytes) in {elapsed:.2f}s")

    return ExportResult(
        output_path=output_path,
        page_count=layout.page_count,
        image_count=layout.total_placements,
        skipped=tuple(skipped),
        warnings=tuple(layout.warnings),
        metadata={
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "config": config.to_dict(),
            "columns": layout.geometry.columns,
            "rows": layout.geometry.rows,
            "duration_s": round(elapsed, 3),
        },
    )


def _run_pipeline(
    images: Sequence[SourceLike],
    config: LayoutConfig,
    *,
    max_workers: int,
    title: Optional[str],
) -> Tuple[bytes, LayoutResult, List[str]]:
    """
    Shared pipeline for both entry points.

    Pipeline:
    1. Resolve geometry (fail fast on ConfigError)
    2. Drop unsupported filenames
    3. Decode images (parallel)
    4. Lay out onto pages
    5. Render PDF in memory
    """
    # 1. Geometry (ConfigError before any decoding)
    geometry = resolve_page_geometry(config)
    logger.info(
        f"Grid {geometry.columns}x{geometry.rows} on "
        f"{config.page_format} {config.orientation} ({geometry.capacity} per page)"
    )

    # 2. Filter
    supported, skipped = filter_supported(images)
    if skipped:
        logger.warning(f"Skipped {len(skipped)} unsupported file(s): {', '.join(skipped)}")

    if not supported:
        raise ExportError("No PNG or JPEG images to export")

    # 3. Decode
    try:
        assets = load_images(supported, max_workers=max_workers)
    except ImageLoadError as e:
        raise ExportError(f"Failed to load images: {e}") from e

    # 4. Layout
    layout = layout_images(assets, config)
    warnings = list(layout.warnings)
    if skipped:
        warnings.insert(0, f"Skipped {len(skipped)} unsupported file(s): {', '.join(skipped)}")
    layout = LayoutResult(
        geometry=layout.geometry,
        pages=layout.pages,
        skipped=tuple(skipped),
        warnings=warnings,
    )

    # 5. Render
    pdf = render_to_bytes(
        layout,
        clip_overflow=config.clip_overflow,
        draw_borders=config.draw_borders,
        title=title,
    )

    return pdf, layout, skipped
