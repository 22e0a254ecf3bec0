"""
Module: gridsheet.layout.paginator

Purpose:
    Arrange images into a grid across pages.
    Input order is preserved; no reordering or packing.

Key Functions:
    - partition_into_pages(): Chunk images into per-page slices
    - iter_pages(): Lazily yield one PagePlan at a time
    - layout_images(): Main layout entry point

Algorithm:
    1. Resolve page geometry (fail fast on ConfigError)
    2. Drop images whose filename is not PNG/JPEG (they take no cell)
    3. Chunk the rest into slices of `capacity`
    4. Slice index j -> column j % columns, row j // columns
    5. Fit each image into its inset cell

Dependencies:
    - gridsheet.layout.geometry: resolve_page_geometry
    - gridsheet.layout.fitting: place_in_cell
    - gridsheet.layout.models: ImageAsset, PagePlan, LayoutResult

Used By:
    - gridsheet.controller: Export pipeline
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple, TypeVar

from .config import LayoutConfig
from .fitting import place_in_cell
from .geometry import resolve_page_geometry
from .models import ImageAsset, LayoutResult, PageGeometry, PagePlan

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_into_pages(items: Sequence[T], capacity: int) -> List[List[T]]:
    """
    Split an ordered sequence into consecutive page slices.

    Every slice but the last holds exactly ``capacity`` items; no empty
    slice is ever produced.

    Args:
        items: Ordered items
        capacity: Maximum items per page

    Returns:
        List of slices in input order

    Raises:
        ValueError: If capacity < 1

    Example:
        >>> [len(s) for s in partition_into_pages(list(range(14)), 6)]
        [6, 6, 2]
    """
    if capacity < 1:
        raise ValueError(f"capacity must be at least 1: {capacity}")
    return [list(items[i:i + capacity]) for i in range(0, len(items), capacity)]


def split_supported(
    images: Sequence[ImageAsset],
) -> Tuple[List[ImageAsset], List[str]]:
    """Separate supported images from unsupported ones, keeping order."""
    supported: List[ImageAsset] = []
    skipped: List[str] = []
    for asset in images:
        if asset.is_supported:
            supported.append(asset)
        else:
            skipped.append(asset.filename)
    return supported, skipped


def iter_pages(
    images: Sequence[ImageAsset],
    config: LayoutConfig,
    geometry: Optional[PageGeometry] = None,
) -> Iterator[PagePlan]:
    """
    Yield page plans one page at a time.

    Unsupported images are dropped before chunking, so they never shift
    the position of later images.

    Args:
        images: Ordered images
        config: Layout configuration
        geometry: Pre-resolved geometry (resolved from config if None)

    Yields:
        PagePlan for each non-empty page

    Raises:
        ConfigError: If the grid does not fit the page. Raised on the
            first ``next()``.
    """
    if geometry is None:
        geometry = resolve_page_geometry(config)

    supported, _ = split_supported(images)

    for page_index, page_slice in enumerate(partition_into_pages(supported, geometry.capacity)):
        placements = []
        for j, asset in enumerate(page_slice):
            column = j % geometry.columns
            row = j // geometry.columns
            placements.append(place_in_cell(
                asset,
                geometry.cell_rect(column, row),
                config.fit_mode,
                page_index=page_index,
                column=column,
                row=row,
            ))
        yield PagePlan(index=page_index, placements=tuple(placements))


def layout_images(
    images: Sequence[ImageAsset],
    config: LayoutConfig,
) -> LayoutResult:
    """
    Lay out images in a grid across as many pages as needed.

    Args:
        images: Ordered images (unsupported filenames are skipped)
        config: Layout configuration

    Returns:
        LayoutResult with page plans and the skipped filenames

    Raises:
        ConfigError: If the box does not fit the usable page area

    Example:
        >>> result = layout_images(assets, LayoutConfig())
        >>> [p.placement_count for p in result.pages]
        [6, 6, 2]
    """
    geometry = resolve_page_geometry(config)
    _, skipped = split_supported(images)

    warnings: List[str] = []
    if skipped:
        warnings.append(f"Skipped {len(skipped)} unsupported file(s): {', '.join(skipped)}")
        logger.debug(f"Skipping unsupported files: {skipped}")

    pages = tuple(iter_pages(images, config, geometry))

    overflowing = sum(
        1 for page in pages for placement in page.placements if placement.overflows
    )
    if overflowing:
        logger.debug(f"{overflowing} image(s) overflow their cell under {config.fit_mode}")

    result = LayoutResult(
        geometry=geometry,
        pages=pages,
        skipped=tuple(skipped),
        warnings=warnings,
    )
    logger.info(
        f"Laid out {result.total_placements} images onto {result.page_count} pages "
        f"({geometry.columns}x{geometry.rows} grid)"
    )
    return result
