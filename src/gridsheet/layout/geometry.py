"""
Module: gridsheet.layout.geometry

Purpose:
    Resolve page size and grid capacity from a LayoutConfig.

Key Functions:
    - resolve_page_geometry(): Page size, usable area, columns and rows
    - grid_count(): Number of boxes that fit along one axis

Algorithm:
    N boxes need N-1 gaps, so one gap-width of slack is added before
    dividing: count = floor((usable + gap) / (box + gap)).

Dependencies:
    - gridsheet.layout.config: LayoutConfig, ConfigError
    - gridsheet.layout.models: PageGeometry

Used By:
    - gridsheet.layout.paginator: Grid placement
    - gridsheet.controller: Fail-fast validation before decoding
"""

from __future__ import annotations

import logging
import math

from .config import BORDER_INSET_PT, ConfigError, LayoutConfig
from .models import PageGeometry

logger = logging.getLogger(__name__)

# Absorbs float error when boxes fit the usable area exactly
_FIT_EPSILON = 1e-9


def grid_count(usable: float, box: float, gap: float) -> int:
    """
    Number of boxes of size ``box`` separated by ``gap`` that fit in ``usable``.

    Args:
        usable: Available length in points
        box: Box length in points (positive)
        gap: Gap length in points (non-negative)

    Returns:
        Box count, 0 if none fit

    Example:
        >>> grid_count(18.0, 8.0, 0.5)
        2
    """
    if usable <= 0:
        return 0
    return max(0, math.floor((usable + gap) / (box + gap) + _FIT_EPSILON))


def resolve_page_geometry(config: LayoutConfig) -> PageGeometry:
    """
    Resolve page and grid dimensions for a layout configuration.

    Args:
        config: Layout configuration

    Returns:
        PageGeometry with columns >= 1 and rows >= 1

    Raises:
        ConfigError: If the box does not fit the usable page area, or is
            too small to hold an image inside its border

    Example:
        >>> geometry = resolve_page_geometry(LayoutConfig())
        >>> (geometry.columns, geometry.rows)
        (2, 3)
    """
    page_width, page_height = config.page_size
    margin = config.margin_pt
    gap = config.gap_pt
    box_width = config.box_width_pt
    box_height = config.box_height_pt

    if box_width <= 2 * BORDER_INSET_PT or box_height <= 2 * BORDER_INSET_PT:
        raise ConfigError("box too small to hold an image inside its border")

    usable_width = page_width - 2 * margin
    usable_height = page_height - 2 * margin

    columns = grid_count(usable_width, box_width, gap)
    rows = grid_count(usable_height, box_height, gap)

    if columns < 1 or rows < 1:
        logger.debug(
            f"Grid does not fit: usable {usable_width:.1f}x{usable_height:.1f}pt, "
            f"box {box_width:.1f}x{box_height:.1f}pt"
        )
        raise ConfigError("box too large for page")

    geometry = PageGeometry(
        page_width=page_width,
        page_height=page_height,
        margin=margin,
        gap=gap,
        box_width=box_width,
        box_height=box_height,
        columns=columns,
        rows=rows,
    )

    logger.debug(
        f"Resolved {config.page_format} {config.orientation} page "
        f"{page_width:.1f}x{page_height:.1f}pt: {columns}x{rows} grid "
        f"({geometry.capacity} per page)"
    )
    return geometry
