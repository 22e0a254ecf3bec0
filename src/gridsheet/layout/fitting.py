"""
Module: gridsheet.layout.fitting

Purpose:
    Scale an image into a cell according to the fit mode and centre it.

Key Functions:
    - fit_image(): Pure contain/cover scaling with centering offsets
    - place_in_cell(): Fit an asset into an inset cell on a page

Dependencies:
    - gridsheet.layout.config: FitMode, BORDER_INSET_PT
    - gridsheet.layout.models: Rect, ImageAsset, CellPlacement

Used By:
    - gridsheet.layout.paginator: Per-image placement
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import BORDER_INSET_PT, FitMode
from .models import CellPlacement, ImageAsset, Rect


@dataclass(frozen=True)
class FitResult:
    """
    Drawn size of an image inside a box and its offset from the box origin.

    Offsets are negative on the overflowing axis under COVER.
    """

    width: float
    height: float
    offset_x: float
    offset_y: float


def fit_image(
    image_width: float,
    image_height: float,
    box_width: float,
    box_height: float,
    mode: FitMode,
) -> FitResult:
    """
    Scale an image into a box preserving its aspect ratio.

    CONTAIN scales the image to lie entirely inside the box; COVER scales
    it to fill the box, overflowing on one axis. Either way the image is
    centred.

    Args:
        image_width: Intrinsic image width (any unit)
        image_height: Intrinsic image height (same unit)
        box_width: Box width in points
        box_height: Box height in points
        mode: Fit mode

    Returns:
        FitResult with drawn size and centering offsets

    Raises:
        ValueError: If any dimension is not positive

    Example:
        >>> fit_image(200, 100, 100, 100, FitMode.CONTAIN)
        FitResult(width=100, height=50.0, offset_x=0.0, offset_y=25.0)
    """
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image dimensions must be positive: {image_width}x{image_height}")
    if box_width <= 0 or box_height <= 0:
        raise ValueError(f"Box dimensions must be positive: {box_width}x{box_height}")

    image_ratio = image_width / image_height
    box_ratio = box_width / box_height

    wider = image_ratio > box_ratio
    if mode is FitMode.COVER:
        # Inverted comparison: the constrained axis is the shorter one
        wider = not wider

    if wider:
        width = box_width
        height = box_width / image_ratio
    else:
        height = box_height
        width = box_height * image_ratio

    return FitResult(
        width=width,
        height=height,
        offset_x=(box_width - width) / 2,
        offset_y=(box_height - height) / 2,
    )


def place_in_cell(
    asset: ImageAsset,
    cell: Rect,
    fit_mode: FitMode,
    *,
    page_index: int = 0,
    column: int = 0,
    row: int = 0,
    inset: float = BORDER_INSET_PT,
) -> CellPlacement:
    """
    Place an image in a grid cell.

    The cell is shrunk by ``inset`` on every side before fitting so the
    image does not cover the outline; the full cell is kept for the
    outline rectangle.

    Args:
        asset: Image to place
        cell: Full cell rectangle in page points
        fit_mode: CONTAIN or COVER
        page_index: Page the cell belongs to
        column: Grid column of the cell
        row: Grid row of the cell
        inset: Border inset in points

    Returns:
        CellPlacement with the drawn rectangle in page coordinates
    """
    inner = cell.inset(inset)
    fit = fit_image(asset.width, asset.height, inner.width, inner.height, fit_mode)

    draw = Rect(
        inner.x + fit.offset_x,
        inner.y + fit.offset_y,
        fit.width,
        fit.height,
    )

    return CellPlacement(
        asset=asset,
        page_index=page_index,
        column=column,
        row=row,
        cell=cell,
        draw=draw,
        offset_x=fit.offset_x,
        offset_y=fit.offset_y,
        fit_mode=fit_mode,
        inset=inset,
    )
