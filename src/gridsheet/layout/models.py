"""
Module: gridsheet.layout.models

Purpose:
    Data models for grid layout.
    Immutable dataclasses representing images, cells, placements and pages.

Key Classes:
    - Rect: Axis-aligned rectangle in page points
    - ImageAsset: Decoded image with intrinsic pixel size
    - PageGeometry: Resolved page and grid dimensions
    - CellPlacement: Image positioned in a grid cell
    - PagePlan: Complete page layout
    - LayoutResult: Final layout output

Dependencies:
    - dataclasses (std)

Used By:
    - gridsheet.layout.geometry: Creates PageGeometry
    - gridsheet.layout.fitting: Creates CellPlacements
    - gridsheet.layout.paginator: Creates PagePlans
    - gridsheet.output.renderer: Draws placements
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .config import FitMode


class MediaKind(str, Enum):
    """Supported image encodings (values match Pillow format names)."""
    PNG = "PNG"
    JPEG = "JPEG"

    def __str__(self) -> str:
        return self.value


SUPPORTED_EXTENSIONS = {
    ".png": MediaKind.PNG,
    ".jpg": MediaKind.JPEG,
    ".jpeg": MediaKind.JPEG,
}


def media_kind_for(filename: str) -> Optional[MediaKind]:
    """
    Media kind declared by a filename extension (case-insensitive).

    Example:
        >>> media_kind_for("Photo.JPG")
        <MediaKind.JPEG: 'JPEG'>
        >>> media_kind_for("notes.txt") is None
        True
    """
    ext = os.path.splitext(filename)[1].lower()
    return SUPPORTED_EXTENSIONS.get(ext)


@dataclass(frozen=True)
class Rect:
    """
    Rectangle in page coordinates (points, origin bottom-left).

    Example:
        >>> r = Rect(10, 20, 100, 50)
        >>> r.top
        70
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def inset(self, amount: float) -> "Rect":
        """Shrink by ``amount`` on every side."""
        return Rect(
            self.x + amount,
            self.y + amount,
            self.width - 2 * amount,
            self.height - 2 * amount,
        )

    def contains(self, other: "Rect", tolerance: float = 1e-6) -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x - tolerance
            and other.y >= self.y - tolerance
            and other.right <= self.right + tolerance
            and other.top <= self.top + tolerance
        )


@dataclass(frozen=True)
class ImageAsset:
    """
    Decoded image ready for placement (immutable).

    Attributes:
        filename: Original filename (drives the media kind)
        width: Intrinsic width in pixels
        height: Intrinsic height in pixels
        data: Raw encoded bytes, passed through to the PDF writer
    """

    filename: str
    width: int
    height: int
    data: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive: {self.filename} "
                f"({self.width}x{self.height})"
            )

    @property
    def aspect_ratio(self) -> float:
        """width / height"""
        return self.width / self.height

    @property
    def media_kind(self) -> Optional[MediaKind]:
        """Declared media kind, None when the filename is not supported."""
        return media_kind_for(self.filename)

    @property
    def is_supported(self) -> bool:
        return self.media_kind is not None


@dataclass(frozen=True)
class PageGeometry:
    """
    Page and grid dimensions resolved from a LayoutConfig.

    Grid capacity is uniform across pages.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        margin: Uniform margin in points
        gap: Gap between cells in points
        box_width: Cell width in points
        box_height: Cell height in points
        columns: Cells per row (>= 1)
        rows: Cells per column (>= 1)
    """

    page_width: float
    page_height: float
    margin: float
    gap: float
    box_width: float
    box_height: float
    columns: int
    rows: int

    @property
    def usable_width(self) -> float:
        """Width available for the grid (excluding margins)."""
        return self.page_width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        """Height available for the grid (excluding margins)."""
        return self.page_height - 2 * self.margin

    @property
    def capacity(self) -> int:
        """Maximum images per page."""
        return self.columns * self.rows

    def cell_rect(self, column: int, row: int) -> Rect:
        """
        Rectangle of a cell on the page.

        Row 0 is the topmost row; y is measured from the page bottom.

        Args:
            column: 0-indexed column
            row: 0-indexed row

        Returns:
            Cell rectangle in page points
        """
        x = self.margin + column * (self.box_width + self.gap)
        y_top = self.page_height - self.margin - row * (self.box_height + self.gap)
        return Rect(x, y_top - self.box_height, self.box_width, self.box_height)


@dataclass(frozen=True)
class CellPlacement:
    """
    An image positioned in a grid cell.

    Attributes:
        asset: The image placed
        page_index: Page number (0-indexed)
        column: Grid column
        row: Grid row (0 = top)
        cell: Full cell rectangle, used for the outline
        draw: Drawn image rectangle in page coordinates
        offset_x: Offset of the drawn image within the inset cell
        offset_y: Offset of the drawn image within the inset cell
        fit_mode: Fit mode used
        inset: Border inset applied before fitting
    """

    asset: ImageAsset
    page_index: int
    column: int
    row: int
    cell: Rect
    draw: Rect
    offset_x: float
    offset_y: float
    fit_mode: FitMode = FitMode.CONTAIN
    inset: float = 0.0

    @property
    def inner(self) -> Rect:
        """Cell rectangle after the border inset."""
        return self.cell.inset(self.inset)

    @property
    def overflows(self) -> bool:
        """True when the drawn image extends past the inset cell."""
        return not self.inner.contains(self.draw)


@dataclass(frozen=True)
class PagePlan:
    """
    Complete layout plan for a single page.

    Attributes:
        index: Page number (0-indexed)
        placements: Tuple of CellPlacements in grid order
    """

    index: int
    placements: tuple[CellPlacement, ...]

    @property
    def placement_count(self) -> int:
        """Number of images on this page."""
        return len(self.placements)

    @property
    def is_empty(self) -> bool:
        return len(self.placements) == 0


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output with diagnostics.

    Attributes:
        geometry: Geometry shared by every page
        pages: Tuple of PagePlans
        skipped: Filenames excluded because their type is unsupported
        warnings: Warning messages

    Example:
        >>> result.page_count
        3
    """

    geometry: PageGeometry
    pages: tuple[PagePlan, ...]
    skipped: tuple[str, ...] = ()
    warnings: list[str] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        """Total number of images placed across all pages."""
        return sum(p.placement_count for p in self.pages)
