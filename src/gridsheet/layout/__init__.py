"""
Module: gridsheet.layout

Purpose:
    Grid layout and pagination engine.
    Converts an ordered list of images plus layout options into pages of
    placement rectangles. Pure and stateless.

Key Functions:
    - resolve_page_geometry(): Page size and grid capacity
    - partition_into_pages(): Chunk images across pages
    - fit_image() / place_in_cell(): Contain/cover fitting
    - layout_images(): Main entry point for layout

Key Classes:
    - LayoutConfig: Configuration for grid layout
    - PageGeometry: Resolved page and grid dimensions
    - CellPlacement: Image positioned in a cell
    - PagePlan: Single page layout plan
    - LayoutResult: All pages plus diagnostics

Dependencies:
    - reportlab.lib.pagesizes: Base page sizes

Used By:
    - gridsheet.controller: Export pipeline
    - gridsheet.output.renderer: PDF drawing
"""

from .config import (
    BORDER_INSET_PT,
    BORDER_PT,
    CM_TO_PT,
    ConfigError,
    FitMode,
    LayoutConfig,
    Orientation,
    PageFormat,
    cm_to_pt,
)
from .models import (
    CellPlacement,
    ImageAsset,
    LayoutResult,
    MediaKind,
    PageGeometry,
    PagePlan,
    Rect,
    media_kind_for,
)
from .geometry import resolve_page_geometry, grid_count
from .fitting import FitResult, fit_image, place_in_cell
from .paginator import iter_pages, layout_images, partition_into_pages

__all__ = [
    # Config
    "LayoutConfig",
    "PageFormat",
    "Orientation",
    "FitMode",
    "ConfigError",
    "cm_to_pt",
    "CM_TO_PT",
    "BORDER_PT",
    "BORDER_INSET_PT",
    # Models
    "Rect",
    "ImageAsset",
    "MediaKind",
    "media_kind_for",
    "PageGeometry",
    "CellPlacement",
    "PagePlan",
    "LayoutResult",
    "FitResult",
    # Functions
    "resolve_page_geometry",
    "grid_count",
    "partition_into_pages",
    "fit_image",
    "place_in_cell",
    "iter_pages",
    "layout_images",
]
