"""
Module: gridsheet.output.renderer

Purpose:
    Render a LayoutResult to PDF using ReportLab.
    Each PagePlan becomes one PDF page with images drawn at their
    placement rectangles and an outline around every cell.

Key Functions:
    - render_to_bytes(): Render to an in-memory PDF
    - render_to_pdf(): Render and write to a file

Dependencies:
    - reportlab: PDF generation
    - gridsheet.layout.models: LayoutResult, PagePlan, CellPlacement

Used By:
    - gridsheet.controller: Export pipeline
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from gridsheet.layout.config import BORDER_PT
from gridsheet.layout.models import CellPlacement, LayoutResult, PagePlan

logger = logging.getLogger(__name__)

BORDER_COLOR_RGB = (0, 0, 0)


def _get_creator() -> str:
    """Creator string with the current version number."""
    from gridsheet import __version__
    return f"gridsheet {__version__}"


def render_to_bytes(
    layout: LayoutResult,
    *,
    clip_overflow: bool = True,
    draw_borders: bool = True,
    title: Optional[str] = None,
) -> bytes:
    """
    Render layout result to PDF bytes.

    The document is built in memory and only returned once complete.

    Args:
        layout: Layout result from the paginator
        clip_overflow: Clip images that overflow their cell (cover mode)
        draw_borders: Draw the cell outline on top of each image
        title: Optional document title metadata

    Returns:
        Complete PDF document

    Example:
        >>> pdf = render_to_bytes(layout_images(assets, LayoutConfig()))
        >>> pdf[:5]
        b'%PDF-'
    """
    geometry = layout.geometry
    page_size = (geometry.page_width, geometry.page_height)

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=page_size)
    c.setCreator(_get_creator())
    if title:
        c.setTitle(title)

    if layout.page_count == 0:
        logger.warning("Empty layout, creating single blank page")
        c.showPage()

    for page in layout.pages:
        _render_page(c, page, clip_overflow=clip_overflow, draw_borders=draw_borders)
        c.showPage()

    c.save()
    pdf = buffer.getvalue()

    logger.info(f"Rendered {layout.page_count} pages ({len(pdf)} bytes)")
    return pdf


def render_to_pdf(
    layout: LayoutResult,
    output_path: Path,
    *,
    clip_overflow: bool = True,
    draw_borders: bool = True,
    title: Optional[str] = None,
) -> Path:
    """
    Render layout result to a PDF file.

    Args:
        layout: Layout result from the paginator
        output_path: Path to write PDF (parent dirs are created)
        clip_overflow: Clip images that overflow their cell
        draw_borders: Draw cell outlines
        title: Optional document title metadata

    Returns:
        The written path

    Raises:
        OSError: If the PDF cannot be written
    """
    pdf = render_to_bytes(
        layout,
        clip_overflow=clip_overflow,
        draw_borders=draw_borders,
        title=title,
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(pdf)

    logger.info(f"Wrote {output_path}")
    return output_path


def _render_page(
    c: canvas.Canvas,
    page: PagePlan,
    *,
    clip_overflow: bool,
    draw_borders: bool,
) -> None:
    """Draw every placement of a page, image first then outline."""
    for placement in page.placements:
        _draw_image(c, placement, clip_overflow=clip_overflow)
        if draw_borders:
            _draw_border(c, placement)


def _draw_image(
    c: canvas.Canvas,
    placement: CellPlacement,
    *,
    clip_overflow: bool,
) -> None:
    """
    Draw an image at its placement rectangle.

    Cover-mode images larger than the inset cell are clipped to it when
    ``clip_overflow`` is set; otherwise they overspill the cell.
    """
    reader = ImageReader(io.BytesIO(placement.asset.data))
    draw = placement.draw
    clip = clip_overflow and placement.overflows

    c.saveState()
    if clip:
        inner = placement.inner
        path = c.beginPath()
        path.rect(inner.x, inner.y, inner.width, inner.height)
        c.clipPath(path, stroke=0, fill=0)

    c.drawImage(
        reader,
        draw.x,
        draw.y,
        width=draw.width,
        height=draw.height,
        mask="auto",
    )
    c.restoreState()

    logger.debug(
        f"Page {placement.page_index} cell ({placement.column},{placement.row}): "
        f"{placement.asset.filename} at {draw.x:.1f},{draw.y:.1f} "
        f"{draw.width:.1f}x{draw.height:.1f}pt{' (clipped)' if clip else ''}"
    )


def _draw_border(c: canvas.Canvas, placement: CellPlacement) -> None:
    """Draw the 1pt outline of the full cell."""
    cell = placement.cell
    c.saveState()
    c.setLineWidth(BORDER_PT)
    c.setStrokeColorRGB(*BORDER_COLOR_RGB)
    c.rect(cell.x, cell.y, cell.width, cell.height, stroke=1, fill=0)
    c.restoreState()
