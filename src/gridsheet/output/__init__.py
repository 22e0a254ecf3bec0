"""
Module: gridsheet.output

Purpose:
    PDF rendering for grid layouts.
    Converts LayoutResult to PDF bytes or files using ReportLab.

Key Functions:
    - render_to_bytes(): Render layout to in-memory PDF
    - render_to_pdf(): Render layout to a file

Dependencies:
    - reportlab: PDF generation
    - gridsheet.layout.models: LayoutResult

Used By:
    - gridsheet.controller: Export pipeline
"""

from .renderer import render_to_bytes, render_to_pdf

__all__ = [
    "render_to_bytes",
    "render_to_pdf",
]
