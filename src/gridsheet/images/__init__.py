"""
Module: gridsheet.images

Purpose:
    Image intake for the export pipeline.
    Filters caller-supplied files by extension and decodes their
    intrinsic sizes.

Key Classes:
    - ImageSource: Filename + bytes
    - ImageLoadError: Decoding failure

Key Functions:
    - filter_supported(): Keep PNG/JPEG sources
    - load_images(): Parallel decoding

Dependencies:
    - PIL: Image decoding

Used By:
    - gridsheet.controller: Export pipeline
"""

from gridsheet.layout.models import MediaKind, media_kind_for

from .loader import (
    ImageLoadError,
    ImageSource,
    as_source,
    filter_supported,
    load_image,
    load_images,
)

__all__ = [
    "ImageSource",
    "ImageLoadError",
    "MediaKind",
    "media_kind_for",
    "as_source",
    "filter_supported",
    "load_image",
    "load_images",
]
