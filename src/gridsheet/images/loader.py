"""
Module: gridsheet.images.loader

Purpose:
    Turn (filename, bytes) pairs into ImageAssets with intrinsic sizes.
    Filters by extension, then decodes headers with Pillow.

Key Functions:
    - filter_supported(): Drop non-PNG/JPEG filenames, keeping order
    - load_image(): Decode a single source
    - load_images(): Decode many sources in parallel, order preserved

Key Classes:
    - ImageSource: Filename + raw bytes from the caller
    - ImageLoadError: Undecodable or unsupported image data

Dependencies:
    - PIL: Image header decoding
    - concurrent.futures (std): Parallel decoding

Used By:
    - gridsheet.controller: Export pipeline
    - gridsheet.cli: Reading files from disk
"""

from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image, UnidentifiedImageError

from gridsheet.layout.models import ImageAsset, MediaKind, media_kind_for

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4

# Pillow reports multi-picture camera JPEGs as MPO
_PIL_FORMATS = {
    "PNG": MediaKind.PNG,
    "JPEG": MediaKind.JPEG,
    "MPO": MediaKind.JPEG,
}


class ImageLoadError(Exception):
    """Image data could not be decoded."""
    pass


@dataclass(frozen=True)
class ImageSource:
    """
    An image as handed over by the caller.

    Attributes:
        filename: Original filename; its extension declares the media kind
        data: Encoded image bytes
    """

    filename: str
    data: bytes = field(repr=False)

    @property
    def media_kind(self) -> Optional[MediaKind]:
        return media_kind_for(self.filename)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImageSource":
        """Read a file from disk."""
        path = Path(path)
        return cls(filename=path.name, data=path.read_bytes())


SourceLike = Union[ImageSource, Tuple[str, bytes]]


def as_source(item: SourceLike) -> ImageSource:
    """Accept an ImageSource or a (filename, bytes) pair."""
    if isinstance(item, ImageSource):
        return item
    filename, data = item
    return ImageSource(filename=filename, data=bytes(data))


def filter_supported(
    sources: Iterable[SourceLike],
) -> Tuple[List[ImageSource], List[str]]:
    """
    Keep only PNG/JPEG sources, preserving order.

    Args:
        sources: ImageSources or (filename, bytes) pairs

    Returns:
        Tuple of (supported sources, skipped filenames)

    Example:
        >>> kept, skipped = filter_supported([("a.png", b"..."), ("notes.txt", b"")])
        >>> skipped
        ['notes.txt']
    """
    supported: List[ImageSource] = []
    skipped: List[str] = []
    for item in sources:
        source = as_source(item)
        if source.media_kind is None:
            skipped.append(source.filename)
        else:
            supported.append(source)
    return supported, skipped


def load_image(source: SourceLike) -> ImageAsset:
    """
    Decode an image source to learn its intrinsic pixel size.

    Args:
        source: ImageSource or (filename, bytes) pair

    Returns:
        ImageAsset carrying the original bytes

    Raises:
        ImageLoadError: If the data is not a decodable PNG or JPEG
    """
    source = as_source(source)

    try:
        with Image.open(io.BytesIO(source.data)) as img:
            width, height = img.size
            detected = _PIL_FORMATS.get(img.format or "")
            img.verify()
    except Image.DecompressionBombError as e:
        raise ImageLoadError(f"Image too large: {source.filename}: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise ImageLoadError(f"Cannot decode {source.filename}: {e}") from e

    if detected is None:
        raise ImageLoadError(f"{source.filename} is not a PNG or JPEG image")

    declared = source.media_kind
    if declared is not None and declared is not detected:
        logger.warning(
            f"{source.filename} is named as {declared} but contains {detected} data"
        )

    try:
        asset = ImageAsset(
            filename=source.filename,
            width=width,
            height=height,
            data=source.data,
        )
    except ValueError as e:
        raise ImageLoadError(str(e)) from e

    logger.debug(f"Loaded {source.filename}: {width}x{height}px {detected}")
    return asset


def load_images(
    sources: Sequence[SourceLike],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[ImageAsset]:
    """
    Decode sources independently, returning assets in input order.

    Args:
        sources: ImageSources or (filename, bytes) pairs
        max_workers: Thread count for decoding (1 = serial)

    Returns:
        List of ImageAssets, same order as ``sources``

    Raises:
        ImageLoadError: On the first source that fails to decode
    """
    if not sources:
        return []

    if len(sources) > 1 and max_workers > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(sources))) as pool:
            assets = list(pool.map(load_image, sources))
    else:
        # Single image or serial mode - no thread overhead
        assets = [load_image(source) for source in sources]

    logger.debug(f"Decoded {len(assets)} images")
    return assets
