import io
import struct
import sys
import zlib
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import gridsheet
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from gridsheet.layout import ImageAsset  # noqa: E402


# Common test fixtures
@pytest.fixture
def image_bytes():
    """Factory returning encoded image bytes."""
    def _create(width: int = 200, height: int = 100, fmt: str = "PNG", color="white") -> bytes:
        buf = io.BytesIO()
        Image.new("RGB", (width, height), color=color).save(buf, format=fmt)
        return buf.getvalue()
    return _create


@pytest.fixture
def asset_factory(image_bytes):
    """
    Factory for ImageAssets.

    Pass ``real=True`` to attach encoded PNG/JPEG bytes matching the
    filename; otherwise data is empty (enough for layout-only tests).
    """
    def _create(
        filename: str = "img.png",
        width: int = 200,
        height: int = 100,
        real: bool = False,
        color="white",
    ) -> ImageAsset:
        data = b""
        if real:
            fmt = "JPEG" if filename.lower().endswith((".jpg", ".jpeg")) else "PNG"
            data = image_bytes(width, height, fmt=fmt, color=color)
        return ImageAsset(filename=filename, width=width, height=height, data=data)
    return _create


@pytest.fixture
def sources(image_bytes):
    """Factory for (filename, bytes) pairs of distinct PNGs."""
    def _create(count: int, prefix: str = "img") -> list:
        return [
            (f"{prefix}_{i:02d}.png", image_bytes(120 + i, 80, color=(i * 17 % 256, 90, 160)))
            for i in range(count)
        ]
    return _create


@pytest.fixture
def sample_image(tmp_path: Path, image_bytes):
    """Create a simple test image on disk."""
    img_path = tmp_path / "sample.png"
    img_path.write_bytes(image_bytes(200, 100))
    return img_path


def _png_chunk(kind: bytes, payload: bytes) -> bytes:
    return (
        struct.pack(">I", len(payload))
        + kind
        + payload
        + struct.pack(">I", zlib.crc32(kind + payload) & 0xFFFFFFFF)
    )


@pytest.fixture
def oversized_png() -> bytes:
    """PNG declaring 20000x20000 pixels; only the header is real."""
    header = struct.pack(">IIBBBBB", 20000, 20000, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )
