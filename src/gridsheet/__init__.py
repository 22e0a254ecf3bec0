"""Top-level package for gridsheet: image grids to printable PDF.

Provides subpackages:
- gridsheet.layout – grid geometry, fitting and pagination
- gridsheet.images – image intake and decoding
- gridsheet.output – ReportLab PDF rendering
"""

def _get_version() -> str:
    """Get version from installed package metadata."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("gridsheet")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()

from .controller import ExportError, ExportResult, export_grid_pdf, generate_grid_document
from .images import ImageLoadError, ImageSource
from .layout import ConfigError, FitMode, LayoutConfig, Orientation, PageFormat

__all__: list[str] = [
    "__version__",
    "generate_grid_document",
    "export_grid_pdf",
    "ExportResult",
    "ExportError",
    "ImageSource",
    "ImageLoadError",
    "LayoutConfig",
    "PageFormat",
    "Orientation",
    "FitMode",
    "ConfigError",
]
