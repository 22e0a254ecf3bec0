"""
Tests for the export pipeline (gridsheet.controller).
"""

import io
from unittest.mock import patch

import pytest

from gridsheet import (
    ConfigError,
    ExportError,
    ImageLoadError,
    ImageSource,
    LayoutConfig,
    Orientation,
    PageFormat,
    export_grid_pdf,
    generate_grid_document,
)

try:
    from pypdf import PdfReader
    PYPDF_AVAILABLE = True
except ImportError:
    PYPDF_AVAILABLE = False


def _page_count(pdf: bytes) -> int:
    return len(PdfReader(io.BytesIO(pdf)).pages)


class TestGenerateGridDocument:
    """Tests for generate_grid_document()."""

    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_generate_when_14_images_then_three_pages(self, sources):
        pdf = generate_grid_document(sources(14), LayoutConfig())

        assert pdf.startswith(b"%PDF-")
        assert _page_count(pdf) == 3

    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_generate_when_image_sources_then_accepted(self, image_bytes):
        images = [ImageSource("a.jpg", image_bytes(40, 30, fmt="JPEG")), ImageSource("b.png", image_bytes())]

        pdf = generate_grid_document(images, LayoutConfig())

        assert _page_count(pdf) == 1

    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_generate_when_letter_landscape_then_page_size_swapped(self, sources):
        config = LayoutConfig(page_format=PageFormat.LETTER, orientation=Orientation.LANDSCAPE)

        pdf = generate_grid_document(sources(2), config)

        box = PdfReader(io.BytesIO(pdf)).pages[0].mediabox
        assert (float(box.width), float(box.height)) == pytest.approx((792, 612))

    def test_generate_when_box_too_large_then_config_error_before_decoding(self, sources):
        config = LayoutConfig(box_width_cm=25)

        with patch("gridsheet.controller.load_images") as mock_load:
            with pytest.raises(ConfigError, match="box too large for page"):
                generate_grid_document(sources(3), config)

        mock_load.assert_not_called()

    def test_generate_when_only_unsupported_files_then_export_error(self):
        with pytest.raises(ExportError, match="No PNG or JPEG"):
            generate_grid_document([("notes.txt", b"hello"), ("clip.gif", b"GIF89a")], LayoutConfig())

    def test_generate_when_no_images_then_export_error(self):
        with pytest.raises(ExportError):
            generate_grid_document([], LayoutConfig())

    def test_generate_when_corrupt_image_then_export_error_without_output(self, sources):
        images = sources(3) + [("broken.png", b"not a png")]

        with pytest.raises(ExportError, match="broken.png") as excinfo:
            generate_grid_document(images, LayoutConfig())

        assert isinstance(excinfo.value.__cause__, ImageLoadError)

    def test_generate_when_image_exceeds_pixel_limit_then_export_error(self, oversized_png):
        with pytest.raises(ExportError, match="too large") as excinfo:
            generate_grid_document([("big.png", oversized_png)], LayoutConfig())

        assert isinstance(excinfo.value.__cause__, ImageLoadError)


class TestExportGridPdf:
    """Tests for export_grid_pdf()."""

    def test_export_when_txt_among_images_then_five_placed_and_skip_reported(
        self, sources, tmp_path
    ):
        # Arrange
        images = sources(5)
        images.insert(2, ("notes.txt", b"shopping list"))
        output = tmp_path / "out" / "images-grid.pdf"

        # Act
        result = export_grid_pdf(images, LayoutConfig(), output)

        # Assert
        assert result.output_path == output
        assert output.exists()
        assert result.image_count == 5
        assert result.page_count == 1
        assert result.skipped == ("notes.txt",)
        assert any("notes.txt" in w for w in result.warnings)

    def test_export_when_done_then_metadata_recorded(self, sources, tmp_path):
        config = LayoutConfig(box_width_cm=5, box_height_cm=5)

        result = export_grid_pdf(sources(1), config, tmp_path / "grid.pdf")

        assert result.metadata["config"] == config.to_dict()
        assert result.metadata["columns"] == 3  # (18 + 0.5) / 5.5
        assert result.metadata["rows"] == 4     # (26.7 + 0.5) / 5.5
        assert "generated_at" in result.metadata

    def test_export_when_config_error_then_no_file_written(self, sources, tmp_path):
        output = tmp_path / "grid.pdf"

        with pytest.raises(ConfigError):
            export_grid_pdf(sources(2), LayoutConfig(margin_cm=15), output)

        assert not output.exists()

    def test_export_when_output_unwritable_then_export_error(self, sources, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(ExportError, match="Failed to write"):
            export_grid_pdf(sources(1), LayoutConfig(), blocker / "grid.pdf")
