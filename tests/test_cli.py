"""
Tests for the command line front end.
"""

import io
import json

import pytest

from gridsheet.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_EXPORT_ERROR,
    EXIT_OK,
    build_parser,
    collect_sources,
    load_config,
    main,
)
from gridsheet.layout import FitMode, Orientation, PageFormat

try:
    from pypdf import PdfReader
    PYPDF_AVAILABLE = True
except ImportError:
    PYPDF_AVAILABLE = False


@pytest.fixture
def image_dir(tmp_path, image_bytes):
    """Folder with 7 PNGs, one JPEG and a text file."""
    folder = tmp_path / "photos"
    folder.mkdir()
    for i in range(7):
        (folder / f"p{i}.png").write_bytes(image_bytes(100 + i, 60))
    (folder / "z_last.JPG").write_bytes(image_bytes(60, 100, fmt="JPEG"))
    (folder / "readme.txt").write_text("not an image")
    return folder


class TestCollectSources:
    def test_collect_when_directory_then_sorted_by_name(self, image_dir):
        sources = collect_sources([str(image_dir)])

        names = [s.filename for s in sources]
        assert names == sorted(names, key=str.lower)
        assert len(names) == 9

    def test_collect_when_files_then_command_line_order(self, image_dir):
        sources = collect_sources([str(image_dir / "p3.png"), str(image_dir / "p1.png")])

        assert [s.filename for s in sources] == ["p3.png", "p1.png"]

    def test_collect_when_missing_then_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            collect_sources([str(tmp_path / "missing.png")])


class TestLoadConfig:
    def test_load_config_when_flags_then_applied(self):
        args = build_parser().parse_args([
            "x.png", "--page-format", "letter", "--orientation", "Landscape",
            "--box-width", "5", "--box-height", "6", "--gap", "0", "--margin", "1",
            "--fit", "cover", "--no-clip", "--no-borders",
        ])

        config = load_config(args)

        assert config.page_format is PageFormat.LETTER
        assert config.orientation is Orientation.LANDSCAPE
        assert (config.box_width_cm, config.box_height_cm) == (5.0, 6.0)
        assert (config.gap_cm, config.margin_cm) == (0.0, 1.0)
        assert config.fit_mode is FitMode.COVER
        assert config.clip_overflow is False
        assert config.draw_borders is False

    def test_load_config_when_file_and_flags_then_flags_win(self, tmp_path):
        config_file = tmp_path / "layout.json"
        config_file.write_text(json.dumps({"fitMode": "cover", "boxWidthCm": 4, "marginCm": 2}))
        args = build_parser().parse_args(["x.png", "--config", str(config_file), "--box-width", "6"])

        config = load_config(args)

        assert config.fit_mode is FitMode.COVER
        assert config.box_width_cm == 6.0
        assert config.margin_cm == 2.0


class TestMain:
    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_main_when_directory_then_pdf_written(self, image_dir, tmp_path):
        # Arrange
        output = tmp_path / "grid.pdf"

        # Act
        code = main([str(image_dir), "-o", str(output)])

        # Assert - 8 images, 6 per page, readme.txt skipped
        assert code == EXIT_OK
        reader = PdfReader(io.BytesIO(output.read_bytes()))
        assert len(reader.pages) == 2

    def test_main_when_box_too_large_then_config_exit_code(self, image_dir, tmp_path):
        output = tmp_path / "grid.pdf"

        code = main([str(image_dir), "-o", str(output), "--box-width", "40"])

        assert code == EXIT_CONFIG_ERROR
        assert not output.exists()

    def test_main_when_invalid_value_then_config_exit_code(self, image_dir, tmp_path):
        code = main([str(image_dir), "-o", str(tmp_path / "g.pdf"), "--gap", "-1"])

        assert code == EXIT_CONFIG_ERROR

    def test_main_when_config_file_broken_then_config_exit_code(self, image_dir, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")

        code = main([str(image_dir), "-o", str(tmp_path / "g.pdf"), "--config", str(bad)])

        assert code == EXIT_CONFIG_ERROR

    def test_main_when_input_missing_then_export_exit_code(self, tmp_path):
        code = main([str(tmp_path / "nope"), "-o", str(tmp_path / "g.pdf")])

        assert code == EXIT_EXPORT_ERROR

    def test_main_when_no_images_then_export_exit_code(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("hi")

        code = main([str(notes), "-o", str(tmp_path / "g.pdf")])

        assert code == EXIT_EXPORT_ERROR

    def test_main_when_unknown_fit_then_argparse_exits(self, image_dir):
        with pytest.raises(SystemExit) as excinfo:
            main([str(image_dir), "--fit", "stretch"])

        assert excinfo.value.code == 2

    def test_main_when_image_exceeds_pixel_limit_then_export_exit_code(self, oversized_png, tmp_path):
        big = tmp_path / "big.png"
        big.write_bytes(oversized_png)
        output = tmp_path / "g.pdf"

        code = main([str(big), "-o", str(output)])

        assert code == EXIT_EXPORT_ERROR
        assert not output.exists()
