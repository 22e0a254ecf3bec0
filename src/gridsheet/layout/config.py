"""
Module: gridsheet.layout.config

Purpose:
    Configuration for the grid layout engine.
    Defines page format, orientation, box size, spacing, margins and
    fit policy, plus the centimetre to point conversion.

Key Classes:
    - LayoutConfig: Immutable layout configuration
    - PageFormat, Orientation, FitMode: Option enums
    - ConfigError: Invalid configuration or box too large for page

Key Functions:
    - cm_to_pt(): Convert centimetres to PDF points

Dependencies:
    - dataclasses (std)
    - reportlab.lib.pagesizes: Base page sizes

Used By:
    - gridsheet.layout.geometry: Page geometry resolution
    - gridsheet.controller: Export pipeline
    - gridsheet.cli: Command line parsing
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Type, TypeVar

from reportlab.lib.pagesizes import A4, LETTER

# 1 cm = 72 / 2.54 pt
CM_TO_PT = 72.0 / 2.54

# Cell outline width; the image is inset by the same amount on each side
BORDER_PT = 1.0
BORDER_INSET_PT = BORDER_PT

_E = TypeVar("_E", bound=Enum)


class ConfigError(ValueError):
    """Invalid layout configuration."""
    pass


class PageFormat(str, Enum):
    """Base page format (portrait dimensions in points)."""
    A4 = "A4"
    LETTER = "LETTER"

    def __str__(self) -> str:
        return self.value

    @property
    def size(self) -> tuple[float, float]:
        """(width, height) in points, portrait."""
        return A4 if self is PageFormat.A4 else LETTER


class Orientation(str, Enum):
    """Page orientation. Landscape swaps width and height."""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    def __str__(self) -> str:
        return self.value


class FitMode(str, Enum):
    """How an image is scaled into its cell."""
    CONTAIN = "contain"  # Fit entirely inside, may letterbox
    COVER = "cover"      # Fill the cell, excess overflows one axis

    def __str__(self) -> str:
        return self.value


def cm_to_pt(cm: float) -> float:
    """
    Convert centimetres to PDF points.

    Example:
        >>> round(cm_to_pt(2.54), 6)
        72.0
    """
    return cm * CM_TO_PT


# camelCase keys accepted from the browser-era option record
_KEY_ALIASES = {
    "pageFormat": "page_format",
    "boxWidthCm": "box_width_cm",
    "boxHeightCm": "box_height_cm",
    "gapCm": "gap_cm",
    "marginCm": "margin_cm",
    "fitMode": "fit_mode",
    "clipOverflow": "clip_overflow",
    "drawBorders": "draw_borders",
    "box_width": "box_width_cm",
    "box_height": "box_height_cm",
    "gap": "gap_cm",
    "margin": "margin_cm",
}


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for grid layout (immutable).

    All physical lengths are in centimetres; point values are exposed
    through the ``*_pt`` properties.

    Attributes:
        page_format: Base page size (A4 or LETTER)
        orientation: Portrait or landscape
        box_width_cm: Width of every grid cell
        box_height_cm: Height of every grid cell
        gap_cm: Spacing between adjacent cells, both axes
        margin_cm: Uniform inset from each page edge to the grid
        fit_mode: CONTAIN (letterbox) or COVER (crop-fill)
        clip_overflow: Clip cover-mode overflow to the cell when rendering
        draw_borders: Draw the 1pt outline around each cell

    Example:
        >>> config = LayoutConfig(box_width_cm=8, box_height_cm=8)
        >>> round(config.box_width_pt, 2)
        226.77
    """

    page_format: PageFormat = PageFormat.A4
    orientation: Orientation = Orientation.PORTRAIT

    # Cell size
    box_width_cm: float = 8.0
    box_height_cm: float = 8.0

    # Spacing
    gap_cm: float = 0.5
    margin_cm: float = 1.5

    # Behavior
    fit_mode: FitMode = FitMode.CONTAIN
    clip_overflow: bool = True
    draw_borders: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.page_format, PageFormat):
            raise ConfigError(f"page_format must be a PageFormat: {self.page_format!r}")
        if not isinstance(self.orientation, Orientation):
            raise ConfigError(f"orientation must be an Orientation: {self.orientation!r}")
        if not isinstance(self.fit_mode, FitMode):
            raise ConfigError(f"fit_mode must be a FitMode: {self.fit_mode!r}")

        for name in ("box_width_cm", "box_height_cm", "gap_cm", "margin_cm"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number: {value!r}")
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite: {value!r}")

        if self.box_width_cm <= 0:
            raise ConfigError(f"box_width_cm must be positive: {self.box_width_cm}")
        if self.box_height_cm <= 0:
            raise ConfigError(f"box_height_cm must be positive: {self.box_height_cm}")
        if self.gap_cm < 0:
            raise ConfigError(f"gap_cm must be non-negative: {self.gap_cm}")
        if self.margin_cm < 0:
            raise ConfigError(f"margin_cm must be non-negative: {self.margin_cm}")

    @property
    def page_size(self) -> tuple[float, float]:
        """(width, height) of the page in points after orientation."""
        width, height = self.page_format.size
        if self.orientation is Orientation.LANDSCAPE:
            return height, width
        return width, height

    @property
    def box_width_pt(self) -> float:
        return cm_to_pt(self.box_width_cm)

    @property
    def box_height_pt(self) -> float:
        return cm_to_pt(self.box_height_cm)

    @property
    def gap_pt(self) -> float:
        return cm_to_pt(self.gap_cm)

    @property
    def margin_pt(self) -> float:
        return cm_to_pt(self.margin_cm)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "page_format": self.page_format.value,
            "orientation": self.orientation.value,
            "box_width_cm": self.box_width_cm,
            "box_height_cm": self.box_height_cm,
            "gap_cm": self.gap_cm,
            "margin_cm": self.margin_cm,
            "fit_mode": self.fit_mode.value,
            "clip_overflow": self.clip_overflow,
            "draw_borders": self.draw_borders,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutConfig":
        """
        Build a config from loosely typed values (JSON file, form, CLI).

        Enum values are matched case-insensitively, numbers may be given
        as strings, and camelCase keys are accepted.

        Args:
            data: Mapping of option names to values

        Returns:
            Validated LayoutConfig

        Raises:
            ConfigError: On unknown keys, unknown enum values or
                invalid numbers
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}

        for raw_key, value in data.items():
            key = _KEY_ALIASES.get(raw_key, raw_key)
            if key not in known:
                raise ConfigError(f"Unknown layout option: {raw_key!r}")
            if value is None:
                continue

            if key == "page_format":
                kwargs[key] = _parse_enum(PageFormat, value, key)
            elif key == "orientation":
                kwargs[key] = _parse_enum(Orientation, value, key)
            elif key == "fit_mode":
                kwargs[key] = _parse_enum(FitMode, value, key)
            elif key in ("clip_overflow", "draw_borders"):
                kwargs[key] = _parse_bool(value, key)
            else:
                kwargs[key] = _parse_number(value, key)

        return cls(**kwargs)


def _parse_enum(enum_cls: Type[_E], value: Any, key: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if text.lower() in (member.value.lower(), member.name.lower()):
            return member
    choices = ", ".join(m.value for m in enum_cls)
    raise ConfigError(f"Invalid {key}: {value!r} (expected one of {choices})")


def _parse_number(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number: {value!r}") from e


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{key} must be a boolean: {value!r}")
