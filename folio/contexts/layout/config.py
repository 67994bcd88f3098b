"""
Layout configuration and preset resolution.

LayoutConfig holds page geometry and column widths in logical units.
Named presets are stored in folio/config/layout_presets.yaml and are
composable: later presets override earlier ones.

Examples:
    >>> config = resolve_layout_config(["page_letter", "margins_compact"])
    >>> config.page_height
    279.4
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.document.resume_data_structure import Margins
from folio.contexts.layout.dimensions import SUPPORTED_UNITS
from folio.contexts.layout.exceptions import InvalidLayoutConfigError
from folio.contexts.layout.placement import Column

load_dotenv()
DEFAULT_PRESETS_PATH = Path(__file__).resolve().parents[2] / "config" / "layout_presets.yaml"
LAYOUT_PRESETS_PATH = Path(os.getenv("FOLIO_PRESETS_PATH", str(DEFAULT_PRESETS_PATH)))

# One A4 page in logical units
PAGE_HEIGHT = 297.0
PAGE_WIDTH = 210.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for the layout engine (immutable).

    Attributes:
        page_height: Pagination boundary in logical units
        page_width: Page width in logical units
        left_width: Sidebar text width used for measurement
        right_width: Main column text width used for measurement
        block_width: Full-width block text width used for measurement
        left_top: Sidebar starting height
        right_top: Main column starting height
        section_dividers: Append a vertical rule after each main column section
        divider_page1_top: Divider top when a section ends on page 1
        divider_page1_height: Divider height when a section ends on page 1
        font_size: Body font size for text measurement
        area_left_start: Horizontal offset of the first area-of-interest entry
        area_left_step: Horizontal advance between area-of-interest entries
        unit: Unit suffix used by downstream renderers
        margins: Overrides the document's margins when set
    """

    page_height: float = PAGE_HEIGHT
    page_width: float = PAGE_WIDTH
    left_width: float = 76.0
    right_width: float = 113.0
    block_width: float = 183.0
    left_top: float = 0.0
    right_top: float = 0.0
    section_dividers: bool = True
    divider_page1_top: float = 60.0
    divider_page1_height: float = 230.0
    font_size: float = 3.2
    area_left_start: float = 15.0
    area_left_step: float = 32.0
    unit: str = "mm"
    margins: Optional[Margins] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("page_height", "page_width", "left_width", "right_width", "block_width", "font_size"):
            if getattr(self, name) <= 0:
                raise InvalidLayoutConfigError(f"{name} must be positive: {getattr(self, name)}")
        if self.left_top < 0 or self.right_top < 0:
            raise InvalidLayoutConfigError("Column start offsets must be non-negative")
        if self.right_top >= self.page_height or self.left_top >= self.page_height:
            raise InvalidLayoutConfigError("Column start offsets must fall on the first page")
        if self.unit not in SUPPORTED_UNITS:
            raise InvalidLayoutConfigError(f"Unsupported unit '{self.unit}' (supported: {SUPPORTED_UNITS})")

    def column_width(self, column: Column) -> float:
        """Text width available in a placement buffer."""
        return {
            Column.LEFT: self.left_width,
            Column.RIGHT: self.right_width,
            Column.BLOCK: self.block_width,
        }[column]

    def resolve_margins(self, document_margins: Margins) -> Margins:
        """Configured margins win over the document's own."""
        return self.margins if self.margins is not None else document_margins


def load_layout_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load layout_presets.yaml and flatten to single-level dict.

    Collapses nested structure: margins.compact -> margins_compact

    Args:
        config_path: Optional path to presets file (defaults to FOLIO_PRESETS_PATH
            env variable, falling back to the packaged presets)

    Returns:
        Flattened dict mapping preset names to config overrides
    """
    if config_path is None:
        config_path = LAYOUT_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = config

    return flattened


def _build_config(values: Dict[str, Any]) -> LayoutConfig:
    known = {f.name for f in fields(LayoutConfig)}
    unknown = set(values) - known
    if unknown:
        raise InvalidLayoutConfigError(f"Unknown layout config keys: {sorted(unknown)}")

    values = dict(values)
    margins = values.pop("margins", None)
    if isinstance(margins, dict):
        try:
            values["margins"] = Margins(**margins)
        except (TypeError, ValueError) as e:
            raise InvalidLayoutConfigError(f"Invalid margins override: {margins}") from e
    elif margins is not None:
        values["margins"] = margins

    return replace(LayoutConfig(), **values)


def resolve_layout_config(
    preset_names: Optional[List[str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> LayoutConfig:
    """
    Build a LayoutConfig from named presets plus explicit overrides.

    Presets are applied in order, with later presets overriding earlier ones;
    `overrides` is applied last.

    Args:
        preset_names: Preset names (e.g., ["page_letter", "margins_compact"])
        overrides: Explicit key/value overrides
        config_path: Optional path to layout_presets.yaml

    Returns:
        Validated LayoutConfig

    Raises:
        InvalidLayoutConfigError: If a preset is not found or the result is invalid

    Examples:
        >>> resolve_layout_config(["dividers_off"]).section_dividers
        False
    """
    values: Dict[str, Any] = {}

    if preset_names:
        presets_dict = load_layout_presets(config_path)
        for preset_name in preset_names:
            if preset_name not in presets_dict:
                available = sorted(presets_dict.keys())
                raise InvalidLayoutConfigError(
                    f"Preset '{preset_name}' not found. Available presets: {available}"
                )
            values.update(presets_dict[preset_name])

    if overrides:
        values.update(overrides)

    return _build_config(values)
