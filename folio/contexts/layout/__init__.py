"""
Layout Context

Responsibilities:
- Places every resume section into sidebar, main column and block buffers
- Detects page boundaries and reroutes main column content to full-width pages
- Partitions the final layout into pages and reports layout issues

Owns: Placement geometry, pagination, page assembly, layout diagnostics
Never: Draws anything (kind-to-drawing mapping belongs to the renderer)
"""

from folio.contexts.layout.assembler import Page, assemble_pages
from folio.contexts.layout.config import LayoutConfig, load_layout_presets, resolve_layout_config
from folio.contexts.layout.exceptions import InvalidLayoutConfigError, LayoutError, MeasureError
from folio.contexts.layout.measure import DefaultMeasure, Measure
from folio.contexts.layout.pipeline import LayoutResult, layout_resume
from folio.contexts.layout.placement import Column, Placement, PlacementKind
from folio.contexts.layout.state import LayoutState

__all__ = [
    "Column",
    "DefaultMeasure",
    "InvalidLayoutConfigError",
    "LayoutConfig",
    "LayoutError",
    "LayoutResult",
    "LayoutState",
    "Measure",
    "MeasureError",
    "Page",
    "Placement",
    "PlacementKind",
    "assemble_pages",
    "layout_resume",
    "load_layout_presets",
    "resolve_layout_config",
]
