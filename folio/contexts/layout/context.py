"""Per-render build context shared by every section builder."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from folio.contexts.document.resume_data_structure import Margins, ResumeType
from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.exceptions import MeasureError
from folio.contexts.layout.measure import Measure
from folio.contexts.layout.placement import Column, PlacementKind


@dataclass(frozen=True)
class BuildContext:
    """
    Read-only inputs for one render.

    Attributes:
        config: Page geometry and column widths
        margins: Resolved spacing parameters
        measure: Height callback for every placement
        resume_type: Document variant
    """

    config: LayoutConfig
    margins: Margins
    measure: Measure
    resume_type: ResumeType = ResumeType.FRESHER

    @property
    def page_height(self) -> float:
        return self.config.page_height

    def props_for(self, column: Column, props: Mapping[str, Any]) -> Dict[str, Any]:
        """Kind-specific props plus the geometry every renderer and measurer needs."""
        return {
            **props,
            "column": column.value,
            "width": self.config.column_width(column),
            "resume_type": self.resume_type.value,
        }

    def measure_placement(self, kind: PlacementKind, placement_id: str, props: Mapping[str, Any]) -> float:
        """
        Measure one placement through the configured callback.

        Raises:
            MeasureError: If the callback raises or returns a negative or non-finite height
        """
        try:
            height = self.measure(kind, props)
        except Exception as e:
            raise MeasureError(
                "Measure callback failed", kind=kind.value, placement_id=placement_id, original_error=e
            ) from e

        try:
            height = float(height)
        except (TypeError, ValueError) as e:
            raise MeasureError(
                f"Measure callback returned a non-numeric height: {height!r}",
                kind=kind.value,
                placement_id=placement_id,
            ) from e

        if not math.isfinite(height) or height < 0:
            raise MeasureError(
                f"Measure callback returned an invalid height: {height}",
                kind=kind.value,
                placement_id=placement_id,
            )
        return height
