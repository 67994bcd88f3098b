"""
Page export.

Serializes assembled pages into plain dicts (JSON-ready) for the external
renderer, which maps each placement `kind` to its own drawing code.
"""

import json
from pathlib import Path
from typing import Any, Dict, Sequence

from folio.contexts.layout.assembler import Page
from folio.contexts.rendering.logger import log_export


def pages_to_dict(pages: Sequence[Page], scaling_factor: float = 1.0, unit: str = "mm") -> Dict[str, Any]:
    """
    Convert pages to a JSON-ready dict.

    Args:
        pages: Pages from layout_resume() (geometry already scaled)
        scaling_factor: Factor the geometry was scaled by
        unit: Unit suffix the renderer should apply

    Returns:
        {"scaling_factor": ..., "unit": ..., "pages": [{"index", "left", "right", "block"}, ...]}
    """
    return {
        "scaling_factor": scaling_factor,
        "unit": unit,
        "pages": [page.to_dict() for page in pages],
    }


def write_pages_json(
    pages: Sequence[Page], output_path: Path, scaling_factor: float = 1.0, unit: str = "mm"
) -> Path:
    """Write pages_to_dict() output to `output_path` as indented JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = pages_to_dict(pages, scaling_factor=scaling_factor, unit=unit)
    output_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    log_export(output_path, len(pages))
    return output_path
