"""
Rendering Context

Responsibilities:
- Serializes assembled pages for the external renderer
- Writes a wireframe HTML preview of the page layout

Owns: Page export formats, preview templates
Never: Decides placement geometry or page breaks
"""

from folio.contexts.rendering.exceptions import PreviewRenderError
from folio.contexts.rendering.export import pages_to_dict, write_pages_json
from folio.contexts.rendering.preview import PreviewRenderer, render_preview

__all__ = [
    "PreviewRenderError",
    "PreviewRenderer",
    "pages_to_dict",
    "render_preview",
    "write_pages_json",
]
