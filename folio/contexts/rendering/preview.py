"""
Wireframe HTML preview.

Draws every placement as an absolutely positioned, labelled box on its page
so that pagination and column routing can be inspected in a browser. No
fonts, icons or pixel fidelity: geometry only, all of it formatted through
the layout dimension helpers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

from folio.contexts.layout.assembler import Page, assemble_pages
from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.dimensions import css_length, page_top
from folio.contexts.layout.placement import Column, Placement, PlacementKind
from folio.contexts.rendering.exceptions import PreviewRenderError
from folio.contexts.rendering.logger import log_preview, log_template_loaded

TEMPLATES_PATH = Path(__file__).resolve().parent / "templates"
PREVIEW_TEMPLATE = "pages.html.jinja"

# Props tried in order for a box label
LABEL_PROPS = ("title", "name", "designation", "org", "degree", "topic", "key", "value", "text", "photo")
LABEL_LIMIT = 40


@dataclass(frozen=True)
class Box:
    """One placement positioned relative to its page, in logical units."""

    id: str
    kind: str
    column: str
    x: float
    y: float
    width: float
    height: float
    label: str
    flagged: bool


def _label(placement: Placement) -> str:
    for key in LABEL_PROPS:
        value = placement.props.get(key)
        if value:
            text = str(value)
            return text if len(text) <= LABEL_LIMIT else text[: LABEL_LIMIT - 3] + "..."
    return placement.id


def column_x(config: LayoutConfig, column: Column) -> float:
    """Horizontal start of a buffer on the page."""
    if column is Column.LEFT:
        return 0.0
    if column is Column.RIGHT:
        gutter = (config.page_width - config.left_width - config.right_width) / 2
        return config.left_width + gutter
    return (config.page_width - config.block_width) / 2


def _box(placement: Placement, column: Column, page: Page, config: LayoutConfig) -> Box:
    x = column_x(config, column)
    width = config.column_width(column)
    if placement.kind is PlacementKind.AREA and "left" in placement.props:
        x += placement.props["left"]
        width = config.area_left_step
    elif placement.kind is PlacementKind.VERTICAL_RULE:
        width = 0.0

    return Box(
        id=placement.id,
        kind=placement.kind.value,
        column=column.value,
        x=x,
        y=placement.top - page_top(config.page_height, page.index),
        width=width,
        height=placement.height,
        label=_label(placement),
        flagged=bool(placement.diagnostics),
    )


class PreviewRenderer:
    """
    Renders layout pages to a standalone HTML wireframe.

    Lengths go through the `dim()` template function, which applies the
    scaling factor and unit suffix via the layout dimension helpers.
    """

    def __init__(self, templates_path: Optional[Path] = None):
        self.templates_path = templates_path or TEMPLATES_PATH
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template: Optional[Template] = None

    def get_template(self) -> Template:
        if self._template is None:
            self._template = self.env.get_template(PREVIEW_TEMPLATE)
            log_template_loaded(PREVIEW_TEMPLATE)
        return self._template

    def render(
        self,
        pages: List[Page],
        config: LayoutConfig,
        scaling_factor: float = 1.0,
        warnings: Optional[List[str]] = None,
        title: str = "Layout preview",
    ) -> str:
        """
        Render logical-unit pages to HTML.

        Args:
            pages: Pages in logical units (scaling factor 1)
            config: Layout configuration the pages were built with
            scaling_factor: Factor applied to every length in the output
            warnings: Layout warnings listed above the pages
            title: Document title

        Returns:
            HTML document as a string

        Raises:
            PreviewRenderError: If the template cannot be loaded or rendered
        """

        def dim(value: float) -> str:
            return css_length(scaling_factor, value, config.unit)

        page_views: List[Dict[str, Any]] = [
            {
                "index": page.index,
                "boxes": [_box(p, column, page, config) for column in Column for p in page.buffer(column)],
            }
            for page in pages
        ]

        try:
            return self.get_template().render(
                dim=dim,
                title=title,
                pages=page_views,
                warnings=warnings or [],
                page_width=config.page_width,
                page_height=config.page_height,
            )
        except TemplateError as e:
            raise PreviewRenderError(
                "Failed to render layout preview",
                template_path=self.templates_path / PREVIEW_TEMPLATE,
                original_error=e,
            ) from e


def render_preview(result, config: LayoutConfig, output_path: Path, title: Optional[str] = None) -> Path:
    """
    Write an HTML preview of a LayoutResult.

    Pages are re-assembled from the result's logical state so that the
    preview scales through the same helpers as the exported geometry.

    Args:
        result: LayoutResult from layout_resume()
        config: Layout configuration used for the run
        output_path: Destination .html file
        title: Document title (defaults to the output file stem)

    Returns:
        Path to the written file
    """
    pages = assemble_pages(result.state, config)
    html = PreviewRenderer().render(
        pages,
        config,
        scaling_factor=result.scaling_factor,
        warnings=result.warnings,
        title=title or output_path.stem,
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    log_preview(output_path, len(pages), result.scaling_factor)
    return output_path
