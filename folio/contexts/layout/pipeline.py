"""
Layout pipeline.

Feeds a ResumeDocument's sections through the section builders in order
(sidebar first, then main column), partitions the final state into pages
and runs the diagnostics pass.

Examples:
    >>> document = ResumeDocument.from_yaml("resume.yaml")
    >>> result = layout_resume(document, scaling_factor=2.0)
    >>> result.page_count
    2
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from folio.contexts.document.resume_data_structure import ResumeDocument
from folio.contexts.layout.assembler import Page, assemble_pages
from folio.contexts.layout.builders import SECTION_BUILDERS
from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.context import BuildContext
from folio.contexts.layout.diagnostics import DocumentDiagnostics, diagnose_layout
from folio.contexts.layout.exceptions import LayoutError
from folio.contexts.layout.logger import (
    log_layout_result,
    log_layout_start,
    log_section_built,
    log_section_skipped,
)
from folio.contexts.layout.measure import DefaultMeasure, Measure
from folio.contexts.layout.state import LayoutState


@dataclass(frozen=True)
class LayoutResult:
    """
    Output of one layout run.

    Attributes:
        pages: Pages with geometry multiplied by the scaling factor
        state: Final layout state in logical units
        diagnostics: Diagnostics tree computed in logical units
        scaling_factor: Factor applied to `pages`
    """

    pages: Tuple[Page, ...]
    state: LayoutState
    diagnostics: DocumentDiagnostics
    scaling_factor: float = 1.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def total_placements(self) -> int:
        return sum(len(page.placements()) for page in self.pages)

    @property
    def warnings(self) -> List[str]:
        return self.diagnostics.get_inherited_issues()

    @property
    def is_valid(self) -> bool:
        return self.diagnostics.is_valid


def build_order(document: ResumeDocument) -> Tuple[str, ...]:
    """Section names in build order: sidebar, then main column."""
    return document.left_build_order + tuple(document.right_sequence)


def _check_monotonic(before: LayoutState, after: LayoutState, section_name: str) -> None:
    if after.left_height < before.left_height or after.right_height < before.right_height:
        raise LayoutError(f"Column height moved backwards while building '{section_name}'")


def build_layout_state(document: ResumeDocument, ctx: BuildContext) -> LayoutState:
    """
    Run every displayed section through its builder.

    Returns:
        Final LayoutState in logical units
    """
    state = LayoutState.initial(ctx.config.left_top, ctx.config.right_top)

    for name in build_order(document):
        if not document.is_displayed(name):
            log_section_skipped(name, "hidden by display settings")
            continue

        content = document.identity if name == "identity" else document.section(name)
        before = state
        state = SECTION_BUILDERS[name](state, content, ctx)
        _check_monotonic(before, state, name)
        if state is not before:
            log_section_built(name, state.placement_count - before.placement_count, state)

    return state


def layout_resume(
    document: ResumeDocument,
    config: Optional[LayoutConfig] = None,
    measure: Optional[Measure] = None,
    scaling_factor: float = 1.0,
) -> LayoutResult:
    """
    Lay out a resume into pages.

    Args:
        document: Resume content
        config: Page geometry (defaults to A4 with the standard columns)
        measure: Height callback (defaults to DefaultMeasure at the configured font size)
        scaling_factor: Multiplier applied to every output geometry value

    Returns:
        LayoutResult with pages, final state and diagnostics

    Raises:
        MeasureError: If the measure callback fails; no partial result is returned
        ValueError: If scaling_factor is not positive
    """
    if scaling_factor <= 0:
        raise ValueError(f"scaling_factor must be positive: {scaling_factor}")

    config = config or LayoutConfig()
    ctx = BuildContext(
        config=config,
        margins=config.resolve_margins(document.margins),
        measure=measure or DefaultMeasure(config.font_size),
        resume_type=document.resume_type,
    )

    document_name = document.source_path or "document"
    log_layout_start(document_name, document.resume_type.value, scaling_factor)

    state = build_layout_state(document, ctx)
    logical_pages = assemble_pages(state, config)
    diagnostics = diagnose_layout(logical_pages, state, config.page_height)

    pages = tuple(page.scaled(scaling_factor) for page in logical_pages)
    result = LayoutResult(pages=pages, state=state, diagnostics=diagnostics, scaling_factor=scaling_factor)
    log_layout_result(document_name, result)
    return result
