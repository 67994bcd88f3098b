"""
Post-layout invariant pass.

Walks the assembled pages (in logical units) and builds a diagnostics tree
mirroring the output structure: document -> page -> column -> placement.
Each level reports its own issues; `get_inherited_issues()` on the root
collects the structured warnings returned to the caller.

Detection capabilities:
- Unresolved overflow: an entry taller than one page (attached by the
  pagination planner to the Placement itself)
- Boundary straddling: a placement whose bottom edge crosses its page's
  bottom edge
- Sidebar overflow: the sidebar is taller than the pages it is allowed to span
- Ordering: placements of one column on one page out of top order
- Page count: main column page count disagreeing with the assembled pages
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from folio.contexts.layout.placement import Column, Placement, PlacementKind


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_MISMATCH = "Main column spans {intended} page(s) but {actual} page(s) were assembled"

    # Column-level
    SIDEBAR_OVERFLOW = (
        "Sidebar height {height} exceeds {pages} page(s) of {page_height}; sidebar content is clipped"
    )
    OUT_OF_ORDER = "'{column}' on page {page}: '{id}' starts above the placement before it"

    # Placement-level
    UNRESOLVED_OVERFLOW = "'{id}' is {height} tall and does not fit on one page of {page_height}"
    STRADDLES_BOUNDARY = "'{id}' ({column}) on page {page} crosses the page bottom edge by {amount}"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class PlacementDiagnostics(Diagnostics):
    """Diagnostics for one placement."""

    placement_id: str = ""
    column_name: str = ""
    page_number: int = 0
    overhang: float = 0.0
    attached: Tuple[str, ...] = ()

    def get_issues(self) -> List[str]:
        # Attached issues already explain an oversized entry's overhang
        if self.attached:
            return list(self.attached)
        if self.overhang > 0:
            return [
                IssueTemplates.STRADDLES_BOUNDARY.format(
                    id=self.placement_id,
                    column=self.column_name,
                    page=self.page_number,
                    amount=f"{self.overhang:g}",
                )
            ]
        return []


@dataclass
class ColumnDiagnostics(Diagnostics):
    """Diagnostics for one buffer on one page."""

    column_name: str = ""
    page_number: int = 0
    out_of_order_id: str = ""

    def get_issues(self) -> List[str]:
        issues = []
        if self.out_of_order_id:
            issues.append(
                IssueTemplates.OUT_OF_ORDER.format(
                    column=self.column_name,
                    page=self.page_number,
                    id=self.out_of_order_id,
                )
            )
        return issues


@dataclass
class PageDiagnostics(Diagnostics):
    """Diagnostics for a single page."""

    page_number: int = 0


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the whole layout."""

    page_height: float = 0.0
    page_count: int = 0
    right_page_count: int = 0
    left_height: float = 0.0
    left_page_count: int = 1

    @property
    def sidebar_overflow(self) -> bool:
        return self.left_height > self.left_page_count * self.page_height

    def get_issues(self) -> List[str]:
        issues = []
        if self.sidebar_overflow:
            issues.append(
                IssueTemplates.SIDEBAR_OVERFLOW.format(
                    height=f"{self.left_height:g}",
                    pages=self.left_page_count,
                    page_height=f"{self.page_height:g}",
                )
            )
        if self.right_page_count > self.page_count:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    intended=self.right_page_count,
                    actual=self.page_count,
                )
            )
        return issues


# =============================================================================
# Analysis
# =============================================================================


def _first_out_of_order(placements: Sequence[Placement]) -> str:
    """Id of the first non-rule placement starting above its predecessor, or ''."""
    previous_top = None
    for placement in placements:
        if placement.kind is PlacementKind.VERTICAL_RULE:
            continue
        if previous_top is not None and placement.top < previous_top:
            return placement.id
        previous_top = placement.top
    return ""


def _diagnose_placement(placement: Placement, column: Column, page_number: int, page_height: float):
    overhang = placement.bottom - page_height * page_number
    return PlacementDiagnostics(
        placement_id=placement.id,
        column_name=column.value,
        page_number=page_number,
        overhang=max(overhang, 0.0),
        attached=placement.diagnostics,
    )


def diagnose_layout(pages, state, page_height: float) -> DocumentDiagnostics:
    """
    Build the diagnostics tree for a finished layout.

    Args:
        pages: Pages from assemble_pages() in logical units (scaling factor 1)
        state: Final LayoutState
        page_height: Pagination boundary

    Returns:
        DocumentDiagnostics root; call get_inherited_issues() for warnings
    """
    document = DocumentDiagnostics(
        page_height=page_height,
        page_count=len(pages),
        right_page_count=state.right_page_count,
        left_height=state.left_height,
        left_page_count=state.left_page_count,
    )

    for page in pages:
        page_diag = PageDiagnostics(page_number=page.index)
        for column in Column:
            placements = page.buffer(column)
            if not placements:
                continue
            column_diag = ColumnDiagnostics(
                column_name=column.value,
                page_number=page.index,
                out_of_order_id=_first_out_of_order(placements),
            )
            column_diag.components = [
                _diagnose_placement(p, column, page.index, page_height) for p in placements
            ]
            page_diag.components.append(column_diag)
        document.components.append(page_diag)

    return document
