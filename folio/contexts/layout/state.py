"""
Layout accumulator.

LayoutState is threaded through the section builders in document order.
It is immutable: every append returns a new state, so two builder calls
can never alias each other's buffers and a state is never shared between
two renders.
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Tuple

from folio.contexts.layout.exceptions import LayoutError
from folio.contexts.layout.placement import Column, Placement


@dataclass(frozen=True)
class LayoutState:
    """
    Running layout accumulator (immutable).

    The main column and the full-width block share one running height
    (`right_height`) and page count (`right_page_count`): block pages are
    the continuation of the main column once the sidebar has ended.

    Attributes:
        left_height: Cumulative sidebar height in logical units
        right_height: Cumulative main column height in logical units
        left_page_count: Pages spanned by the sidebar
        right_page_count: Pages spanned by the main column
        left: Sidebar placements in append order
        right: Main column placements on pages that still have a sidebar
        block: Full-width placements on pages without a sidebar
        page1_snapshot: Main column buffer as it stood right before page 2
            began; None until the main column first reaches page 2
    """

    left_height: float = 0.0
    right_height: float = 0.0
    left_page_count: int = 1
    right_page_count: int = 1
    left: Tuple[Placement, ...] = ()
    right: Tuple[Placement, ...] = ()
    block: Tuple[Placement, ...] = ()
    page1_snapshot: Optional[Tuple[Placement, ...]] = None

    @classmethod
    def initial(cls, left_top: float = 0.0, right_top: float = 0.0) -> "LayoutState":
        """Fresh state for one render."""
        return cls(left_height=float(left_top), right_height=float(right_top))

    def buffer(self, column: Column) -> Tuple[Placement, ...]:
        return getattr(self, column.value)

    @property
    def main_destination(self) -> Column:
        """Buffer the main column currently feeds: right while the sidebar spans the page."""
        return Column.RIGHT if self.right_page_count <= self.left_page_count else Column.BLOCK

    @property
    def placement_count(self) -> int:
        return len(self.left) + len(self.right) + len(self.block)

    def append_left(self, placements: Iterable[Placement], new_height: float) -> "LayoutState":
        """
        Append sidebar placements and advance the sidebar height.

        Raises:
            LayoutError: If new_height would move the sidebar height backwards
        """
        if new_height < self.left_height:
            raise LayoutError(
                f"Sidebar height cannot decrease ({self.left_height} -> {new_height})"
            )
        return replace(
            self,
            left=self.left + tuple(placements),
            left_height=float(new_height),
        )

    def append_main(
        self,
        column: Column,
        placements: Iterable[Placement],
        new_height: float,
        page_count: int,
    ) -> "LayoutState":
        """
        Append main column placements to `column` (right or block).

        Takes the page-1 snapshot the first time the main column reaches
        page 2, before the new placements are added.

        Raises:
            LayoutError: If the height or page count would move backwards,
                or `column` is the sidebar
        """
        if column is Column.LEFT:
            raise LayoutError("append_main cannot target the sidebar")
        if new_height < self.right_height or page_count < self.right_page_count:
            raise LayoutError(
                f"Main column cannot move backwards "
                f"(height {self.right_height} -> {new_height}, "
                f"pages {self.right_page_count} -> {page_count})"
            )

        snapshot = self.page1_snapshot
        if snapshot is None and self.right_page_count < 2 <= page_count:
            snapshot = self.right

        return replace(
            self,
            **{column.value: self.buffer(column) + tuple(placements)},
            right_height=float(new_height),
            right_page_count=page_count,
            page1_snapshot=snapshot,
        )

    def append_decoration(self, column: Column, placement: Placement) -> "LayoutState":
        """Append a placement that does not consume column height (e.g. a divider)."""
        return replace(self, **{column.value: self.buffer(column) + (placement,)})
