"""
Page assembly.

Partitions a finished LayoutState into an ordered list of Pages using the
fixed page-height boundary. Page membership is decided in logical units
from each placement's `top`; scaling is applied afterwards, so rendering at
another scale never changes which page a placement lands on.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.placement import Column, Placement
from folio.contexts.layout.state import LayoutState


@dataclass(frozen=True)
class Page:
    """
    One output page.

    Attributes:
        index: 1-based page number
        left: Sidebar placements starting on this page
        right: Main column placements starting on this page
        block: Full-width placements starting on this page
    """

    index: int
    left: Tuple[Placement, ...] = field(default_factory=tuple)
    right: Tuple[Placement, ...] = field(default_factory=tuple)
    block: Tuple[Placement, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (self.left or self.right or self.block)

    def buffer(self, column: Column) -> Tuple[Placement, ...]:
        return getattr(self, column.value)

    def placements(self) -> List[Placement]:
        """All placements on the page, sidebar first."""
        return [*self.left, *self.right, *self.block]

    def scaled(self, factor: float) -> "Page":
        return replace(
            self,
            left=tuple(p.scaled(factor) for p in self.left),
            right=tuple(p.scaled(factor) for p in self.right),
            block=tuple(p.scaled(factor) for p in self.block),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "left": [p.to_dict() for p in self.left],
            "right": [p.to_dict() for p in self.right],
            "block": [p.to_dict() for p in self.block],
        }


def count_pages(state: LayoutState, page_height: float) -> int:
    """
    Number of pages needed for a finished state.

    At least one page; at least enough for the taller column; extended so
    that every placement's starting page exists.
    """
    tallest = max(state.left_height, state.right_height)
    count = max(math.ceil(tallest / page_height), 1)
    for column in Column:
        for placement in state.buffer(column):
            count = max(count, placement.page_index(page_height) + 1)
    return count


def _on_page(placements: Tuple[Placement, ...], page_height: float, index: int) -> Tuple[Placement, ...]:
    return tuple(p for p in placements if p.page_index(page_height) == index - 1)


def assemble_pages(state: LayoutState, config: LayoutConfig, scaling_factor: float = 1.0) -> List[Page]:
    """
    Partition a finished LayoutState into pages.

    Page n holds the placements of each buffer whose top falls in
    [(n-1) * page_height, n * page_height). Page 1's main column comes from
    the page-1 snapshot once the main column has reached page 2.

    Args:
        state: Final layout state
        config: Layout configuration (page height)
        scaling_factor: Multiplier applied to every geometric value

    Returns:
        Pages in order; exactly one empty page for an empty document
    """
    page_height = config.page_height
    pages = []
    for index in range(1, count_pages(state, page_height) + 1):
        right_source = state.right
        if index == 1 and state.page1_snapshot is not None:
            right_source = state.page1_snapshot
        pages.append(
            Page(
                index=index,
                left=_on_page(state.left, page_height, index),
                right=_on_page(right_source, page_height, index),
                block=_on_page(state.block, page_height, index),
            )
        )

    if scaling_factor != 1.0:
        pages = [page.scaled(scaling_factor) for page in pages]
    return pages
