"""
Main column pagination and overflow reconciliation.

Every main column item goes through two phases:

1. Plan (pure lookahead): compute where the item would end, whether that
   crosses the current page's bottom edge, which page it therefore starts
   on, and which buffer serves that page. Pages still spanned by the
   sidebar are served by the `right` buffer; later pages have no sidebar
   and are served by the full-width `block` buffer.
2. Append exactly once to the planned buffer.

Text-bearing items are measured against the width of the buffer they are
heading for. When a page break moves an item from `right` to `block`, the
item is re-measured at block width; the break itself is already committed,
so a shorter re-measured height never pulls the item back.

Sidebar items are appended without any page-break handling.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from folio.contexts.layout.context import BuildContext
from folio.contexts.layout.diagnostics import IssueTemplates
from folio.contexts.layout.dimensions import page_bottom, page_top
from folio.contexts.layout.logger import log_page_break
from folio.contexts.layout.placement import Column, Placement, PlacementKind
from folio.contexts.layout.state import LayoutState


@dataclass(frozen=True)
class PlannedSlot:
    """
    Where a main column item will go.

    Attributes:
        column: Destination buffer (right or block)
        top: Top edge of the item
        new_height: Main column height after the item
        page_count: Main column page count after the item
        page_break: Whether the item starts a new page
    """

    column: Column
    top: float
    new_height: float
    page_count: int
    page_break: bool


@dataclass(frozen=True)
class PlacementSpec:
    """
    One placement of a logical item, before geometry is known.

    Attributes:
        kind: Placement kind
        id: Placement id
        props: Kind-specific props
        block_props: Props to use instead when the item lands in the block buffer
    """

    kind: PlacementKind
    id: str
    props: Mapping[str, Any] = field(default_factory=dict)
    block_props: Optional[Mapping[str, Any]] = None

    def props_for(self, column: Column) -> Mapping[str, Any]:
        if column is Column.BLOCK and self.block_props is not None:
            return self.block_props
        return self.props


@dataclass(frozen=True)
class PlacedItem:
    """Result of appending one logical item."""

    state: LayoutState
    column: Column
    top: float


def plan_main_slot(
    state: LayoutState,
    height: float,
    margin: float,
    page_height: float,
    margin_page: float,
    force_break: bool = False,
) -> PlannedSlot:
    """
    Plan a main column item of `height` preceded by `margin` (no mutation).

    A break happens only when the item would end strictly below the current
    page's bottom edge, or would start on or below it; ending exactly on it
    stays on the page. After a break
    the item starts at `page_height * (count - 1) + margin_page + margin`.
    The new page is always past the current running height, so heights stay
    monotonic even after an item taller than a page.

    Args:
        state: Current layout state
        height: Measured item height
        margin: Space before the item
        page_height: Pagination boundary
        margin_page: Offset at the top of a page after a break
        force_break: Commit to a break already detected by an earlier plan

    Returns:
        PlannedSlot describing the destination
    """
    page_count = state.right_page_count
    base = state.right_height

    bottom = page_bottom(page_height, page_count)
    # A zero-height item starting on the bottom edge already belongs to the next page
    page_break = force_break or base + margin + height > bottom or base + margin >= bottom
    if page_break:
        page_count = max(page_count + 1, math.ceil(base / page_height) + 1)
        base = page_top(page_height, page_count) + margin_page

    column = Column.RIGHT if page_count <= state.left_page_count else Column.BLOCK
    top = base + margin
    return PlannedSlot(
        column=column,
        top=top,
        new_height=top + height,
        page_count=page_count,
        page_break=page_break,
    )


def _measure_item(
    ctx: BuildContext, specs: Sequence[PlacementSpec], column: Column
) -> Tuple[float, Tuple[Mapping[str, Any], ...]]:
    """Height of a logical item (its tallest placement) and each placement's props."""
    props = tuple(ctx.props_for(column, spec.props_for(column)) for spec in specs)
    height = max(
        ctx.measure_placement(spec.kind, spec.id, spec_props) for spec, spec_props in zip(specs, props)
    )
    return height, props


def _build_placements(
    ctx: BuildContext,
    specs: Sequence[PlacementSpec],
    props: Sequence[Mapping[str, Any]],
    top: float,
    height: float,
    page_count: int,
) -> Tuple[Placement, ...]:
    placements = []
    oversized = top + height > page_bottom(ctx.page_height, page_count)
    for spec, spec_props in zip(specs, props):
        placement = Placement(kind=spec.kind, id=spec.id, top=top, height=height, props=spec_props)
        if oversized:
            placement = placement.with_diagnostics(
                [
                    IssueTemplates.UNRESOLVED_OVERFLOW.format(
                        id=spec.id, height=f"{height:g}", page_height=f"{ctx.page_height:g}"
                    )
                ]
            )
        placements.append(placement)
    return tuple(placements)


def _plan_measured(
    state: LayoutState,
    ctx: BuildContext,
    specs: Sequence[PlacementSpec],
    margin: float,
) -> Tuple[PlannedSlot, float, Tuple[Mapping[str, Any], ...]]:
    column = state.main_destination
    height, props = _measure_item(ctx, specs, column)
    margin_page = ctx.margins.margin_page
    slot = plan_main_slot(state, height, margin, ctx.page_height, margin_page)

    if slot.column is not column:
        height, props = _measure_item(ctx, specs, slot.column)
        slot = plan_main_slot(state, height, margin, ctx.page_height, margin_page, force_break=slot.page_break)

    return slot, height, props


def plan_item(
    state: LayoutState,
    ctx: BuildContext,
    specs: Sequence[PlacementSpec],
    margin: float,
) -> PlannedSlot:
    """Where `place_main` would put this item, without appending it."""
    return _plan_measured(state, ctx, specs, margin)[0]


def place_main(
    state: LayoutState,
    ctx: BuildContext,
    specs: Sequence[PlacementSpec],
    margin: float,
) -> PlacedItem:
    """
    Plan and append one logical main column item.

    All placements in `specs` share one top edge and move together, so a
    logo + heading pair is never split across pages or buffers.

    Args:
        state: Current layout state
        ctx: Build context
        specs: Placements making up the item (at least one)
        margin: Space before the item

    Returns:
        PlacedItem with the new state, destination buffer and top edge
    """
    slot, height, props = _plan_measured(state, ctx, specs, margin)

    if slot.page_break:
        log_page_break(specs[0].id, slot.page_count, slot.column.value)

    placements = _build_placements(ctx, specs, props, slot.top, height, slot.page_count)
    new_state = state.append_main(slot.column, placements, slot.new_height, slot.page_count)
    return PlacedItem(state=new_state, column=slot.column, top=slot.top)


def place_left(
    state: LayoutState,
    ctx: BuildContext,
    specs: Sequence[PlacementSpec],
    margin: float,
) -> PlacedItem:
    """
    Append one logical sidebar item at `left_height + margin`.

    No page-break handling: sidebar overflow is reported by the
    diagnostics pass, not corrected here.
    """
    height, props = _measure_item(ctx, specs, Column.LEFT)
    top = state.left_height + margin
    placements = tuple(
        Placement(kind=spec.kind, id=spec.id, top=top, height=height, props=spec_props)
        for spec, spec_props in zip(specs, props)
    )
    return PlacedItem(state=state.append_left(placements, top + height), column=Column.LEFT, top=top)


def close_main_section(state: LayoutState, ctx: BuildContext, section_id: str, column: Column) -> LayoutState:
    """
    Append the trailing vertical rule for a main column section.

    The rule goes to the buffer the section's last entry landed in. On page 1
    it uses the configured page-1 geometry; on later pages it starts below the
    page margin and spans `page_height - (page_height * count - right_height)`.
    Either way the rule is bounded by the page's bottom edge. The rule does
    not advance the column.
    """
    if not ctx.config.section_dividers:
        return state

    count = state.right_page_count
    page_height = ctx.page_height
    if count == 1:
        top = ctx.config.divider_page1_top
        height = ctx.config.divider_page1_height
    else:
        top = page_top(page_height, count) + ctx.margins.margin_page + ctx.margins.margin_sec
        height = page_height - (page_height * count - state.right_height)
    height = max(0.0, min(height, page_bottom(page_height, count) - top))

    rule = Placement(
        kind=PlacementKind.VERTICAL_RULE,
        id=f"{section_id}-rule",
        top=top,
        height=height,
        props=ctx.props_for(column, {}),
    )
    return state.append_decoration(column, rule)
