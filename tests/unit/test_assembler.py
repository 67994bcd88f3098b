"""Unit tests for page assembly."""

import pytest

from folio.contexts.layout.assembler import Page, assemble_pages, count_pages
from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.placement import Placement, PlacementKind
from folio.contexts.layout.state import LayoutState

PH = 297.0


def _p(placement_id: str, top: float, height: float = 10.0, kind=PlacementKind.PROJECT) -> Placement:
    return Placement(kind, placement_id, top=top, height=height)


@pytest.mark.unit
def test_empty_state_gives_one_empty_page():
    pages = assemble_pages(LayoutState(), LayoutConfig())

    assert len(pages) == 1
    assert pages[0].index == 1
    assert pages[0].left == pages[0].right == pages[0].block == ()
    assert pages[0].is_empty


@pytest.mark.unit
def test_placements_partitioned_by_top():
    state = LayoutState(
        left_height=40,
        right_height=330,
        right_page_count=2,
        left=(_p("l0", 2), _p("l1", 20)),
        right=(_p("r0", 17), _p("r1", 280)),
        block=(_p("b0", 304), _p("b1", 318)),
    )
    pages = assemble_pages(state, LayoutConfig())

    assert len(pages) == 2
    assert [p.id for p in pages[0].left] == ["l0", "l1"]
    assert [p.id for p in pages[0].right] == ["r0", "r1"]
    assert pages[0].block == ()
    assert pages[1].left == pages[1].right == ()
    assert [p.id for p in pages[1].block] == ["b0", "b1"]


@pytest.mark.unit
def test_page_boundary_is_half_open():
    state = LayoutState(right_height=310, right_page_count=2, block=(_p("edge", PH),))
    pages = assemble_pages(state, LayoutConfig())
    assert pages[0].block == ()
    assert [p.id for p in pages[1].block] == ["edge"]


@pytest.mark.unit
def test_first_page_main_column_comes_from_snapshot():
    kept = _p("kept", 20)
    late = _p("late", 40)
    state = LayoutState(right_height=320, right_page_count=2, right=(kept, late), page1_snapshot=(kept,))

    pages = assemble_pages(state, LayoutConfig())
    assert pages[0].right == (kept,)


@pytest.mark.unit
def test_page_count_covers_every_placement():
    state = LayoutState(left_height=10, block=(_p("far", 700),))
    assert count_pages(state, PH) == 3
    pages = assemble_pages(state, LayoutConfig())
    assert [p.id for p in pages[2].block] == ["far"]


@pytest.mark.unit
def test_page_count_follows_taller_column():
    assert count_pages(LayoutState(left_height=100, right_height=600), PH) == 3
    assert count_pages(LayoutState(left_height=0, right_height=0), PH) == 1


@pytest.mark.unit
def test_scaling_does_not_change_pagination():
    state = LayoutState(
        right_height=320,
        right_page_count=2,
        right=(_p("r0", 290, 5),),
        block=(_p("b0", 304),),
    )
    logical = assemble_pages(state, LayoutConfig())
    scaled = assemble_pages(state, LayoutConfig(), scaling_factor=2.0)

    assert len(scaled) == len(logical)
    assert scaled[0].right[0].top == 580
    assert scaled[0].right[0].height == 10
    assert scaled[1].block[0].top == 608


@pytest.mark.unit
def test_page_to_dict():
    page = Page(index=1, left=(_p("l0", 2),))
    d = page.to_dict()
    assert d["index"] == 1
    assert [p["id"] for p in d["left"]] == ["l0"]
    assert d["right"] == d["block"] == []
