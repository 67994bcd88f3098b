"""Unit tests for the default measurer and text-height estimate."""

import math

import pytest

from folio.contexts.layout.measure import DefaultMeasure, plain_length, text_height
from folio.contexts.layout.placement import PlacementKind


def _props(**extra):
    return {"width": 113.0, "column": "right", "resume_type": "fresher", **extra}


@pytest.mark.unit
def test_plain_length_ignores_tags():
    assert plain_length("<b>bold</b> move") == len("bold move")
    assert plain_length("") == 0
    assert plain_length(None) == 0


@pytest.mark.unit
def test_text_height_empty_is_zero():
    assert text_height("", 113) == 0


@pytest.mark.unit
def test_text_height_wraps_by_width():
    one_line = text_height("short", 113)
    assert one_line == math.ceil(1.2 * 3.2)

    long_text = "x" * 100  # 100 * 0.6 * 3.2 = 192 -> 2 lines at 113, 1 line at 200
    assert text_height(long_text, 113) == math.ceil(2 * 1.2 * 3.2)
    assert text_height(long_text, 200) == math.ceil(1 * 1.2 * 3.2)


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind,expected",
    [
        (PlacementKind.USER_PHOTO, 53),
        (PlacementKind.USER_NAME, 13),
        (PlacementKind.USER_DESIGNATION, 9),
        (PlacementKind.LEFT_HEADING, 9),
        (PlacementKind.SKILL, 15),
        (PlacementKind.HOBBY, 5),
        (PlacementKind.SECTION_LOGO, 13),
        (PlacementKind.SECTION_HEADING, 13),
        (PlacementKind.AREA, 10),
        (PlacementKind.VERTICAL_RULE, 0),
    ],
)
def test_fixed_heights(kind, expected):
    assert DefaultMeasure()(kind, _props()) == expected


@pytest.mark.unit
def test_contact_has_minimum_height_and_grows_with_text():
    measure = DefaultMeasure()
    assert measure(PlacementKind.CONTACT_INFO, _props(width=76, value="+1 555 0100")) == 7
    long_address = "Flat 4, 221 Long Harbour Road, Eastleigh Industrial Estate, Southampton SO50 4PX"
    assert measure(PlacementKind.CONTACT_INFO, _props(width=76, value=long_address)) > 7


@pytest.mark.unit
def test_work_experience_depends_on_resume_type():
    measure = DefaultMeasure()
    description = "x" * 100
    fresher = measure(PlacementKind.WORK_EXPERIENCE, _props(description=description))
    pro = measure(PlacementKind.WORK_EXPERIENCE, _props(resume_type="pro", description=description))
    assert fresher == 12 + text_height(description, 113)
    assert pro == 14


@pytest.mark.unit
def test_education_depends_on_type_and_column():
    measure = DefaultMeasure()
    assert measure(PlacementKind.EDUCATION, _props()) == 12
    assert measure(PlacementKind.EDUCATION, _props(resume_type="expert")) == 20
    assert measure(PlacementKind.EDUCATION, _props(column="block", width=183)) == 10


@pytest.mark.unit
def test_project_adds_one_for_fresher():
    measure = DefaultMeasure()
    props = _props(title="Tide Tables", description="Offline tide predictions")
    base = text_height("Tide Tables", 113) + text_height("Offline tide predictions", 113)
    assert measure(PlacementKind.PROJECT, props) == base + 1
    assert measure(PlacementKind.PROJECT, {**props, "resume_type": "pro"}) == base


@pytest.mark.unit
def test_text_kinds_shrink_at_block_width():
    measure = DefaultMeasure()
    text = "y" * 90  # 172.8 units of text: 2 lines at 113, 1 line at 183
    right = measure(PlacementKind.ROLE_BULLET, _props(text=text))
    block = measure(PlacementKind.ROLE_BULLET, _props(text=text, width=183, column="block"))
    assert block < right


@pytest.mark.unit
def test_font_size_changes_text_heights():
    small = DefaultMeasure(font_size=2.0)(PlacementKind.ACHIEVEMENT, _props(text="Winner"))
    large = DefaultMeasure(font_size=5.0)(PlacementKind.ACHIEVEMENT, _props(text="Winner"))
    assert small < large
