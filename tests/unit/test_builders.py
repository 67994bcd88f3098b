"""Unit tests for the section builders."""

import pytest

from folio.contexts.document.resume_data_structure import (
    AreaEntry,
    ContactLine,
    EducationEntry,
    Identity,
    Margins,
    ProjectEntry,
    ResumeType,
    Section,
    Skill,
    WorkEntry,
)
from folio.contexts.layout.builders import (
    SECTION_BUILDERS,
    build_achievements,
    build_area_of_interest,
    build_education,
    build_hobbies,
    build_identity,
    build_projects,
    build_skills,
    build_summary,
    build_work_experience,
)
from folio.contexts.layout.config import LayoutConfig
from folio.contexts.layout.context import BuildContext
from folio.contexts.layout.measure import DefaultMeasure
from folio.contexts.layout.placement import Column, PlacementKind
from folio.contexts.layout.state import LayoutState

PH = 297.0
MARGINS = Margins(margin_sec=2, margin_bullet=1, margin_page=5)


def _ctx(resume_type: ResumeType = ResumeType.FRESHER, **config) -> BuildContext:
    return BuildContext(
        config=LayoutConfig(**config),
        margins=MARGINS,
        measure=DefaultMeasure(),
        resume_type=resume_type,
    )


def _ids(placements):
    return [p.id for p in placements]


def _fresher_jobs(count: int) -> Section:
    return Section("WORK EXPERIENCE", [WorkEntry(org=f"Org {i}", type="Internship") for i in range(count)])


def _areas(count: int = 3) -> Section:
    return Section(
        "AREA OF INTEREST",
        [AreaEntry(key=f"area{i + 1}", topic=f"Topic {i + 1}") for i in range(count)],
    )


# =============================================================================
# Empty sections
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("name", [n for n in SECTION_BUILDERS if n != "identity"])
def test_empty_section_emits_nothing(name):
    state = LayoutState()
    builder = SECTION_BUILDERS[name]

    assert builder(state, None, _ctx()) is state
    assert builder(state, Section("TITLE", []), _ctx()) is state


@pytest.mark.unit
def test_missing_identity_emits_nothing():
    state = LayoutState()
    assert build_identity(state, None, _ctx()) is state


# =============================================================================
# Sidebar builders
# =============================================================================


@pytest.mark.unit
def test_small_sidebar_tops_follow_margins_and_heights():
    """Identity + one contact + three skills: each top is previous bottom plus margin."""
    identity = Identity(
        name="Ada Quill",
        designation="Graduate Engineer",
        contacts=(ContactLine("phone", "+44 7700 900123"),),
    )
    skills = Section("SKILLS", [Skill("Python", 4.5), Skill("SQL", 4), Skill("Docker", 3)])
    ctx = _ctx()

    state = build_identity(LayoutState(), identity, ctx)
    state = build_skills(state, skills, ctx)

    assert _ids(state.left) == [
        "user-name",
        "user-designation",
        "contact-heading",
        "contact-0",
        "skills-heading",
        "skill-0",
        "skill-1",
        "skill-2",
    ]
    expected_margins = [2, 1, 2, 2, 2, 2, 2, 2]
    assert state.left[0].top == expected_margins[0]
    for previous, current, margin in zip(state.left, state.left[1:], expected_margins[1:]):
        assert current.top > previous.top
        assert current.top == previous.top + previous.height + margin

    assert state.left_height == state.left[-1].bottom
    assert state.left_height < PH
    assert state.right == state.block == ()


@pytest.mark.unit
def test_photo_sits_below_top_offset():
    identity = Identity(name="Ada", photo="ada.png")
    state = build_identity(LayoutState(), identity, _ctx())

    photo = state.left[0]
    assert photo.kind is PlacementKind.USER_PHOTO
    assert (photo.top, photo.height) == (10, 53)
    assert photo.props["photo"] == "ada.png"


@pytest.mark.unit
def test_identity_without_contacts_has_no_contact_heading():
    state = build_identity(LayoutState(), Identity(name="Ada"), _ctx())
    assert _ids(state.left) == ["user-name"]


@pytest.mark.unit
def test_fresher_summary_is_one_paragraph():
    section = Section("PROFILE", ["First point.", "Second point."])
    state = build_summary(LayoutState(), section, _ctx())

    assert _ids(state.left) == ["summary-heading", "summary"]
    assert state.left[1].props["text"] == "First point. Second point."


@pytest.mark.unit
@pytest.mark.parametrize("resume_type", [ResumeType.PRO, ResumeType.EXPERT])
def test_professional_summary_has_one_bullet_per_point(resume_type):
    section = Section("PROFILE", ["First point.", "Second point."])
    state = build_summary(LayoutState(), section, _ctx(resume_type))

    assert _ids(state.left) == ["summary-heading", "summary-0", "summary-1"]
    first, second = state.left[1:]
    assert second.top == first.bottom + MARGINS.margin_bullet


@pytest.mark.unit
def test_skills_carry_rating_percent():
    section = Section("SKILLS", [Skill("Python", 4.5), Skill("Rust", 7)])
    state = build_skills(LayoutState(), section, _ctx())

    python, rust = state.left[1:]
    assert python.props["rating_percent"] == pytest.approx(90.0)
    assert rust.props["rating_percent"] == 100.0
    assert python.height == 15


@pytest.mark.unit
def test_hobbies_use_bullet_margin():
    state = build_hobbies(LayoutState(), Section("HOBBIES", ["Chess", "Climbing"]), _ctx())
    heading, chess, climbing = state.left
    assert chess.top == heading.bottom + MARGINS.margin_bullet
    assert climbing.top == chess.bottom + MARGINS.margin_bullet


# =============================================================================
# Main column builders
# =============================================================================


@pytest.mark.unit
def test_heading_and_logo_share_top():
    state = build_projects(LayoutState(), Section("PROJECTS", [ProjectEntry("Tide", "Tides")]), _ctx())

    logo, heading = state.right[:2]
    assert logo.kind is PlacementKind.SECTION_LOGO
    assert heading.kind is PlacementKind.SECTION_HEADING
    assert logo.top == heading.top == MARGINS.margin_sec
    assert heading.props["title"] == "PROJECTS"


@pytest.mark.unit
def test_section_ends_with_divider():
    state = build_education(
        LayoutState(),
        Section("EDUCATION", [EducationEntry("BSc", "Bristol", "2025", "3.8")]),
        _ctx(),
    )
    assert _ids(state.right) == ["education-logo", "education-heading", "education-0", "education-rule"]
    assert state.right_height == state.right[2].bottom


@pytest.mark.unit
def test_fresher_work_experience_has_no_role_bullets():
    section = Section(
        "WORK EXPERIENCE",
        [WorkEntry(org="Northwind", type="Internship", description="Built things.", roles=("Ignored",))],
    )
    state = build_work_experience(LayoutState(), section, _ctx(section_dividers=False))

    assert _ids(state.right) == ["work_experience-logo", "work_experience-heading", "work_experience-0"]
    entry = state.right[2]
    assert entry.props["description"] == "Built things."
    assert entry.height == 12 + 4


@pytest.mark.unit
def test_professional_work_experience_adds_role_bullets():
    section = Section(
        "WORK EXPERIENCE",
        [WorkEntry(org="Orbital", designation="Staff Engineer", roles=("Led pipeline work.", "Mentored."))],
    )
    state = build_work_experience(LayoutState(), section, _ctx(ResumeType.PRO, section_dividers=False))

    assert _ids(state.right)[2:] == [
        "work_experience-0",
        "work_experience-0-role-0",
        "work_experience-0-role-1",
    ]
    entry, role0, role1 = state.right[2:]
    assert entry.height == 14
    assert entry.props["designation"] == "Staff Engineer"
    assert role0.top == entry.bottom + MARGINS.margin_bullet
    assert role1.top == role0.bottom + MARGINS.margin_bullet


@pytest.mark.unit
def test_achievements_use_bullet_margin():
    state = build_achievements(
        LayoutState(), Section("ACHIEVEMENTS", ["Winner", "Finalist"]), _ctx(section_dividers=False)
    )
    heading, first, second = state.right[1:]
    assert first.top == heading.bottom + MARGINS.margin_bullet
    assert second.top == first.bottom + MARGINS.margin_bullet


@pytest.mark.unit
def test_work_experience_crossing_page_takes_snapshot():
    """Entries 0-19 fit on page 1 (bottom 295); entry 20 would end at 309 and moves on."""
    state = build_work_experience(LayoutState(), _fresher_jobs(25), _ctx())

    assert state.right_page_count == 2
    assert _ids(state.page1_snapshot) == ["work_experience-logo", "work_experience-heading"] + [
        f"work_experience-{i}" for i in range(20)
    ]
    assert all(p.bottom <= PH for p in state.page1_snapshot)

    assert _ids(state.block)[:5] == [f"work_experience-{i}" for i in range(20, 25)]
    assert state.block[0].top == PH + MARGINS.margin_page + MARGINS.margin_sec
    assert state.block[-1].kind is PlacementKind.VERTICAL_RULE


@pytest.mark.unit
def test_divider_follows_last_entry_buffer():
    state = build_work_experience(LayoutState(), _fresher_jobs(25), _ctx())
    rule = state.block[-1]

    assert rule.id == "work_experience-rule"
    assert rule.top == PH + MARGINS.margin_page + MARGINS.margin_sec
    assert rule.height == PH - (2 * PH - state.right_height)
    assert not any(p.kind is PlacementKind.VERTICAL_RULE for p in state.right)


@pytest.mark.unit
def test_area_row_beside_sidebar_shares_top():
    state = build_area_of_interest(LayoutState(), _areas(3), _ctx(section_dividers=False))

    areas = [p for p in state.right if p.kind is PlacementKind.AREA]
    assert len(areas) == 3
    assert len({p.top for p in areas}) == 1
    assert [p.props["left"] for p in areas] == [15, 47, 79]
    assert [p.props["topic"] for p in areas] == ["Topic 1", "Topic 2", "Topic 3"]
    assert state.right_height == areas[0].bottom


@pytest.mark.unit
def test_area_row_ending_on_page_bottom_stays_beside_sidebar():
    # heading 272 -> 285, row 287 -> 297
    state = build_area_of_interest(LayoutState(right_height=270), _areas(3), _ctx(section_dividers=False))

    assert state.block == ()
    assert state.right_height == PH
    assert state.right_page_count == 1


@pytest.mark.unit
def test_area_row_that_cannot_fit_stacks_in_block():
    # heading 274 -> 287, row would end at 299
    state = build_area_of_interest(LayoutState(right_height=272), _areas(3), _ctx(section_dividers=False))

    assert _ids(state.right) == ["area_of_interest-logo", "area_of_interest-heading"]
    areas = list(state.block)
    assert _ids(areas) == [f"area_of_interest-{i}" for i in range(3)]
    assert [p.props["key"] for p in areas] == ["area1", "area2", "area3"]
    assert all("left" not in p.props for p in areas)
    for previous, current in zip(areas, areas[1:]):
        assert current.top == previous.bottom + MARGINS.margin_sec


@pytest.mark.unit
def test_area_after_main_column_passed_sidebar_goes_to_block():
    """Main column already one page past the sidebar: heading pair and entries all land in block."""
    ctx = _ctx()
    state = build_work_experience(LayoutState(), _fresher_jobs(25), ctx)
    assert state.right_page_count - state.left_page_count == 1
    snapshot = state.page1_snapshot
    right_before = state.right

    state = build_area_of_interest(state, _areas(3), ctx)

    assert state.right == right_before
    assert state.page1_snapshot == snapshot
    area_ids = [pid for pid in _ids(state.block) if pid.startswith("area_of_interest")]
    assert area_ids == [
        "area_of_interest-logo",
        "area_of_interest-heading",
        "area_of_interest-0",
        "area_of_interest-1",
        "area_of_interest-2",
        "area_of_interest-rule",
    ]

    all_ids = _ids(state.right) + _ids(state.block) + _ids(state.page1_snapshot)
    assert all_ids.count("area_of_interest-heading") == 1
    assert all_ids.count("area_of_interest-logo") == 1


@pytest.mark.unit
def test_builders_do_not_mutate_input_state():
    ctx = _ctx()
    state = build_projects(LayoutState(), Section("PROJECTS", [ProjectEntry("A", "B")]), ctx)
    snapshot = (state.right_height, state.right, state.block)

    build_projects(state, Section("PROJECTS", [ProjectEntry("C", "D")]), ctx)

    assert (state.right_height, state.right, state.block) == snapshot
