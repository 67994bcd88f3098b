"""
Section builders.

One builder per content category. Every builder takes the current
LayoutState, one section's content and the BuildContext, and returns a new
LayoutState; nothing is mutated in place.

Sidebar builders (identity, summary, skills, hobbies) append directly to the
left buffer. Main column builders (work experience, projects, education,
achievements, area of interest) route every logical item through the shared
pagination planner, so any of them can cross a page boundary or continue
into the full-width block buffer.

Empty sections produce nothing: no heading, no placements, no divider.
"""

from typing import Callable, Dict, List, Optional

from folio.contexts.document.resume_data_structure import Identity, Section
from folio.contexts.layout.context import BuildContext
from folio.contexts.layout.logger import log_section_skipped
from folio.contexts.layout.pagination import (
    PlacementSpec,
    close_main_section,
    place_left,
    place_main,
    plan_item,
)
from folio.contexts.layout.placement import Column, PlacementKind
from folio.contexts.layout.state import LayoutState

# Space above the photo at the top of the sidebar
PHOTO_TOP = 10.0

CONTACT_TITLE = "CONTACT"

SectionBuilder = Callable[[LayoutState, Optional[Section], BuildContext], LayoutState]


def _left(state: LayoutState, ctx: BuildContext, spec: PlacementSpec, margin: float) -> LayoutState:
    return place_left(state, ctx, [spec], margin).state


def _left_heading(state: LayoutState, ctx: BuildContext, name: str, title: str) -> LayoutState:
    heading = PlacementSpec(PlacementKind.LEFT_HEADING, f"{name}-heading", {"title": title})
    return _left(state, ctx, heading, ctx.margins.margin_sec)


def _is_empty(section: Optional[Section], name: str) -> bool:
    if section is None or section.is_empty:
        log_section_skipped(name, "no entries")
        return True
    return False


# =============================================================================
# Sidebar builders
# =============================================================================


def build_identity(state: LayoutState, identity: Optional[Identity], ctx: BuildContext) -> LayoutState:
    """
    Photo, name, designation, then the CONTACT heading and one line per contact.

    The photo is optional; the contact heading is emitted only when there
    is at least one contact line.
    """
    if identity is None:
        log_section_skipped("identity", "no identity block")
        return state

    margins = ctx.margins
    if identity.photo:
        photo = PlacementSpec(PlacementKind.USER_PHOTO, "user-photo", {"photo": identity.photo})
        state = _left(state, ctx, photo, PHOTO_TOP)

    name = PlacementSpec(PlacementKind.USER_NAME, "user-name", {"name": identity.name})
    state = _left(state, ctx, name, margins.margin_sec)

    if identity.designation:
        designation = PlacementSpec(
            PlacementKind.USER_DESIGNATION, "user-designation", {"designation": identity.designation}
        )
        state = _left(state, ctx, designation, margins.margin_bullet)

    if not identity.contacts:
        return state

    state = _left_heading(state, ctx, "contact", CONTACT_TITLE)
    for i, contact in enumerate(identity.contacts):
        line = PlacementSpec(
            PlacementKind.CONTACT_INFO,
            f"contact-{i}",
            {"label": contact.label, "value": contact.value},
        )
        state = _left(state, ctx, line, margins.margin_sec)
    return state


def build_summary(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    """
    Profile summary.

    Fresher resumes render the points as one paragraph; pro and expert
    resumes render one bullet per point.
    """
    if _is_empty(section, "summary"):
        return state

    state = _left_heading(state, ctx, "summary", section.title)
    if not ctx.resume_type.is_professional:
        paragraph = PlacementSpec(PlacementKind.SUMMARY_TEXT, "summary", {"text": " ".join(section.entries)})
        return _left(state, ctx, paragraph, ctx.margins.margin_sec)

    for i, point in enumerate(section.entries):
        bullet = PlacementSpec(PlacementKind.SUMMARY_TEXT, f"summary-{i}", {"text": point, "bullet": True})
        state = _left(state, ctx, bullet, ctx.margins.margin_bullet)
    return state


def build_skills(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    if _is_empty(section, "skills"):
        return state

    state = _left_heading(state, ctx, "skills", section.title)
    for i, skill in enumerate(section.entries):
        spec = PlacementSpec(
            PlacementKind.SKILL,
            f"skill-{i}",
            {"name": skill.name, "rating": skill.rating, "rating_percent": skill.rating_percent},
        )
        state = _left(state, ctx, spec, ctx.margins.margin_sec)
    return state


def build_hobbies(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    if _is_empty(section, "hobbies"):
        return state

    state = _left_heading(state, ctx, "hobbies", section.title)
    for i, hobby in enumerate(section.entries):
        spec = PlacementSpec(PlacementKind.HOBBY, f"hobby-{i}", {"text": hobby})
        state = _left(state, ctx, spec, ctx.margins.margin_bullet)
    return state


# =============================================================================
# Main column builders
# =============================================================================


class _MainSection:
    """
    Appends one main column section item by item.

    Tracks the buffer the latest item landed in so the trailing divider
    follows the section's last entry.
    """

    def __init__(self, state: LayoutState, ctx: BuildContext, name: str):
        self.state = state
        self.ctx = ctx
        self.name = name
        self.column = state.main_destination

    def add(self, specs: List[PlacementSpec], margin: float) -> Column:
        placed = place_main(self.state, self.ctx, specs, margin)
        self.state = placed.state
        self.column = placed.column
        return placed.column

    def heading(self, title: str) -> None:
        """Logo and heading, appended as one item so the pair never splits."""
        self.add(
            [
                PlacementSpec(PlacementKind.SECTION_LOGO, f"{self.name}-logo", {"icon": self.name}),
                PlacementSpec(PlacementKind.SECTION_HEADING, f"{self.name}-heading", {"title": title}),
            ],
            self.ctx.margins.margin_sec,
        )

    def close(self) -> LayoutState:
        return close_main_section(self.state, self.ctx, self.name, self.column)


def build_work_experience(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    """
    Work experience entries.

    Fresher entries carry the work type and a free-text description. Pro and
    expert entries carry a designation followed by one bullet per role line.
    """
    if _is_empty(section, "work_experience"):
        return state

    professional = ctx.resume_type.is_professional
    margins = ctx.margins
    builder = _MainSection(state, ctx, "work_experience")
    builder.heading(section.title)

    for i, entry in enumerate(section.entries):
        props = {"org": entry.org, "start_date": entry.start_date, "end_date": entry.end_date}
        if professional:
            props["designation"] = entry.designation
        else:
            props.update(type=entry.type, description=entry.description)
        builder.add([PlacementSpec(PlacementKind.WORK_EXPERIENCE, f"work_experience-{i}", props)], margins.margin_sec)

        if not professional:
            continue
        for j, role in enumerate(entry.roles):
            bullet = PlacementSpec(PlacementKind.ROLE_BULLET, f"work_experience-{i}-role-{j}", {"text": role})
            builder.add([bullet], margins.margin_bullet)

    return builder.close()


def build_projects(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    if _is_empty(section, "projects"):
        return state

    builder = _MainSection(state, ctx, "projects")
    builder.heading(section.title)
    for i, project in enumerate(section.entries):
        spec = PlacementSpec(
            PlacementKind.PROJECT,
            f"projects-{i}",
            {"title": project.title, "description": project.description},
        )
        builder.add([spec], ctx.margins.margin_sec)
    return builder.close()


def build_education(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    if _is_empty(section, "education"):
        return state

    builder = _MainSection(state, ctx, "education")
    builder.heading(section.title)
    for i, entry in enumerate(section.entries):
        spec = PlacementSpec(
            PlacementKind.EDUCATION,
            f"education-{i}",
            {"degree": entry.degree, "college": entry.college, "year": entry.year, "cgpa": entry.cgpa},
        )
        builder.add([spec], ctx.margins.margin_sec)
    return builder.close()


def build_achievements(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    if _is_empty(section, "achievements"):
        return state

    builder = _MainSection(state, ctx, "achievements")
    builder.heading(section.title)
    for i, achievement in enumerate(section.entries):
        spec = PlacementSpec(PlacementKind.ACHIEVEMENT, f"achievements-{i}", {"text": achievement})
        builder.add([spec], ctx.margins.margin_bullet)
    return builder.close()


def build_area_of_interest(state: LayoutState, section: Optional[Section], ctx: BuildContext) -> LayoutState:
    """
    Area of interest entries.

    Beside the sidebar the entries form one horizontal row: each carries its
    topic, an icon key and a `left` offset advancing by `area_left_step`.
    In the full-width block they stack vertically, one per line, carrying
    only their key. The row is planned as a whole first; if it would land in
    the block buffer, the entries are placed one by one instead.
    """
    if _is_empty(section, "area_of_interest"):
        return state

    config = ctx.config
    margin_sec = ctx.margins.margin_sec
    builder = _MainSection(state, ctx, "area_of_interest")
    builder.heading(section.title)

    row = [
        PlacementSpec(
            PlacementKind.AREA,
            f"area_of_interest-{i}",
            {
                "topic": entry.topic,
                "icon": entry.topic,
                "left": config.area_left_start + i * config.area_left_step,
            },
            block_props={"key": entry.key},
        )
        for i, entry in enumerate(section.entries)
    ]

    if plan_item(builder.state, ctx, row, margin_sec).column is Column.RIGHT:
        builder.add(row, margin_sec)
    else:
        for spec in row:
            builder.add([spec], margin_sec)
    return builder.close()


# Builders keyed by section name
SECTION_BUILDERS: Dict[str, SectionBuilder] = {
    "identity": build_identity,
    "summary": build_summary,
    "skills": build_skills,
    "hobbies": build_hobbies,
    "work_experience": build_work_experience,
    "projects": build_projects,
    "education": build_education,
    "achievements": build_achievements,
    "area_of_interest": build_area_of_interest,
}
