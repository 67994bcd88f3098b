"""
Placement records for the layout engine.

A Placement is one positioned content unit. Its `kind` is a closed
enumeration; mapping kinds to drawing code is the job of the downstream
renderer, so the engine never holds renderer references.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Tuple

from folio.contexts.layout.dimensions import scaled


class PlacementKind(str, Enum):
    """Every kind of renderable unit the builders emit."""

    # Sidebar
    USER_PHOTO = "user_photo"
    USER_NAME = "user_name"
    USER_DESIGNATION = "user_designation"
    LEFT_HEADING = "left_heading"
    CONTACT_INFO = "contact_info"
    SUMMARY_TEXT = "summary_text"
    SKILL = "skill"
    HOBBY = "hobby"

    # Main column / full-width block
    SECTION_LOGO = "section_logo"
    SECTION_HEADING = "section_heading"
    WORK_EXPERIENCE = "work_experience"
    ROLE_BULLET = "role_bullet"
    PROJECT = "project"
    EDUCATION = "education"
    ACHIEVEMENT = "achievement"
    AREA = "area"
    VERTICAL_RULE = "vertical_rule"


class Column(str, Enum):
    """The three placement buffers."""

    LEFT = "left"
    RIGHT = "right"
    BLOCK = "block"


# Props carrying geometry that must rescale with top/height
GEOMETRY_PROPS = ("left", "width")


@dataclass(frozen=True)
class Placement:
    """
    One positioned content unit (immutable).

    Attributes:
        kind: What to draw
        id: Stable identifier, unique within a section
        top: Offset from the top of the document in logical units
        height: Vertical extent in logical units
        props: Kind-specific data for the renderer
        diagnostics: Issues detected while placing this unit (e.g. oversized)

    Example:
        >>> p = Placement(PlacementKind.SKILL, "skill-0", top=40, height=15)
        >>> p.bottom
        55
    """

    kind: PlacementKind
    id: str
    top: float
    height: float
    props: Mapping[str, Any] = field(default_factory=dict)
    diagnostics: Tuple[str, ...] = ()

    @property
    def bottom(self) -> float:
        """Bottom edge (top + height)."""
        return self.top + self.height

    def page_index(self, page_height: float) -> int:
        """Zero-based page this placement starts on."""
        return int(self.top // page_height)

    def with_diagnostics(self, messages: Iterable[str]) -> "Placement":
        return replace(self, diagnostics=self.diagnostics + tuple(messages))

    def scaled(self, factor: float) -> "Placement":
        """Copy with top, height and geometric props multiplied by `factor`."""
        props: Dict[str, Any] = dict(self.props)
        for key in GEOMETRY_PROPS:
            if isinstance(props.get(key), (int, float)) and not isinstance(props[key], bool):
                props[key] = scaled(factor, props[key])
        return replace(
            self,
            top=scaled(factor, self.top),
            height=scaled(factor, self.height),
            props=props,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "top": self.top,
            "height": self.height,
            "props": dict(self.props),
            "diagnostics": list(self.diagnostics),
        }
