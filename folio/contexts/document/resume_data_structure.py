"""
Resume Document Structure

Defines the structured representation of resume content consumed by the
Layout context. A ResumeDocument is an ordered set of optional sections plus
the three spacing parameters the layout engine threads through every builder.

Document owns:
- Loading YAML files (or plain dicts) into ResumeDocument instances
- Validating section shapes and column sequencing

Layout operates on ResumeDocument instances and never mutates them.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from omegaconf import OmegaConf

from folio.contexts.document.defaults import (
    DEFAULT_MARGIN_BULLET,
    DEFAULT_MARGIN_PAGE,
    DEFAULT_MARGIN_SEC,
    DEFAULT_SECTION_TITLES,
    LEFT_SECTIONS,
    RIGHT_SECTIONS,
    SKILL_RATING_SCALE,
)
from folio.contexts.document.exceptions import InvalidResumeStructureError


class ResumeType(str, Enum):
    """Resume variant. Changes section content, never pagination."""

    FRESHER = "fresher"
    PRO = "pro"
    EXPERT = "expert"

    @property
    def is_professional(self) -> bool:
        return self is not ResumeType.FRESHER


@dataclass(frozen=True)
class Margins:
    """
    Spacing parameters in logical units.

    Attributes:
        margin_sec: Space before a heading or section entry
        margin_bullet: Space before a list item
        margin_page: Offset applied at the top of a page after a forced break
    """

    margin_sec: float = DEFAULT_MARGIN_SEC
    margin_bullet: float = DEFAULT_MARGIN_BULLET
    margin_page: float = DEFAULT_MARGIN_PAGE

    def __post_init__(self) -> None:
        for name in ("margin_sec", "margin_bullet", "margin_page"):
            if getattr(self, name) < 0:
                raise InvalidResumeStructureError(
                    f"{name} must be non-negative: {getattr(self, name)}",
                    key_path=f"document.layout.margins.{name}",
                )


@dataclass(frozen=True)
class ContactLine:
    """One sidebar contact line (phone, email, address, visa...)."""

    label: str
    value: str


@dataclass(frozen=True)
class Identity:
    """Photo, name, designation and contact lines shown at the top of the sidebar."""

    name: str
    designation: str = ""
    photo: Optional[str] = None
    contacts: Tuple[ContactLine, ...] = ()


@dataclass(frozen=True)
class Skill:
    name: str
    rating: float = 0.0

    @property
    def rating_percent(self) -> float:
        """Rating on a 0-100 scale, capped at 100."""
        return min(self.rating / SKILL_RATING_SCALE * 100.0, 100.0)


@dataclass(frozen=True)
class WorkEntry:
    """
    Work experience or training entry.

    Fresher resumes use `type` and `description`; pro/expert resumes use
    `designation` and one line per responsibility in `roles`.
    """

    org: str
    start_date: str = ""
    end_date: str = ""
    type: str = ""
    designation: str = ""
    description: str = ""
    roles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectEntry:
    title: str
    description: str = ""


@dataclass(frozen=True)
class EducationEntry:
    degree: str
    college: str = ""
    year: str = ""
    cgpa: str = ""


@dataclass(frozen=True)
class AreaEntry:
    """An area-of-interest slot (e.g. key 'area1' with topic 'Machine Learning')."""

    key: str
    topic: str


@dataclass
class Section:
    """
    A titled list of entries.

    Attributes:
        title: Display title used for the heading placement
        entries: Entries in display order (strings or entry records)
    """

    title: str
    entries: List[Any] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.entries) == 0


# =============================================================================
# Entry parsing
# =============================================================================


def _require_mapping(value: Any, key_path: str, source: Optional[Path]) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise InvalidResumeStructureError(
            f"Expected a mapping, got {type(value).__name__}", source=source, key_path=key_path
        )
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_text_entry(raw: Any, key_path: str, source: Optional[Path]) -> str:
    if isinstance(raw, dict):
        raise InvalidResumeStructureError(
            "Expected a text entry, got a mapping", source=source, key_path=key_path
        )
    return _text(raw)


def _parse_skill(raw: Any, key_path: str, source: Optional[Path]) -> Skill:
    data = _require_mapping(raw, key_path, source)
    try:
        rating = float(data.get("rating") or 0)
    except (TypeError, ValueError) as e:
        raise InvalidResumeStructureError(
            f"Skill rating is not a number: {data.get('rating')!r}",
            source=source,
            key_path=f"{key_path}.rating",
        ) from e
    return Skill(name=_text(data.get("name")), rating=rating)


def _parse_work(raw: Any, key_path: str, source: Optional[Path]) -> WorkEntry:
    data = _require_mapping(raw, key_path, source)
    roles = data.get("roles") or []
    if not isinstance(roles, list):
        raise InvalidResumeStructureError(
            "Work roles must be a list", source=source, key_path=f"{key_path}.roles"
        )
    return WorkEntry(
        org=_text(data.get("org")),
        start_date=_text(data.get("start_date")),
        end_date=_text(data.get("end_date")),
        type=_text(data.get("type")),
        designation=_text(data.get("designation")),
        description=_text(data.get("description")),
        roles=tuple(_text(r) for r in roles),
    )


def _parse_project(raw: Any, key_path: str, source: Optional[Path]) -> ProjectEntry:
    data = _require_mapping(raw, key_path, source)
    return ProjectEntry(title=_text(data.get("title")), description=_text(data.get("description")))


def _parse_education(raw: Any, key_path: str, source: Optional[Path]) -> EducationEntry:
    data = _require_mapping(raw, key_path, source)
    return EducationEntry(
        degree=_text(data.get("degree")),
        college=_text(data.get("college")),
        year=_text(data.get("year")),
        cgpa=_text(data.get("cgpa")),
    )


def _parse_area(raw: Any, key_path: str, source: Optional[Path]) -> AreaEntry:
    data = _require_mapping(raw, key_path, source)
    return AreaEntry(key=_text(data.get("key")), topic=_text(data.get("topic")))


EntryParser = Callable[[Any, str, Optional[Path]], Any]

ENTRY_PARSERS: Dict[str, EntryParser] = {
    "summary": _parse_text_entry,
    "skills": _parse_skill,
    "hobbies": _parse_text_entry,
    "work_experience": _parse_work,
    "projects": _parse_project,
    "education": _parse_education,
    "achievements": _parse_text_entry,
    "area_of_interest": _parse_area,
}


def _parse_section(name: str, raw: Any, source: Optional[Path]) -> Optional[Section]:
    if raw is None:
        return None

    key_path = f"document.{name}"
    data = _require_mapping(raw, key_path, source)
    entries_raw = data.get("entries") or []
    if not isinstance(entries_raw, list):
        raise InvalidResumeStructureError(
            "Section entries must be a list", source=source, key_path=f"{key_path}.entries"
        )

    parser = ENTRY_PARSERS[name]
    entries = [
        parser(entry, f"{key_path}.entries[{i}]", source) for i, entry in enumerate(entries_raw)
    ]
    title = data.get("title") or DEFAULT_SECTION_TITLES[name]
    return Section(title=_text(title), entries=entries)


def _parse_identity(raw: Any, source: Optional[Path]) -> Optional[Identity]:
    if raw is None:
        return None

    data = _require_mapping(raw, "document.identity", source)
    contacts_raw = data.get("contacts") or []
    if not isinstance(contacts_raw, list):
        raise InvalidResumeStructureError(
            "Identity contacts must be a list", source=source, key_path="document.identity.contacts"
        )

    contacts = []
    for i, contact in enumerate(contacts_raw):
        contact = _require_mapping(contact, f"document.identity.contacts[{i}]", source)
        contacts.append(ContactLine(label=_text(contact.get("label")), value=_text(contact.get("value"))))

    photo = data.get("photo")
    return Identity(
        name=_text(data.get("name")),
        designation=_text(data.get("designation")),
        photo=None if photo in (None, "") else str(photo),
        contacts=tuple(contacts),
    )


def _parse_sequence(
    raw: Any, allowed: Tuple[str, ...], column: str, source: Optional[Path]
) -> Tuple[str, ...]:
    if raw is None:
        return allowed
    if not isinstance(raw, list):
        raise InvalidResumeStructureError(
            "Column sequence must be a list", source=source, key_path=f"document.layout.{column}"
        )
    for name in raw:
        if name not in allowed:
            raise InvalidResumeStructureError(
                f"Section '{name}' cannot be placed in the {column} column (allowed: {list(allowed)})",
                source=source,
                key_path=f"document.layout.{column}",
            )
    duplicates = sorted({name for name in raw if raw.count(name) > 1})
    if duplicates:
        raise InvalidResumeStructureError(
            f"Sections listed more than once in the {column} column: {duplicates}",
            source=source,
            key_path=f"document.layout.{column}",
        )
    return tuple(raw)


# =============================================================================
# ResumeDocument
# =============================================================================


@dataclass
class ResumeDocument:
    """
    Structured representation of a complete resume.

    Every section is optional; an absent or empty section produces no
    placements. Section order within a column follows `left_sequence` and
    `right_sequence`; identity is always first in the sidebar.

    Attributes:
        resume_type: Variant controlling builder content (fresher/pro/expert)
        identity: Photo, name, designation and contact lines
        summary: Profile text (one entry for fresher, one per point otherwise)
        skills: Skill entries with ratings
        work_experience: Work or training entries
        projects: Project entries
        education: Education entries
        hobbies: Hobby strings
        achievements: Achievement strings
        area_of_interest: Area entries
        margins: Spacing parameters
        display: Per-section visibility toggles (missing keys mean visible)
        left_sequence: Sidebar build order
        right_sequence: Main column build order
        source_path: File the document was loaded from, if any
    """

    resume_type: ResumeType = ResumeType.FRESHER
    identity: Optional[Identity] = None
    summary: Optional[Section] = None
    skills: Optional[Section] = None
    work_experience: Optional[Section] = None
    projects: Optional[Section] = None
    education: Optional[Section] = None
    hobbies: Optional[Section] = None
    achievements: Optional[Section] = None
    area_of_interest: Optional[Section] = None
    margins: Margins = field(default_factory=Margins)
    display: Dict[str, bool] = field(default_factory=dict)
    left_sequence: Tuple[str, ...] = LEFT_SECTIONS
    right_sequence: Tuple[str, ...] = RIGHT_SECTIONS
    source_path: Optional[str] = None

    def section(self, name: str) -> Optional[Section]:
        """Look up a titled section by name ('skills', 'projects', ...)."""
        if name not in DEFAULT_SECTION_TITLES:
            raise KeyError(f"Unknown section: {name}")
        return getattr(self, name)

    def is_displayed(self, name: str) -> bool:
        return bool(self.display.get(name, True))

    @property
    def left_build_order(self) -> Tuple[str, ...]:
        """Sidebar sections in build order, identity pinned first."""
        rest = tuple(name for name in self.left_sequence if name != "identity")
        return ("identity",) + rest

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> "ResumeDocument":
        """
        Build a ResumeDocument from a plain dict.

        Args:
            data: Mapping with a top-level 'document' key
            source: File the mapping came from (used in error messages)

        Returns:
            ResumeDocument instance

        Raises:
            InvalidResumeStructureError: If the mapping does not match the schema
        """
        if not isinstance(data, dict) or "document" not in data:
            raise InvalidResumeStructureError("Missing 'document' key at root level", source=source)

        doc = _require_mapping(data["document"], "document", source)

        raw_type = doc.get("resume_type", ResumeType.FRESHER.value)
        try:
            resume_type = ResumeType(raw_type)
        except ValueError as e:
            valid = [t.value for t in ResumeType]
            raise InvalidResumeStructureError(
                f"Unknown resume type '{raw_type}' (valid: {valid})",
                source=source,
                key_path="document.resume_type",
            ) from e

        layout = _require_mapping(doc.get("layout") or {}, "document.layout", source)
        margins_raw = _require_mapping(layout.get("margins") or {}, "document.layout.margins", source)
        unknown = set(margins_raw) - {"margin_sec", "margin_bullet", "margin_page"}
        if unknown:
            raise InvalidResumeStructureError(
                f"Unknown margin keys: {sorted(unknown)}",
                source=source,
                key_path="document.layout.margins",
            )
        margin_values = {}
        for key, value in margins_raw.items():
            try:
                margin_values[key] = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidResumeStructureError(
                    f"Margin is not a number: {value!r}",
                    source=source,
                    key_path=f"document.layout.margins.{key}",
                ) from e
        margins = Margins(**margin_values)

        display = _require_mapping(layout.get("display") or {}, "document.layout.display", source)

        sections = {name: _parse_section(name, doc.get(name), source) for name in ENTRY_PARSERS}

        return cls(
            resume_type=resume_type,
            identity=_parse_identity(doc.get("identity"), source),
            margins=margins,
            display={str(key): bool(value) for key, value in display.items()},
            left_sequence=_parse_sequence(layout.get("left"), LEFT_SECTIONS, "left", source),
            right_sequence=_parse_sequence(layout.get("right"), RIGHT_SECTIONS, "right", source),
            source_path=str(source) if source else None,
            **sections,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "ResumeDocument":
        """
        Load a ResumeDocument from a YAML file.

        Raises:
            FileNotFoundError: If yaml_path does not exist
            InvalidResumeStructureError: If the YAML does not match the schema
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        yaml_dict = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        return cls.from_dict(yaml_dict, source=yaml_path)
