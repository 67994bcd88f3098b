"""
Document Context

Responsibilities:
- Represents resume content as typed sections (identity, summary, skills, ...)
- Loads resume content and layout margins from YAML or plain dicts
- Validates input structure before it reaches the layout engine

Owns: Resume content model, section ordering and display toggles
Never: Computes geometry or page breaks
"""

from folio.contexts.document.exceptions import InvalidResumeStructureError
from folio.contexts.document.resume_data_structure import (
    AreaEntry,
    ContactLine,
    EducationEntry,
    Identity,
    Margins,
    ProjectEntry,
    ResumeDocument,
    ResumeType,
    Section,
    Skill,
    WorkEntry,
)

__all__ = [
    "InvalidResumeStructureError",
    "AreaEntry",
    "ContactLine",
    "EducationEntry",
    "Identity",
    "Margins",
    "ProjectEntry",
    "ResumeDocument",
    "ResumeType",
    "Section",
    "Skill",
    "WorkEntry",
]
