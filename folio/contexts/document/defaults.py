"""
Default values for FOLIO resume documents.

Provides shared defaults used by:
- resume_data_structure.py (section titles, margins, column sequences)
- layout builders (resume-type specific behavior is keyed off these names)
"""

from typing import Dict, Tuple

# Sections that live in the sidebar, in default build order
LEFT_SECTIONS: Tuple[str, ...] = ("identity", "summary", "skills", "hobbies")

# Sections that live in the main column, in default build order
RIGHT_SECTIONS: Tuple[str, ...] = (
    "work_experience",
    "projects",
    "education",
    "achievements",
    "area_of_interest",
)

# Heading text used when a section omits its own title
DEFAULT_SECTION_TITLES: Dict[str, str] = {
    "summary": "PROFILE",
    "skills": "SKILLS",
    "hobbies": "HOBBIES",
    "work_experience": "WORK EXPERIENCE",
    "projects": "PROJECTS",
    "education": "EDUCATION",
    "achievements": "ACHIEVEMENTS",
    "area_of_interest": "AREA OF INTEREST",
}

# Spacing defaults in logical units (marginSec / marginBullet / marginPage)
DEFAULT_MARGIN_SEC = 2.0
DEFAULT_MARGIN_BULLET = 1.0
DEFAULT_MARGIN_PAGE = 5.0

# Maximum skill rating on the input scale
SKILL_RATING_SCALE = 5.0
