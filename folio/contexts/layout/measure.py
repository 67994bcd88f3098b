"""
Placement measurement.

Builders never guess heights: every placement height comes from a
`measure(kind, props) -> height` callback. The default measurer combines
a per-kind height table with a text-wrap estimate for text-bearing kinds.

The text estimate uses fixed font metrics (character width 0.6 x font size,
line height 1.2 x font size) and ignores HTML tags when counting characters.
It is an approximation; callers needing exact metrics pass their own measure.
"""

import math
import re
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping

from folio.contexts.layout.placement import Column, PlacementKind

Measure = Callable[[PlacementKind, Mapping[str, Any]], float]

CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.2
DEFAULT_FONT_SIZE = 3.2

TAG_PATTERN = re.compile(r"<[^>]+>")

# Heights for kinds that do not depend on their text
FIXED_HEIGHTS: Dict[PlacementKind, float] = {
    PlacementKind.USER_PHOTO: 53,
    PlacementKind.USER_NAME: 13,
    PlacementKind.USER_DESIGNATION: 9,
    PlacementKind.LEFT_HEADING: 9,
    PlacementKind.SKILL: 15,
    PlacementKind.HOBBY: 5,
    PlacementKind.SECTION_LOGO: 13,
    PlacementKind.SECTION_HEADING: 13,
    PlacementKind.AREA: 10,
    PlacementKind.VERTICAL_RULE: 0,
}

CONTACT_MIN_HEIGHT = 7
WORK_HEIGHT_FRESHER = 12
WORK_HEIGHT_PROFESSIONAL = 14
EDUCATION_HEIGHT_FRESHER = 12
EDUCATION_HEIGHT_PROFESSIONAL = 20
EDUCATION_HEIGHT_BLOCK = 10


def plain_length(text: str) -> int:
    """Character count with HTML tags removed."""
    return len(TAG_PATTERN.sub("", text or "").strip())


@lru_cache(maxsize=4096)
def text_height(text: str, width: float, font_size: float = DEFAULT_FONT_SIZE) -> float:
    """
    Estimated height of `text` wrapped to `width`, rounded up.

    Returns 0 for empty text.
    """
    length = plain_length(text)
    if length == 0:
        return 0.0
    line_width = length * CHAR_WIDTH_RATIO * font_size
    lines = max(1, math.ceil(line_width / width))
    return float(math.ceil(lines * LINE_HEIGHT_RATIO * font_size))


class DefaultMeasure:
    """
    Default measure callback.

    Reads `width`, `column` and `resume_type` from the props the builders
    attach to every placement.

    Example:
        >>> measure = DefaultMeasure()
        >>> measure(PlacementKind.SKILL, {})
        15.0
    """

    def __init__(self, font_size: float = DEFAULT_FONT_SIZE):
        self.font_size = font_size

    def _text(self, props: Mapping[str, Any], key: str = "text") -> float:
        return text_height(str(props.get(key) or ""), float(props["width"]), self.font_size)

    def __call__(self, kind: PlacementKind, props: Mapping[str, Any]) -> float:
        if kind in FIXED_HEIGHTS:
            return float(FIXED_HEIGHTS[kind])

        professional = props.get("resume_type", "fresher") != "fresher"

        if kind is PlacementKind.CONTACT_INFO:
            return max(float(CONTACT_MIN_HEIGHT), self._text(props, "value"))

        if kind in (PlacementKind.SUMMARY_TEXT, PlacementKind.ROLE_BULLET, PlacementKind.ACHIEVEMENT):
            return self._text(props)

        if kind is PlacementKind.WORK_EXPERIENCE:
            if professional:
                return float(WORK_HEIGHT_PROFESSIONAL)
            return WORK_HEIGHT_FRESHER + self._text(props, "description")

        if kind is PlacementKind.PROJECT:
            height = self._text(props, "title") + self._text(props, "description")
            return height if professional else height + 1

        if kind is PlacementKind.EDUCATION:
            if props.get("column") == Column.BLOCK.value:
                return float(EDUCATION_HEIGHT_BLOCK)
            return float(EDUCATION_HEIGHT_PROFESSIONAL if professional else EDUCATION_HEIGHT_FRESHER)

        raise KeyError(f"No height rule for placement kind '{kind.value}'")
