"""
Dimension helpers.

Pure functions mapping (scaling factor, logical value) to final geometry.
Every builder, the page assembler and the preview renderer go through these
so that rendering at another scale rescales every placement proportionally.
"""

from typing import Union

Number = Union[int, float]

# Units understood by downstream renderers
SUPPORTED_UNITS = ("mm", "px", "pt")


def scaled(factor: Number, value: Number) -> float:
    """Scale a logical value: `factor * value`."""
    return float(factor) * float(value)


def css_length(factor: Number, value: Number, unit: str = "mm") -> str:
    """
    Scaled value with a unit suffix, e.g. css_length(2, 13.5) -> '27mm'.

    Raises:
        ValueError: If unit is not one of SUPPORTED_UNITS
    """
    if unit not in SUPPORTED_UNITS:
        raise ValueError(f"Unsupported unit '{unit}' (supported: {SUPPORTED_UNITS})")
    return f"{scaled(factor, value):g}{unit}"


def page_top(page_height: Number, page_count: int) -> float:
    """Top edge of page number `page_count` (1-indexed)."""
    return float(page_height) * (page_count - 1)


def page_bottom(page_height: Number, page_count: int) -> float:
    """Bottom edge of page number `page_count` (1-indexed)."""
    return float(page_height) * page_count
