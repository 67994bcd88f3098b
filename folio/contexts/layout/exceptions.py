"""Custom exceptions for the layout context."""

from typing import Optional


class LayoutError(Exception):
    """Base class for failures that abort a layout run."""


class MeasureError(LayoutError):
    """
    Exception raised when measuring a placement fails.

    A failing measurement aborts the whole render: a partially built
    LayoutState cannot be assembled into pages.

    Attributes:
        message: Error description
        kind: Placement kind being measured
        placement_id: Id of the placement being measured
        original_error: The exception raised by the measure callback, if any
    """

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
        placement_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.kind = kind
        self.placement_id = placement_id
        self.original_error = original_error

        parts = [message]
        if kind or placement_id:
            parts.append(f"Placement: {placement_id} ({kind})")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class InvalidLayoutConfigError(ValueError):
    """
    Exception raised when layout configuration is invalid or a preset is unknown.
    """

    pass
