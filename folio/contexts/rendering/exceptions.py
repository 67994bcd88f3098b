"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import Optional


class PreviewRenderError(Exception):
    """
    Exception raised when the HTML preview cannot be rendered.

    Attributes:
        message: Error description
        template_path: Path to the preview template
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]
        if template_path:
            parts.append(f"Template: {template_path}")
        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))
