"""Custom exceptions for the document context."""

from pathlib import Path
from typing import Optional


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when resume input does not match the document schema.

    Attributes:
        message: Error description
        source: File the content was loaded from, if any
        key_path: Dotted path to the offending key (e.g., 'document.skills.entries')
    """

    def __init__(
        self,
        message: str,
        source: Optional[Path] = None,
        key_path: Optional[str] = None,
    ):
        self.message = message
        self.source = source
        self.key_path = key_path

        parts = [message]
        if key_path:
            parts.append(f"Key: {key_path}")
        if source:
            parts.append(f"Source: {source}")

        super().__init__("\n".join(parts))
