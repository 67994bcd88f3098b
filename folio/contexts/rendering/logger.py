"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"


# Wrapper functions with automatic [render] prefix


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export(output_path: Path, page_count: int) -> None:
    _log_success(f"Wrote {page_count} page(s) to {output_path}")


def log_preview(output_path: Path, page_count: int, scaling_factor: float) -> None:
    """Log a written preview file."""
    _log_success(f"Wrote preview of {page_count} page(s) to {output_path}")
    _log_debug(f"  Scale: {scaling_factor:g}")


def log_template_loaded(template_name: str) -> None:
    _log_debug(f"Loaded preview template '{template_name}'")
