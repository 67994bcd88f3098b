"""
Layout context logger.

Provides logging interface for the layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(log_dir: Path, presets: Optional[str] = None, verbose: bool = False) -> Path:
    """
    Setup logger for layout context.

    Args:
        log_dir: Directory for this layout session
        presets: Applied preset names, recorded in the provenance header
        verbose: Echo the DEBUG build trace to the console as well

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance={"Presets": presets or "(none)"},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout-specific logging helpers


def log_layout_start(document_name: str, resume_type: str, scaling_factor: float) -> None:
    """Log start of a layout run."""
    _log_info(f"Laying out {document_name} ({resume_type}, scale {scaling_factor:g})")


def log_section_skipped(section_name: str, reason: str) -> None:
    _log_debug(f"  Skipped {section_name}: {reason}")


def log_section_built(section_name: str, placements_added: int, state) -> None:
    """Log the running column heights after a builder call."""
    _log_debug(
        f"  {section_name}: +{placements_added} placements "
        f"(left {state.left_height:g}, right {state.right_height:g}, "
        f"pages L{state.left_page_count}/R{state.right_page_count})"
    )


def log_page_break(placement_id: str, page_count: int, destination: str) -> None:
    _log_debug(f"  Page break before '{placement_id}': main column now on page {page_count} ({destination})")


def log_layout_result(document_name: str, result) -> None:
    """
    Log a layout result summary and its warnings.

    Args:
        document_name: Document identifier
        result: LayoutResult from layout_resume()
    """
    summary = f"{document_name}: {result.page_count} page(s), {result.total_placements} placements"
    warnings = result.warnings
    if not warnings:
        _log_success(summary)
        return

    _log_info(f"{summary}, {len(warnings)} warning(s)")
    for warning in warnings:
        _log_warning(f"  {warning}")
