"""
Session logging for folio scripts.

Each script run gets its own directory under FOLIO_LOGS_PATH holding one
`<context>.log` file with a provenance header, while INFO and above is
echoed to the console. Library code only logs through the context wrappers
in contexts/{context}/logger.py and never configures sinks itself.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import folio

load_dotenv()

LOGS_PATH = Path(os.getenv("FOLIO_LOGS_PATH", "outs/logs"))

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"

# Console colors per level, applied on top of loguru's own
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(command: str, base: Optional[Path] = None) -> Path:
    """
    Timestamped directory for one script run, e.g. outs/logs/layout_20261019_101500.

    Args:
        command: Script command name used as the directory prefix
        base: Parent directory (defaults to FOLIO_LOGS_PATH or outs/logs)
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return (base or LOGS_PATH) / f"{command}_{stamp}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    console_level: str = "INFO",
    level_colors: Optional[Dict[str, str]] = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    The file sink records everything from DEBUG up, including the per-section
    build trace and page breaks; the console only shows `console_level` and
    above.

    Args:
        context_name: Context identifier; names the log file ("layout" -> layout.log)
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stdout
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="layout",
            log_dir=session_log_dir("layout"),
            extra_provenance={"Presets": "margins_compact"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Write the run header: what was run, from where, and with which folio.

    Args:
        context_name: Context the session belongs to
        extra_context: Additional key-value pairs to log
    """
    header = {
        "Session": context_name,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "folio": folio.__version__,
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }

    logger.info("=" * 80)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
