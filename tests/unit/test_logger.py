"""Unit tests for session logging setup."""

from pathlib import Path

import pytest
from loguru import logger

import folio
from folio.contexts.layout.logger import log_page_break
from folio.utils.logger import session_log_dir, setup_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


@pytest.mark.unit
def test_session_log_dir_is_timestamped(tmp_path: Path):
    log_dir = session_log_dir("layout", base=tmp_path)

    assert log_dir.parent == tmp_path
    assert log_dir.name.startswith("layout_")
    assert len(log_dir.name) == len("layout_20261019_101500")


@pytest.mark.unit
def test_setup_logger_writes_provenance_and_debug(tmp_path: Path):
    log_file = setup_logger("layout", tmp_path / "run", extra_provenance={"Presets": "page_letter"})
    log_page_break("projects-0", 2, "block")
    logger.remove()

    assert log_file == tmp_path / "run" / "layout.log"
    text = log_file.read_text(encoding="utf-8")
    assert "Session: layout" in text
    assert f"folio: {folio.__version__}" in text
    assert "Presets: page_letter" in text
    assert "[layout]   Page break before 'projects-0'" in text
