"""
Integration tests for the layout CLI.
Tests: CLI arguments -> layout run -> exported JSON / HTML files and exit codes.
"""

import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from scripts.layout_resume import app

FIXTURES_PATH = Path(__file__).resolve().parents[1] / "fixtures"

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # The CLI points loguru at the runner's captured stdout
    logger.remove()


@pytest.mark.integration
def test_layout_writes_pages_and_preview(tmp_path: Path):
    output = tmp_path / "pages.json"
    preview = tmp_path / "preview.html"

    result = runner.invoke(
        app,
        [
            "layout",
            str(FIXTURES_PATH / "pro_two_page.yaml"),
            "--output",
            str(output),
            "--preview",
            str(preview),
            "--scale",
            "2",
            "--log-dir",
            str(tmp_path / "logs"),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["scaling_factor"] == 2.0
    assert len(data["pages"]) == 2
    assert 'id="page-2"' in preview.read_text(encoding="utf-8")
    assert (tmp_path / "logs" / "layout.log").exists()


@pytest.mark.integration
def test_layout_with_presets(tmp_path: Path):
    output = tmp_path / "pages.json"
    result = runner.invoke(
        app,
        [
            "layout",
            str(FIXTURES_PATH / "fresher_one_page.yaml"),
            "-p",
            "page_letter",
            "-p",
            "dividers_off",
            "-o",
            str(output),
            "--log-dir",
            str(tmp_path / "logs"),
        ],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(output.read_text(encoding="utf-8"))
    kinds = {p["kind"] for page in data["pages"] for column in ("left", "right", "block") for p in page[column]}
    assert "vertical_rule" not in kinds


@pytest.mark.integration
def test_unknown_preset_fails(tmp_path: Path):
    result = runner.invoke(
        app,
        [
            "layout",
            str(FIXTURES_PATH / "fresher_one_page.yaml"),
            "-p",
            "page_tabloid",
            "--log-dir",
            str(tmp_path / "logs"),
        ],
    )
    assert result.exit_code == 1


@pytest.mark.integration
def test_invalid_document_fails(tmp_path: Path):
    result = runner.invoke(
        app,
        ["layout", str(FIXTURES_PATH / "invalid_column.yaml"), "--log-dir", str(tmp_path / "logs")],
    )
    assert result.exit_code == 1


@pytest.mark.integration
def test_strict_fails_on_warnings(tmp_path: Path):
    yaml_path = tmp_path / "crowded.yaml"
    skills = "\n".join(f"      - name: Skill {i}\n        rating: 3" for i in range(20))
    yaml_path.write_text(f"document:\n  skills:\n    entries:\n{skills}\n", encoding="utf-8")

    args = ["layout", str(yaml_path), "--log-dir", str(tmp_path / "logs")]
    assert runner.invoke(app, args).exit_code == 0
    assert runner.invoke(app, args + ["--strict"]).exit_code == 1


@pytest.mark.integration
def test_presets_lists_categories():
    result = runner.invoke(app, ["presets"])
    assert result.exit_code == 0
    assert "margins" in result.output
    assert "compact" in result.output


@pytest.mark.integration
def test_presets_category_filter():
    result = runner.invoke(app, ["presets", "page"])
    assert result.exit_code == 0
    assert "page_letter" in result.output

    result = runner.invoke(app, ["presets", "fonts"])
    assert result.exit_code == 1


@pytest.mark.integration
def test_verbose_echoes_build_trace(tmp_path: Path):
    args = ["layout", str(FIXTURES_PATH / "pro_two_page.yaml"), "--log-dir", str(tmp_path / "logs")]

    quiet = runner.invoke(app, args)
    verbose = runner.invoke(app, args + ["--verbose"])

    assert quiet.exit_code == verbose.exit_code == 0
    assert "Page break before" not in quiet.output
    assert "Page break before" in verbose.output


@pytest.mark.integration
def test_non_numeric_margin_fails_cleanly(tmp_path: Path):
    yaml_path = tmp_path / "bad_margins.yaml"
    yaml_path.write_text("document:\n  layout:\n    margins:\n      margin_sec: wide\n", encoding="utf-8")

    result = runner.invoke(app, ["layout", str(yaml_path), "--log-dir", str(tmp_path / "logs")])

    # Reported through typer.Exit, not a traceback
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "margin_sec" in result.output
