#!/usr/bin/env python3
"""
Resume Layout CLI

Lays out a resume YAML into pages using the layout context and exports the
result for the external renderer.

Commands:
    layout  - Lay out a resume and export pages (JSON) and/or a wireframe preview (HTML)
    presets - List available layout presets

Examples:\n

    layout_resume.py layout resume.yaml                                # Summary only

    layout_resume.py layout resume.yaml -o pages.json                  # Export pages

    layout_resume.py layout resume.yaml -p page_letter -p margins_compact --preview out.html

    layout_resume.py presets margins                                   # Margin presets
"""

from pathlib import Path
from typing import List, Optional

import typer
from omegaconf import OmegaConf
from typing_extensions import Annotated

from folio.contexts.document import InvalidResumeStructureError, ResumeDocument
from folio.contexts.layout import (
    InvalidLayoutConfigError,
    MeasureError,
    layout_resume,
    load_layout_presets,
    resolve_layout_config,
)
from folio.contexts.layout.config import LAYOUT_PRESETS_PATH
from folio.contexts.layout.logger import setup_layout_logger
from folio.contexts.rendering import render_preview, write_pages_json
from folio.utils.logger import session_log_dir

app = typer.Typer(
    help="Lay out resumes into two-column pages and export them for rendering",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("layout")
def layout_command(
    yaml_path: Annotated[
        Path,
        typer.Argument(help="Resume YAML file"),
    ],
    presets: Annotated[
        Optional[List[str]],
        typer.Option(
            "--preset",
            "-p",
            help="Layout preset to apply (repeatable, later presets win)",
        ),
    ] = None,
    scale: Annotated[
        float,
        typer.Option(
            "--scale",
            "-s",
            help="Scaling factor applied to every output length",
            min=0.01,
        ),
    ] = 1.0,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Write pages as JSON to this path",
        ),
    ] = None,
    preview: Annotated[
        Optional[Path],
        typer.Option(
            "--preview",
            help="Write a wireframe HTML preview to this path",
        ),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--log-dir",
            help="Directory for the session log (default: $FOLIO_LOGS_PATH/layout_<timestamp>)",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Exit with code 1 when the layout has warnings",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show the per-section build trace and page breaks on the console",
        ),
    ] = False,
):
    """
    Lay out a resume YAML into pages.

    Examples:\n

        $ layout_resume.py layout resume.yaml -o pages.json

        $ layout_resume.py layout resume.yaml --scale 3.78 --preview preview.html

        $ layout_resume.py layout resume.yaml -p dividers_off --strict
    """
    if log_dir is None:
        log_dir = session_log_dir("layout")
    log_file = setup_layout_logger(log_dir, presets=", ".join(presets or []), verbose=verbose)

    typer.secho(f"\nLaying out: {yaml_path}", fg=typer.colors.BLUE, bold=True)
    if presets:
        typer.echo(f"Presets: {', '.join(presets)}")
    typer.echo("")

    try:
        document = ResumeDocument.from_yaml(yaml_path)
        config = resolve_layout_config(presets)
        result = layout_resume(document, config=config, scaling_factor=scale)
    except (FileNotFoundError, InvalidResumeStructureError, InvalidLayoutConfigError, MeasureError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.is_valid:
        typer.secho(f"✓ Layout fits in {result.page_count} page(s)", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"✗ Layout has {len(result.warnings)} warning(s) across {result.page_count} page(s)",
            fg=typer.colors.YELLOW,
            bold=True,
        )
        for warning in result.warnings[:10]:
            typer.echo(f"  - {warning}")
        if len(result.warnings) > 10:
            typer.echo(f"  ... and {len(result.warnings) - 10} more")

    typer.echo(f"  Placements: {result.total_placements}")
    if output:
        write_pages_json(result.pages, output, scaling_factor=scale, unit=config.unit)
        typer.echo(f"  Pages: {output}")
    if preview:
        render_preview(result, config, preview, title=yaml_path.stem)
        typer.echo(f"  Preview: {preview}")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    raise typer.Exit(code=1 if strict and not result.is_valid else 0)


@app.command("presets")
def presets_command(
    category: Annotated[
        Optional[str],
        typer.Argument(help="Category to filter (e.g., 'margins', 'page')"),
    ] = None,
):
    """
    List available layout presets.

    Examples:\n
        $ layout_resume.py presets            # All categories and presets

        $ layout_resume.py presets margins    # Only margin presets
    """
    nested = OmegaConf.to_container(OmegaConf.load(LAYOUT_PRESETS_PATH), resolve=True)

    if category:
        if category not in nested:
            typer.secho(
                f"Unknown category '{category}'. Available: {', '.join(nested.keys())}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1)
        flattened = load_layout_presets()
        for name in nested[category]:
            preset_name = f"{category}_{name}"
            typer.echo(f"{preset_name}: {flattened[preset_name]}")
    else:
        for cat, cat_presets in nested.items():
            typer.secho(cat, bold=True)
            for name in cat_presets:
                typer.echo(f"  {name}")


if __name__ == "__main__":
    app()
