"""CLI command: create-r3f-app migrate -- move tailwind classes to styled-components."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import click

from r3fapp.config import MigrationConfig
from r3fapp.engine.formatter import NullFormatter, PrettierFormatter
from r3fapp.engine.pipeline import migrate as run_migration
from r3fapp.errors import R3FAppError
from r3fapp.parser import ParseError
from r3fapp.utils import messages


@click.command()
@click.argument("project_root", type=click.Path(exists=True, file_okay=False))
@click.option("--no-format", is_flag=True, help="Skip prettier on written files")
@click.option(
    "--target",
    "targets",
    multiple=True,
    help="Base file name to migrate (repeatable; default: Layout, Instructions)",
)
@click.option("--global-sheet", default=None, help="Global style sheet, relative to the root")
def migrate(
    project_root: str, no_format: bool, targets: tuple[str, ...], global_sheet: str | None
) -> None:
    """Rewrite className usages in PROJECT_ROOT as styled-components."""
    root = Path(project_root).resolve()
    config = MigrationConfig()
    if targets:
        config = replace(config, target_names=targets)
    if global_sheet:
        config = replace(config, global_sheet=global_sheet)
    formatter = NullFormatter() if no_format else PrettierFormatter(root)

    try:
        result = run_migration(root, config, formatter=formatter)
    except (R3FAppError, ParseError) as exc:
        messages.error(f"Migration failed: {exc}")
        sys.exit(1)

    for path in result.rewritten:
        click.echo(f"  rewrote {path}")
    for path in result.style_files:
        click.echo(f"  wrote {path}")
    messages.success(
        f"Migrated {len(result.elements)} element(s) into {len(result.components)} component(s)"
    )
