"""CLI command: create-r3f-app create -- scaffold a new project."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from r3fapp import __version__
from r3fapp.config import ScaffoldConfig
from r3fapp.errors import R3FAppError
from r3fapp.parser import ParseError
from r3fapp.stacks import APP_TYPES, STYLES
from r3fapp.utils import messages
from r3fapp.utils.update import UpdateStatus, check_for_update


def _report_update(config: ScaffoldConfig) -> None:
    status, latest = check_for_update(__version__, config.pypi_url, timeout=config.update_timeout)
    if status is UpdateStatus.OUTDATED:
        messages.warn(
            f"New update available ({latest}), run {messages.cmd('pip install -U create-r3f-app')}"
        )
    elif status is UpdateStatus.AHEAD:
        messages.warn("The version of create-r3f-app is ahead of the published one")


@click.command()
@click.argument("app_type", type=click.Choice(sorted(APP_TYPES)))
@click.argument("project_name")
@click.option(
    "--style",
    type=click.Choice(STYLES),
    default="tailwind",
    show_default=True,
    help="Styling system for the generated project",
)
@click.option("--typescript", is_flag=True, help="Convert the project to TypeScript")
@click.option("--branch", default=None, help="Starter branch to clone")
@click.option("--skip-update-check", is_flag=True, help="Do not query PyPI for a newer release")
def create(
    app_type: str,
    project_name: str,
    style: str,
    typescript: bool,
    branch: str | None,
    skip_update_check: bool,
) -> None:
    """Create PROJECT_NAME from the APP_TYPE starter."""
    click.echo(click.style("Welcome. Project generation started using create-r3f-app", bold=True))
    config = ScaffoldConfig()

    if not skip_update_check:
        _report_update(config)

    if Path(project_name).exists():
        messages.error(f"The folder {messages.cmd(project_name)} already exists")
        sys.exit(1)

    try:
        APP_TYPES[app_type](
            project_name,
            style=style,
            typescript=typescript,
            branch=branch,
            config=config,
        )
    except (R3FAppError, ParseError) as exc:
        messages.error(str(exc))
        sys.exit(1)
