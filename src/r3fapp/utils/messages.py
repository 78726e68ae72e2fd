"""Console output helpers."""

from __future__ import annotations

import click


def cmd(text: str) -> str:
    return click.style(text, fg="cyan")


def info(message: str) -> None:
    click.echo(click.style("> ", fg="blue") + message)


def success(message: str) -> None:
    click.echo(click.style("✔ ", fg="green") + message)


def warn(message: str) -> None:
    click.echo(click.style("! ", fg="yellow") + message, err=True)


def error(message: str) -> None:
    click.echo(click.style("✖ ", fg="red") + message, err=True)


def start(project_name: str, app_type: str) -> None:
    click.echo()
    success(f"Created {click.style(project_name, bold=True)} ({app_type})")
    click.echo("Get started with:")
    click.echo(f"  {cmd(f'cd {project_name}')}")
    click.echo(f"  {cmd('npm run dev')}")
    click.echo()
