"""Source formatters applied to every file the migration writes."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from r3fapp.errors import CommandError, FormatError
from r3fapp.utils.process import CommandRunner


class Formatter(Protocol):
    def format(self, source: str, filepath: str) -> str: ...


class NullFormatter:
    """Leaves text untouched."""

    def format(self, source: str, filepath: str) -> str:
        return source


class PrettierFormatter:
    """Pipe text through the project's prettier.

    ``--stdin-filepath`` lets prettier pick the parser from the extension and
    resolve the project's ``.prettierrc``.
    """

    def __init__(self, project_root: Path, runner: CommandRunner | None = None) -> None:
        self._root = Path(project_root)
        self._runner = runner or CommandRunner()

    def format(self, source: str, filepath: str) -> str:
        try:
            result = self._runner.run(
                ["npx", "prettier", "--stdin-filepath", filepath],
                cwd=self._root,
                input=source,
            )
        except CommandError as exc:
            detail = exc.stderr.strip() or str(exc)
            raise FormatError(f"prettier failed on {filepath}: {detail}", cause=exc) from exc
        return result.stdout
