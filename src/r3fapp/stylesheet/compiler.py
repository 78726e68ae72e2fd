"""Style compilers: turn a utility-class style sheet source into final CSS."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from r3fapp.errors import CommandError, CompileError
from r3fapp.utils.process import CommandRunner


class StyleCompiler(Protocol):
    """Anything that can materialize CSS from a style sheet source."""

    def compile(self, source: str, project_root: Path) -> str: ...


class TailwindCompiler:
    """Compile with the project's own tailwindcss via ``npx``.

    The source is written to a scratch file inside the project root so the
    config's relative ``content`` globs resolve the same way the project's
    build does. Output goes to stdout.
    """

    def __init__(
        self,
        config_file: str = "tailwind.config.js",
        runner: CommandRunner | None = None,
    ) -> None:
        self._config_file = config_file
        self._runner = runner or CommandRunner()

    def compile(self, source: str, project_root: Path) -> str:
        fd, scratch = tempfile.mkstemp(suffix=".css", prefix=".r3f-", dir=project_root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(source)
            result = self._runner.run(
                ["npx", "tailwindcss", "-c", self._config_file, "-i", scratch],
                cwd=project_root,
            )
        except CommandError as exc:
            detail = exc.stderr.strip() or str(exc)
            raise CompileError(f"tailwindcss failed: {detail}", cause=exc) from exc
        finally:
            Path(scratch).unlink(missing_ok=True)
        return result.stdout
