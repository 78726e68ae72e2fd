"""Subprocess execution for the external collaborators (git, npm, npx)."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from r3fapp.errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""

    args: tuple[str, ...]
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0


class CommandRunner:
    """Runs commands to completion with ``subprocess.run``.

    No timeout is applied; a non-zero exit or a missing executable is raised
    as :class:`CommandError`.
    """

    def __init__(self, cwd: str | Path | None = None) -> None:
        self._cwd = Path(cwd) if cwd is not None else None

    def run(
        self,
        args: list[str],
        cwd: str | Path | None = None,
        input: str | None = None,
        capture: bool = True,
    ) -> CommandResult:
        workdir = Path(cwd) if cwd is not None else self._cwd
        logger.debug("exec: %s (cwd=%s)", " ".join(args), workdir or ".")
        try:
            proc = subprocess.run(
                args,
                cwd=workdir,
                input=input,
                capture_output=capture,
                text=True,
                encoding="utf-8",
            )
        except FileNotFoundError as exc:
            raise CommandError(
                f"Command not found: {args[0]}", command=args, cause=exc
            ) from exc

        stdout = proc.stdout or ""
        stderr = proc.stderr or ""
        if proc.returncode != 0:
            raise CommandError(
                f"{' '.join(args)} exited with status {proc.returncode}",
                command=args,
                returncode=proc.returncode,
                stderr=stderr,
            )
        return CommandResult(args=tuple(args), stdout=stdout, stderr=stderr, exit_code=0)

    def exists(self, executable: str) -> bool:
        """Return True if *executable* can be started (``<exe> --version`` succeeds)."""
        try:
            self.run([executable, "--version"])
        except CommandError:
            return False
        return True
