"""Error hierarchy for create-r3f-app."""
from __future__ import annotations


class R3FAppError(Exception):
    """Base error for all r3fapp failures surfaced to the CLI."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class CompileError(R3FAppError):
    """The style compiler failed or produced CSS that could not be read."""


class InternalConsistencyError(R3FAppError):
    """A scanned class string could not be matched to a synthesized component."""

    def __init__(self, message: str, *, path: str = "", class_string: str = "") -> None:
        super().__init__(message)
        self.path = path
        self.class_string = class_string


class FormatError(R3FAppError):
    """The source formatter rejected the generated text."""


class CommandError(R3FAppError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr
