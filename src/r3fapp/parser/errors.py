"""Parser error types."""


class ParseError(Exception):
    """Raised when JSX markup cannot be scanned or an opening tag cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
