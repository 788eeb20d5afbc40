"""Exceptions raised while invoking Gradle and parsing its output."""

import typing


class GradleInspectorError(RuntimeError):
    """Base exception for all gradle-inspector failures."""


class ExecutionError(GradleInspectorError):
    """Raised when a Gradle invocation exits with a non-zero status.

    The captured standard error is kept on the exception so callers can
    report it without re-running the command.
    """

    def __init__(
        self,
        command: str,
        args: typing.Sequence[str],
        exit_code: int,
        stderr: str = '',
    ) -> None:
        self.command = command
        self.arguments = list(args)
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(
            f"Failed to execute '{' '.join([command, *self.arguments])}'"
        )


class ParseError(GradleInspectorError):
    """Raised when Gradle output does not have the expected shape."""

    def __init__(self, message: str, value: str | None = None) -> None:
        self.value = value
        super().__init__(message)
