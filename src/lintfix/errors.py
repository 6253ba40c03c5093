"""Error kinds raised across the fix pipeline.

Only ``UserAbort`` is not a failure: the command reports it and exits 0.
``MalformedDiagnostic`` is raised and swallowed inside
``lintfix.diagnostics``; callers never see it.
"""
from __future__ import annotations


class LintfixError(Exception):
    """Base class: a human-readable message plus an optional underlying cause."""

    default_message = "lintfix failed"

    def __init__(self, message: str | None = None, cause: BaseException | None = None):
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class UserAbort(LintfixError):
    default_message = "Let's get outta here!"


class NoInput(LintfixError):
    default_message = "No diagnostic output to work with"


class SubprocessFailure(LintfixError):
    """The analyzer could not be launched or exited without output."""

    def __init__(self, command: list[str], output: str = "", cause: BaseException | None = None):
        self.command = list(command)
        self.output = output
        super().__init__(f"Error executing subcommand `{' '.join(self.command)}`", cause)


class IoFailure(LintfixError):
    default_message = "I/O error"


class EncodingFailure(LintfixError):
    default_message = "Error reading input as UTF-8"


class MalformedDiagnostic(LintfixError):
    default_message = "Malformed diagnostic line"
