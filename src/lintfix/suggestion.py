"""Suggestion records: the unit every stage of the pipeline works on.

Positions are 1-indexed and count characters, not bytes. A suggestion's
``replacement`` replaces the whole span ``[start, end]``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

USE_PREFIX = "use "
USE_TERMINATOR = ";\n"
PATH_SEPARATOR = "::"


@dataclass(frozen=True, order=True)
class LinePosition:
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, order=True)
class LineRange:
    start: LinePosition
    end: LinePosition

    @classmethod
    def top_of_file(cls) -> "LineRange":
        """Zero-width span at 1:1, where use statements get prepended."""
        return cls(LinePosition(1, 1), LinePosition(1, 1))

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Suggestion:
    file_name: str
    line_range: LineRange
    replacement: str
    message: str = ""
    # (lead, highlighted, trail) of the source being replaced, for display
    text: tuple[str, str, str] = ("", "", "")

    def is_use_suggestion(self) -> bool:
        return self.replacement.startswith(USE_PREFIX) and self.replacement.endswith(USE_TERMINATOR)

    def use_symbol(self) -> str:
        """Return the imported name, e.g. ``HashMap`` for ``use std::collections::HashMap;\\n``."""
        if not self.is_use_suggestion():
            raise ValueError(f"not a use suggestion: {self.replacement!r}")
        body = self.replacement[len(USE_PREFIX):-len(USE_TERMINATOR)]
        idx = body.rfind(PATH_SEPARATOR)
        if idx == -1:
            return body
        return body[idx + len(PATH_SEPARATOR):]

    def relocated(self, line_range: LineRange) -> "Suggestion":
        return replace(self, line_range=line_range)


class ReviewDecision(Enum):
    """What the reviewer chose for one suggestion, keyed by its command letter."""

    ACCEPT = "r"
    SKIP = "s"
    QUIT = "q"
    ABORT = "a"

    @classmethod
    def parse(cls, raw: str) -> "ReviewDecision | None":
        try:
            return cls(raw.strip())
        except ValueError:
            return None
