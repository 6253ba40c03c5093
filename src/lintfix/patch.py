"""Write accepted suggestions back to disk.

Every suggestion is one full-file rewrite against the file as it is at
that moment, so earlier writes to the same file are visible to later
ones. Nothing is rolled back: if a write fails, files already written
stay written.

Apply order
-----------
``acceptance`` (default) walks the accepted list backwards. That is only
correct while, within a file, edits accepted later also sit further down
the file than edits accepted earlier. ``position`` sorts by descending
position instead, so no edit is applied against offsets an earlier
write has moved.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable

from lintfix.errors import EncodingFailure, IoFailure
from lintfix.suggestion import Suggestion

LOGGER = logging.getLogger(__name__)

APPLY_ORDERS = ("acceptance", "position")


def _split_lines(content: str) -> list[str]:
    """Split into lines that keep a normalized ``\\n`` terminator.

    The last line has no terminator if the file did not end with one.
    """
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")
    lines = normalized.split("\n")
    tail = lines.pop()
    split = [line + "\n" for line in lines]
    if tail:
        split.append(tail)
    return split


def _terminated(line: str) -> str:
    return line if line.endswith("\n") else line + "\n"


def _line(lines: list[str], number: int) -> str:
    if 1 <= number <= len(lines):
        return lines[number - 1]
    return ""


def rewrite(content: str, suggestion: Suggestion) -> str:
    """Return ``content`` with ``suggestion`` applied."""
    lines = _split_lines(content)
    start = suggestion.line_range.start
    end = suggestion.line_range.end

    parts: list[str] = []
    # lines before the span
    parts.extend(_terminated(line) for line in lines[:max(start.line - 1, 0)])
    # start line up to the span
    parts.append(_line(lines, start.line).rstrip("\n")[:max(start.column - 1, 0)])
    parts.append(suggestion.replacement)
    # end line from the span on, including its own line break
    parts.append(_line(lines, end.line)[max(end.column - 1, 0):])
    parts.append("\n")
    # lines after the span
    parts.extend(_terminated(line) for line in lines[max(end.line, 0):])
    return "".join(parts)


def _resolve(file_name: str, root: Path | None) -> Path:
    path = Path(file_name)
    if root is not None and not path.is_absolute():
        return root / path
    return path


def apply_suggestion(suggestion: Suggestion, root: Path | None = None) -> None:
    """Apply one suggestion to its file, rewriting the file in full."""
    path = _resolve(suggestion.file_name, root)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise EncodingFailure(f"Error reading {path} as UTF-8", e) from e
    except OSError as e:
        raise IoFailure(f"I/O error reading {path}", e) from e

    new_content = rewrite(content, suggestion)

    try:
        # mode "w" truncates to the new length
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(new_content)
    except OSError as e:
        raise IoFailure(f"I/O error writing {path}", e) from e
    LOGGER.debug("applied %s:%s", suggestion.file_name, suggestion.line_range)


class PatchApplier:
    """Applies an accepted set of suggestions in a fixed order."""

    def __init__(self, order: str = "acceptance", root: Path | str | None = None):
        if order not in APPLY_ORDERS:
            raise ValueError(f"unknown apply order {order!r}, expected one of {APPLY_ORDERS}")
        self.order = order
        self.root = Path(root) if root is not None else None

    def ordered(self, accepted: Iterable[Suggestion]) -> list[Suggestion]:
        accepted = list(accepted)
        if self.order == "position":
            # ties keep reverse acceptance order, as in the default order
            return sorted(
                accepted[::-1],
                key=lambda s: (s.file_name, s.line_range.start),
                reverse=True,
            )
        return accepted[::-1]

    def apply(
        self,
        accepted: Iterable[Suggestion],
        on_applied: Callable[[Suggestion], None] | None = None,
    ) -> int:
        """Apply every suggestion; stop at the first failure. Returns the count applied."""
        applied = 0
        for suggestion in self.ordered(accepted):
            apply_suggestion(suggestion, self.root)
            applied += 1
            if on_applied is not None:
                on_applied(suggestion)
        return applied
