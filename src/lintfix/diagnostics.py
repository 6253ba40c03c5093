"""Parse cargo's JSON message stream into Suggestion records.

Usage:
    from lintfix.diagnostics import parse_suggestions

    suggestions = parse_suggestions(stdout_text, only_use=False)

Each line of ``cargo clippy --message-format json`` is one JSON object.
Only ``compiler-message`` records carry a diagnostic; every other line
(and anything that does not parse) is dropped on its own.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from lintfix.errors import MalformedDiagnostic
from lintfix.suggestion import LinePosition, LineRange, Suggestion

LOGGER = logging.getLogger(__name__)


def _optional_str(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


@dataclass
class SpanLine:
    text: str
    highlight_start: int
    highlight_end: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpanLine":
        return cls(
            text=str(data["text"]),
            highlight_start=int(data["highlight_start"]),
            highlight_end=int(data["highlight_end"]),
        )


@dataclass
class DiagnosticSpan:
    file_name: str
    line_start: int
    line_end: int
    column_start: int
    column_end: int
    suggested_replacement: str | None = None
    text: list[SpanLine] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DiagnosticSpan":
        return cls(
            file_name=str(data["file_name"]),
            line_start=int(data["line_start"]),
            line_end=int(data["line_end"]),
            column_start=int(data["column_start"]),
            column_end=int(data["column_end"]),
            suggested_replacement=_optional_str(data.get("suggested_replacement")),
            text=[SpanLine.from_dict(t) for t in data.get("text") or []],
        )

    @property
    def line_range(self) -> LineRange:
        return LineRange(
            LinePosition(self.line_start, self.column_start),
            LinePosition(self.line_end, self.column_end),
        )

    def display_text(self) -> tuple[str, str, str]:
        """Split the covered source into (lead, highlighted, trail)."""
        if not self.text:
            return ("", "", "")
        first, last = self.text[0], self.text[-1]
        lead = first.text[:first.highlight_start - 1]
        if len(self.text) == 1:
            highlighted = first.text[first.highlight_start - 1:first.highlight_end - 1]
        else:
            pieces = [first.text[first.highlight_start - 1:]]
            pieces.extend(line.text for line in self.text[1:-1])
            pieces.append(last.text[:last.highlight_end - 1])
            highlighted = "\n".join(pieces)
        trail = last.text[last.highlight_end - 1:]
        return (lead, highlighted, trail)


@dataclass
class Diagnostic:
    message: str
    spans: list[DiagnosticSpan] = field(default_factory=list)
    children: list["Diagnostic"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Diagnostic":
        return cls(
            message=str(data["message"]),
            spans=[DiagnosticSpan.from_dict(s) for s in data.get("spans") or []],
            children=[cls.from_dict(c) for c in data.get("children") or []],
        )


def parse_message(line: str) -> Diagnostic:
    """Parse one cargo message line; raise MalformedDiagnostic if it has no diagnostic."""
    try:
        payload = json.loads(line)
        return Diagnostic.from_dict(payload["message"])
    except (ValueError, KeyError, TypeError) as e:
        raise MalformedDiagnostic(f"Could not parse diagnostic line: {line[:80]!r}", e) from e


def iter_diagnostics(lines: Iterable[str]) -> Iterator[Diagnostic]:
    for line in lines:
        if not line.strip():
            continue
        try:
            yield parse_message(line)
        except MalformedDiagnostic as e:
            LOGGER.debug("%s (%s)", e, e.cause)


def collect_suggestions(diagnostic: Diagnostic, parent_message: str | None = None) -> list[Suggestion]:
    """Collect one suggestion per span with a replacement, children included.

    Children report under the top-level diagnostic's message.
    """
    message = parent_message if parent_message is not None else diagnostic.message
    suggestions = [
        Suggestion(
            file_name=span.file_name,
            line_range=span.line_range,
            replacement=span.suggested_replacement,
            message=message,
            text=span.display_text(),
        )
        for span in diagnostic.spans
        if span.suggested_replacement is not None
    ]
    for child in diagnostic.children:
        suggestions.extend(collect_suggestions(child, message))
    return suggestions


def parse_suggestions(text: str, only_use: bool = False) -> list[Suggestion]:
    suggestions: list[Suggestion] = []
    # cargo leaves U+2028 and friends unescaped, so only "\n" separates messages
    for diagnostic in iter_diagnostics(text.split("\n")):
        suggestions.extend(collect_suggestions(diagnostic))
    if only_use:
        suggestions = [s for s in suggestions if s.is_use_suggestion()]
    LOGGER.debug("collected %d suggestion(s)", len(suggestions))
    return suggestions
