"""Pytest fixtures for lintfix tests."""
from __future__ import annotations

import json

import pytest

from lintfix.suggestion import LinePosition, LineRange, Suggestion


def span(l1: int, c1: int, l2: int, c2: int) -> LineRange:
    return LineRange(LinePosition(l1, c1), LinePosition(l2, c2))


@pytest.fixture
def make_suggestion():
    """Factory for suggestions with sensible defaults."""

    def _make(
        replacement: str = "x",
        file_name: str = "src/main.rs",
        line_range: LineRange | None = None,
        message: str = "unused variable",
    ) -> Suggestion:
        return Suggestion(
            file_name=file_name,
            line_range=line_range or span(1, 1, 1, 2),
            replacement=replacement,
            message=message,
            text=("let ", "x", " = 1;"),
        )

    return _make


class ScriptedInput:
    """Stands in for the console prompt, replaying canned answers."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = 0

    def __call__(self, prompt: str) -> str:
        self.calls += 1
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def scripted_input():
    return ScriptedInput


class RecordingApplier:
    def __init__(self):
        self.calls: list[list[Suggestion]] = []

    def apply(self, accepted, on_applied=None) -> int:
        accepted = list(accepted)
        self.calls.append(accepted)
        for s in accepted:
            if on_applied is not None:
                on_applied(s)
        return len(accepted)


@pytest.fixture
def recording_applier():
    return RecordingApplier()


@pytest.fixture
def cargo_messages():
    """Cargo JSON lines: an artifact record, a garbage line and two diagnostics."""
    unused = {
        "reason": "compiler-message",
        "message": {
            "message": "unused variable: `count`",
            "spans": [],
            "children": [
                {
                    "message": "consider prefixing with an underscore",
                    "spans": [
                        {
                            "file_name": "src/main.rs",
                            "line_start": 2,
                            "line_end": 2,
                            "column_start": 9,
                            "column_end": 14,
                            "suggested_replacement": "_count",
                            "text": [{"text": "    let count = 1;", "highlight_start": 9, "highlight_end": 14}],
                        }
                    ],
                    "children": [],
                }
            ],
        },
    }
    hashmap = {
        "reason": "compiler-message",
        "message": {
            "message": "failed to resolve: use of undeclared type `HashMap`",
            "spans": [
                {
                    "file_name": "src/main.rs",
                    "line_start": 3,
                    "line_end": 3,
                    "column_start": 13,
                    "column_end": 20,
                    "suggested_replacement": None,
                    "text": [{"text": "    let m = HashMap::new();", "highlight_start": 13, "highlight_end": 20}],
                }
            ],
            "children": [
                {
                    "message": "consider importing one of these items",
                    "spans": [
                        {
                            "file_name": "src/main.rs",
                            "line_start": 1,
                            "line_end": 1,
                            "column_start": 1,
                            "column_end": 1,
                            "suggested_replacement": replacement,
                            "text": [{"text": "fn main() {", "highlight_start": 1, "highlight_end": 1}],
                        }
                        for replacement in (
                            "use std::collections::HashMap;\n",
                            "use std::collections::hash_map::HashMap;\n",
                        )
                    ],
                    "children": [],
                }
            ],
        },
    }
    lines = [
        json.dumps({"reason": "compiler-artifact", "package_id": "demo 0.1.0"}),
        "this is not json",
        json.dumps(unused),
        json.dumps(hashmap),
        json.dumps({"reason": "build-finished", "success": True}),
    ]
    return "\n".join(lines) + "\n"
