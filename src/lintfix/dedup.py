"""Collapse duplicate use suggestions.

The compiler proposes every import path it knows for an unresolved name,
often more than once, e.g. for ``HashMap``:

    use std::collections::HashMap;
    use std::collections::hash_map::HashMap;
    use std::collections::HashMap;
    use std::collections::hash_map::HashMap;

Only one of them should be offered. Surviving use statements are moved
to the top of the file, where the patcher prepends them.
"""
from __future__ import annotations

import logging

from lintfix.suggestion import LineRange, Suggestion

LOGGER = logging.getLogger(__name__)

UseKey = tuple[str, LineRange, str]


def group_use_suggestions(suggestions: list[Suggestion]) -> dict[UseKey, list[int]]:
    """Map (file, range, imported name) to the indices of matching use suggestions."""
    groups: dict[UseKey, list[int]] = {}
    for i, s in enumerate(suggestions):
        if not s.is_use_suggestion():
            continue
        key = (s.file_name, s.line_range, s.use_symbol())
        groups.setdefault(key, []).append(i)
    return groups


def comb_use_suggestions(suggestions: list[Suggestion]) -> list[Suggestion]:
    """Keep the shortest use statement per group and relocate it to 1:1.

    Ties go to the earliest suggestion. Non-use suggestions pass through
    unchanged and in place.
    """
    to_remove: set[int] = set()
    for indices in group_use_suggestions(suggestions).values():
        # min() returns the first minimal element, which gives the stable tie-break
        keep = min(indices, key=lambda i: len(suggestions[i].replacement))
        to_remove.update(i for i in indices if i != keep)

    if to_remove:
        LOGGER.debug("dropping %d duplicate use suggestion(s)", len(to_remove))

    top = LineRange.top_of_file()
    combed: list[Suggestion] = []
    for i, s in enumerate(suggestions):
        if i in to_remove:
            continue
        combed.append(s.relocated(top) if s.is_use_suggestion() else s)
    return combed
