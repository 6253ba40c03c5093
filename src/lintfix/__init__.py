"""lintfix - review compiler suggestions and apply the accepted ones.

Public API:
    from lintfix import (
        Suggestion, LineRange, LinePosition,
        comb_use_suggestions, ReviewSession, PatchApplier,
    )
"""
from __future__ import annotations

__version__ = "0.1.0"

from lintfix.dedup import comb_use_suggestions
from lintfix.diagnostics import collect_suggestions, parse_suggestions
from lintfix.errors import (
    EncodingFailure,
    IoFailure,
    LintfixError,
    NoInput,
    SubprocessFailure,
    UserAbort,
)
from lintfix.patch import PatchApplier, apply_suggestion
from lintfix.review import ReviewOptions, ReviewSession, handle_suggestions
from lintfix.suggestion import LinePosition, LineRange, ReviewDecision, Suggestion

__all__ = [
    "__version__",
    # Data model
    "LinePosition",
    "LineRange",
    "Suggestion",
    "ReviewDecision",
    # Pipeline
    "parse_suggestions",
    "collect_suggestions",
    "comb_use_suggestions",
    "ReviewOptions",
    "ReviewSession",
    "handle_suggestions",
    "PatchApplier",
    "apply_suggestion",
    # Errors
    "LintfixError",
    "UserAbort",
    "NoInput",
    "SubprocessFailure",
    "IoFailure",
    "EncodingFailure",
]
