"""Interactive review of suggestions.

A ReviewSession walks the suggestions once, left to right, and asks for
one command per suggestion:

    r  accept (applied later)
    s  skip
    q  stop reviewing and apply what was accepted so far
    a  abort: apply nothing

Anything else re-displays the same suggestion and asks again. In
automatic mode every suggestion is accepted without asking.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from rich.console import Console

from lintfix.display import make_console, show_suggestion
from lintfix.errors import UserAbort
from lintfix.patch import PatchApplier
from lintfix.suggestion import ReviewDecision, Suggestion

LOGGER = logging.getLogger(__name__)

USER_OPTIONS = (
    "What do you want to do? "
    "[r]eplace | [s]kip | save and [q]uit | [a]bort (without saving)"
)

NOTHING_TO_DO = "I don't have any suggestions for you right now. Check back later!"


@dataclass(frozen=True)
class ReviewOptions:
    automatic: bool = False
    prompt_text: str = USER_OPTIONS


class ReviewSession:
    """Decides, suggestion by suggestion, what ends up in the accepted set."""

    def __init__(
        self,
        suggestions: Sequence[Suggestion],
        options: ReviewOptions | None = None,
        console: Console | None = None,
        read_input: Callable[[str], str] | None = None,
    ):
        self.suggestions = list(suggestions)
        self.options = options or ReviewOptions()
        self.console = console or make_console()
        self.read_input = read_input or self._console_input
        self.accepted: list[Suggestion] = []
        self.decisions: list[ReviewDecision] = []

    def _console_input(self, prompt: str) -> str:
        return self.console.input(prompt)

    def _prompt(self) -> ReviewDecision | None:
        # markup=False: the option list contains literal [r], [s], ...
        self.console.print("[bold green]==>[/bold green] ", end="")
        self.console.print(self.options.prompt_text, style="green", markup=False, highlight=False)
        try:
            raw = self.read_input("  > ")
        except EOFError:
            LOGGER.debug("input closed while waiting for a decision")
            return ReviewDecision.ABORT
        return ReviewDecision.parse(raw)

    def _decide(self, suggestion: Suggestion) -> ReviewDecision:
        """Ask until a valid command is given for this suggestion."""
        while True:
            decision = self._prompt()
            if decision is not None:
                return decision
            self.console.print("[bold red]Error[/bold red]: I didn't quite get that. ", end="")
            self.console.print(self.options.prompt_text, markup=False, highlight=False)
            show_suggestion(self.console, suggestion)

    def run(self) -> list[Suggestion]:
        """Review every suggestion and return the accepted ones in acceptance order.

        Raises UserAbort when the reviewer aborts; nothing accepted so far
        is returned in that case.
        """
        for suggestion in self.suggestions:
            show_suggestion(self.console, suggestion)

            if self.options.automatic:
                self.decisions.append(ReviewDecision.ACCEPT)
                self.accepted.append(suggestion)
                self.console.print("automatically applying suggestion (--yolo)")
                continue

            decision = self._decide(suggestion)
            self.decisions.append(decision)
            if decision is ReviewDecision.SKIP:
                self.console.print("Skipped.")
            elif decision is ReviewDecision.ACCEPT:
                self.accepted.append(suggestion)
                self.console.print("Suggestion accepted. I'll remember that and apply it later.")
            elif decision is ReviewDecision.QUIT:
                self.console.print("Thanks for playing!")
                break
            else:
                self.accepted.clear()
                raise UserAbort()
        return list(self.accepted)


def handle_suggestions(
    suggestions: Sequence[Suggestion],
    options: ReviewOptions | None = None,
    applier: PatchApplier | None = None,
    console: Console | None = None,
    read_input: Callable[[str], str] | None = None,
) -> int:
    """Review ``suggestions`` and apply the accepted ones. Returns the number applied."""
    console = console or make_console()
    if not suggestions:
        console.print(NOTHING_TO_DO)
        return 0

    session = ReviewSession(suggestions, options, console=console, read_input=read_input)
    accepted = session.run()
    if not accepted:
        return 0

    applier = applier or PatchApplier()
    console.print(f"Good work. Let me just apply these {len(accepted)} changes!")
    applied = applier.apply(accepted, on_applied=lambda _s: console.print(".", end=""))
    console.print("\nDone.")
    return applied
