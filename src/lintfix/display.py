"""Rich rendering of a suggestion for the review prompt."""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from lintfix.suggestion import Suggestion

# Width of "Info: ", so wrapped lint attributes line up under the message
LINT_INDENT = " " * 6


def make_console(**kwargs) -> Console:
    """Console used for the review conversation: no wrapping, no auto-highlighting."""
    kwargs.setdefault("soft_wrap", True)
    kwargs.setdefault("highlight", False)
    return Console(**kwargs)


def indent(size: int, text: str) -> str:
    pad = " " * size
    return "\n".join(pad + line for line in text.splitlines())


def split_at_lint_name(message: str) -> str:
    """Put each ``#[...]`` lint attribute of a message on its own line."""
    return f"\n{LINT_INDENT}#[".join(message.split(", #["))


def render_suggestion(suggestion: Suggestion) -> str:
    """Return console markup for one suggestion block."""
    lead, highlighted, trail = suggestion.text
    return (
        f"\n\n[bold green]Info[/bold green]: {escape(split_at_lint_name(suggestion.message))}\n"
        f"[bold blue]  -->[/bold blue] {escape(suggestion.file_name)}:{suggestion.line_range}\n"
        f"[bold yellow]Suggestion - Replace:[/bold yellow]\n\n"
        f"{escape(indent(4, lead))}[red]{escape(highlighted)}[/red]{escape(trail)}\n\n"
        f"[bold yellow]with:[/bold yellow]\n\n"
        f"{escape(indent(4, suggestion.replacement))}\n"
    )


def show_suggestion(console: Console, suggestion: Suggestion) -> None:
    console.print(render_suggestion(suggestion), highlight=False)
