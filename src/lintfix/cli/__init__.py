"""lintfix CLI - review and apply compiler suggestions.

Usage:
    lintfix                      # Review suggestions for the crate in .
    lintfix path/to/crate        # ... for another crate
    lintfix --yolo               # Apply every suggestion without asking
    lintfix --messages out.json  # Review captured `--message-format json` output
"""
from __future__ import annotations

from .fix_cmd import fix_command


def main() -> None:
    """CLI entry point."""
    fix_command()


__all__ = ["fix_command", "main"]
