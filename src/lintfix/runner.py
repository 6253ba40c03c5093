"""Run the analyzer and hand back its JSON message stream.

Usage:
    from lintfix.runner import build_command, run_analyzer

    text = run_analyzer(build_command(clippy=False), cwd=Path("."))
"""
from __future__ import annotations

import logging
import subprocess
import sys
from pathlib import Path

from lintfix.errors import EncodingFailure, IoFailure, NoInput, SubprocessFailure

LOGGER = logging.getLogger(__name__)

DEFAULT_COMMAND = ["cargo", "clippy", "--message-format", "json"]

# Silences every clippy lint so only compiler suggestions remain
ALLOW_CLIPPY = "-Aclippy::all"


def build_command(clippy: bool = False, base: list[str] | None = None) -> list[str]:
    """Return the analyzer argv. A configured ``base`` is used verbatim."""
    if base:
        return list(base)
    command = list(DEFAULT_COMMAND)
    extra_args: list[str] = []
    if not clippy:
        extra_args.append(ALLOW_CLIPPY)
    if extra_args:
        command.append("--")
        command.extend(extra_args)
    return command


def _decode(raw: bytes, source: str) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingFailure(f"Error reading {source} as UTF-8", e) from e
    if not text.strip():
        raise NoInput(f"No diagnostic output from {source}")
    return text


def run_analyzer(command: list[str], cwd: Path | str | None = None) -> str:
    """Run ``command`` and return its stdout.

    A non-zero exit is only an error when nothing was printed: failed
    builds still report suggestions.
    """
    LOGGER.debug("running %s in %s", " ".join(command), cwd or ".")
    try:
        result = subprocess.run(command, capture_output=True, cwd=cwd)
    except OSError as e:
        raise SubprocessFailure(command, cause=e) from e

    if result.returncode != 0 and not result.stdout.strip():
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise SubprocessFailure(command, output=stderr)
    if result.returncode != 0:
        LOGGER.debug("%s exited with %d", command[0], result.returncode)
    return _decode(result.stdout, f"`{' '.join(command)}`")


def read_messages(path: str | Path) -> str:
    """Read previously captured messages from a file, or stdin for ``-``."""
    if str(path) == "-":
        return _decode(sys.stdin.buffer.read(), "stdin")
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise IoFailure(f"I/O error reading {path}", e) from e
    return _decode(raw, str(path))
