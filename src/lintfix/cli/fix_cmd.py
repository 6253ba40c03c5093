"""lintfix - review suggestions from `cargo clippy` and apply the accepted ones.

Pipeline:
    analyzer → parse → combine use suggestions → review → apply
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from lintfix import __version__
from lintfix.config import load_config
from lintfix.dedup import comb_use_suggestions
from lintfix.diagnostics import parse_suggestions
from lintfix.display import make_console
from lintfix.errors import LintfixError, UserAbort
from lintfix.patch import APPLY_ORDERS, PatchApplier
from lintfix.review import ReviewOptions, handle_suggestions
from lintfix.runner import build_command, read_messages, run_analyzer

LOGGER = logging.getLogger(__name__)


@click.command("lintfix")
@click.argument("path", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--clippy", is_flag=True, help="Use `cargo clippy` lints for suggestions")
@click.option("--yolo", is_flag=True, help="Automatically apply all unambiguous suggestions")
@click.option("--apply-only-use", "only_use", is_flag=True, help="Apply only use fix suggestions")
@click.option(
    "--order",
    type=click.Choice(APPLY_ORDERS),
    default=None,
    help="Apply edits in reverse acceptance order (default) or by descending position",
)
@click.option(
    "--messages",
    "messages_path",
    type=click.Path(allow_dash=True, dir_okay=False),
    default=None,
    help="Read captured JSON messages from a file ('-' for stdin) instead of running cargo",
)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="Config file (default: ~/.lintfix/config.json)")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.version_option(version=__version__, prog_name="lintfix")
def fix_command(
    path: str,
    clippy: bool,
    yolo: bool,
    only_use: bool,
    order: str | None,
    messages_path: str | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Automatically apply suggestions made by rustc.

    \b
    At each suggestion:
      r  replace (accept)      s  skip
      q  save and quit         a  abort without saving
    """
    # Without --verbose, warnings still reach stderr through logging.lastResort
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    workspace = Path(path).resolve()
    config = load_config(Path(config_path) if config_path else None, workspace=workspace)

    # Flags can only switch options on; config files and env decide the rest
    for key, flag in (("clippy", clippy), ("automatic", yolo), ("only_use", only_use)):
        if flag:
            config[key] = True
    if order:
        config["order"] = order

    console = make_console()
    try:
        if messages_path:
            text = read_messages(messages_path)
        else:
            text = run_analyzer(build_command(bool(config["clippy"]), config["command"]), cwd=workspace)

        suggestions = comb_use_suggestions(parse_suggestions(text, only_use=bool(config["only_use"])))
        LOGGER.debug("%d suggestion(s) to review", len(suggestions))
        handle_suggestions(
            suggestions,
            ReviewOptions(automatic=bool(config["automatic"])),
            applier=PatchApplier(order=config["order"], root=workspace),
            console=console,
        )
    except UserAbort as e:
        click.echo(str(e))
        sys.exit(0)
    except LintfixError as e:
        click.echo(f"An error occurred: {e}", err=True)
        if e.cause is not None:
            click.echo(f"Cause: {e.cause!r}", err=True)
        if getattr(e, "output", ""):
            click.echo(e.output.rstrip(), err=True)
        sys.exit(1)
