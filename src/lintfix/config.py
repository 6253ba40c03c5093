"""
lintfix configuration

Loads config from:
  1. Defaults
  2. Global config (CLI --config or ~/.lintfix/config.json)
  3. Workspace override (<workspace>/.lintfix/config.json)
  4. Environment variables

Command-line flags are applied on top by the command itself.
"""
from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from lintfix.patch import APPLY_ORDERS

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    # accept every suggestion without prompting
    "automatic": False,
    # only offer use-statement suggestions
    "only_use": False,
    # keep clippy lints enabled
    "clippy": False,
    "order": "acceptance",
    # analyzer argv; None means `cargo clippy --message-format json`
    "command": None,
}

BOOL_KEYS = ("automatic", "only_use", "clippy")

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off", ""}


def load_config(config_path: Path | None = None, workspace: Path | None = None) -> dict[str, Any]:
    """Load the layered config.

    ``config_path`` replaces the global layer. The global layer is not
    read implicitly under pytest, so tests never depend on the user's
    home directory.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    is_pytest = bool(os.environ.get("PYTEST_CURRENT_TEST"))
    lintfix_home = os.environ.get("LINTFIX_HOME")
    default_global_path = (Path(lintfix_home) if lintfix_home else Path.home() / ".lintfix") / "config.json"

    global_path = config_path if config_path else default_global_path
    if is_pytest and config_path is None:
        global_path = None
    if global_path is not None and global_path.exists():
        config.update(_read_json(global_path))
        LOGGER.debug("loaded config from %s", global_path)

    if workspace is not None:
        ws_config_path = Path(workspace) / ".lintfix" / "config.json"
        if ws_config_path.exists():
            config.update(_read_json(ws_config_path))
            LOGGER.debug("loaded config from %s", ws_config_path)

    _apply_env_overrides(config)
    return _validate(config)


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        LOGGER.warning("could not read %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        LOGGER.warning("ignoring %s: expected a JSON object", path)
        return {}
    return {k: v for k, v in data.items() if k in DEFAULT_CONFIG}


def _env_flag(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None:
        return None
    value = value.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    LOGGER.warning("invalid %s=%r", name, value)
    return None


def _apply_env_overrides(config: dict[str, Any]) -> None:
    for key, env in zip(BOOL_KEYS, ("LINTFIX_AUTOMATIC", "LINTFIX_ONLY_USE", "LINTFIX_CLIPPY")):
        flag = _env_flag(env)
        if flag is not None:
            config[key] = flag

    order = os.environ.get("LINTFIX_ORDER")
    if order:
        config["order"] = order.strip().lower()


def _validate(config: dict[str, Any]) -> dict[str, Any]:
    for key in BOOL_KEYS:
        if not isinstance(config[key], bool):
            LOGGER.warning("ignoring non-boolean %s=%r", key, config[key])
            config[key] = DEFAULT_CONFIG[key]
    if config["order"] not in APPLY_ORDERS:
        LOGGER.warning("unknown apply order %r, using 'acceptance'", config["order"])
        config["order"] = "acceptance"
    command = config["command"]
    if command is not None and not (isinstance(command, list) and command and all(isinstance(a, str) for a in command)):
        LOGGER.warning("ignoring invalid command %r", command)
        config["command"] = None
    return config
