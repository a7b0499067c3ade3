"""`tada-todo init`: create a manifest in the current directory.

Usage:
    tada-todo init
    tada-todo init --non-interactive
    tada-todo init --options newFileName=TASKS.md,humanReadable=true,saveInConfig=true
"""

from __future__ import annotations

import logging
from pathlib import Path

from tadatodo.config import get_settings
from tadatodo.models import ConfigFormat, TodoConfig
from tadatodo.stores.manifest import config_filename, save_config

logger = logging.getLogger(__name__)

_OPTION_FIELDS = {
    "newFileName": "new_file_name",
    "humanReadable": "human_readable",
    "saveInConfig": "save_in_config",
}


def parse_options_string(options: str) -> tuple[TodoConfig, list[str]]:
    """Parse 'key=value,key=value' into a config. Unknown keys produce warnings."""
    config = TodoConfig(new_file_name=get_settings().default_file_name)
    warnings: list[str] = []

    for pair in options.split(","):
        if not pair.strip():
            continue
        key, _, value = (part.strip() for part in pair.partition("="))
        field_name = _OPTION_FIELDS.get(key)
        if field_name is None:
            warnings.append(f"Warning: Unknown option '{key}' ignored")
            continue
        if field_name == "new_file_name":
            config.new_file_name = value
        else:
            setattr(config, field_name, value.lower() == "true")

    return config, warnings


def _ask_yes_no(question: str, default: bool = False) -> bool:
    hint = "Y/n" if default else "y/N"
    answer = input(f"{question} [{hint}]: ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def prompt_for_config() -> TodoConfig:
    default_name = get_settings().default_file_name
    new_file_name = input(f"What should new TODO files be called? [{default_name}]: ").strip()
    return TodoConfig(
        new_file_name=new_file_name or default_name,
        human_readable=_ask_yes_no("Should the TODO lockfile be human-readable?"),
        save_in_config=_ask_yes_no("Save TODO files in config?"),
    )


def init_command(
    *,
    cwd: Path,
    non_interactive: bool = False,
    options: str | None = None,
) -> list[str]:
    """Write a new manifest into cwd unless one already exists there."""
    settings = get_settings()
    if (cwd / settings.json_config_name).exists() or (cwd / settings.binary_config_name).exists():
        return ["Configuration file already exists in this directory!", "Initialization cancelled."]

    actions: list[str] = []
    if non_interactive:
        config = TodoConfig(new_file_name=settings.default_file_name)
        actions.append("Using default configuration (non-interactive mode)")
    elif options:
        config, warnings = parse_options_string(options)
        actions.extend(warnings)
    else:
        config = prompt_for_config()

    config_path = cwd / config_filename(config.human_readable)
    fmt = ConfigFormat.JSON if config.human_readable else ConfigFormat.MSGPACK
    save_config(config, config_path, fmt)
    logger.info("Initialized %s manifest at %s", fmt, config_path)
    actions.append(f"Configuration saved to {config_path.name}")
    return actions
