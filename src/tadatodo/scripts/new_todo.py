"""`tada-todo new`: create a TODO file in the current directory."""

from __future__ import annotations

from pathlib import Path

from tadatodo.models import ConfigFormat
from tadatodo.scripts.common import require_config
from tadatodo.stores.manifest import load_config, save_config
from tadatodo.todo.template import create_todo_file


def new_command(
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
) -> list[str]:
    location = require_config(cwd, config_path, fmt)
    config = load_config(location.path, location.format)

    created, actions = create_todo_file(config, cwd, location.directory)
    if created and config.save_in_config:
        save_config(config, location.path, location.format)
        actions.append("Configuration updated with new file.")
    return actions
