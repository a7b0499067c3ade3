"""`tada-todo generate`: recreate saved TODO files from the manifest.

Files that already exist are never overwritten.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tadatodo.models import ConfigFormat
from tadatodo.scripts.common import require_config
from tadatodo.stores.manifest import load_config
from tadatodo.workspace.scanner import TodoScanner

logger = logging.getLogger(__name__)


def generate_command(
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
) -> list[str]:
    location = require_config(cwd, config_path, fmt)
    config = load_config(location.path, location.format)

    if not config.save_in_config or not config.saved_files:
        return [
            "No saved files found in configuration. "
            "Use `tada-todo new` to create TODO files."
        ]

    scanner = TodoScanner(location.directory)
    actions: list[str] = []
    generated = 0
    skipped = 0

    for saved in config.saved_files:
        target = scanner.path_for(saved)
        if target.exists():
            actions.append(f"Skipped: {saved.name} already exists in {saved.dir_relative_to_conf}")
            skipped += 1
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(saved.content, encoding="utf-8")
        logger.info("Generated %s", target)
        actions.append(f"Generated: {saved.name} in {saved.dir_relative_to_conf}")
        generated += 1

    actions.append(
        f"Generation complete: {generated} files created, {skipped} files skipped."
    )
    return actions
