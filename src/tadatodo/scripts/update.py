"""`tada-todo update`: refresh saved file contents in the manifest from disk."""

from __future__ import annotations

from pathlib import Path

from tadatodo.models import ConfigFormat
from tadatodo.scripts.common import require_config
from tadatodo.stores.manifest import load_config, save_config
from tadatodo.stores.sync import add_scanned_files, refresh_saved_files, sync_saved_file


def update_command(
    file: str | None = None,
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    scan: bool = False,
) -> list[str]:
    """Update one file (relative to cwd) or every saved file; optionally scan for new ones."""
    location = require_config(cwd, config_path, fmt)
    config = load_config(location.path, location.format)

    if not config.save_in_config:
        return ["Configuration is not set to save files. Nothing to update."]
    if config.saved_files is None:
        config.saved_files = []

    actions: list[str] = []
    if file:
        file_path = cwd / file
        if not file_path.exists():
            actions.append(f"File not found: {file_path}")
            changed = False
        else:
            action = sync_saved_file(config, location.directory, file_path)
            changed = action is not None
            if action:
                actions.append(action)
    else:
        changed, refreshed = refresh_saved_files(config, location.directory)
        actions.extend(refreshed)

    if scan:
        actions.append("Scanning for TODO files...")
        scan_changed, scanned = add_scanned_files(config, location.directory)
        actions.extend(scanned)
        changed = changed or scan_changed

    if changed:
        save_config(config, location.path, location.format)
        actions.append("Configuration updated successfully.")
    else:
        actions.append("No changes detected.")
    return actions
