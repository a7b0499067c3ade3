"""`tada-todo prune`: drop manifest entries whose files no longer exist."""

from __future__ import annotations

import logging
from pathlib import Path

from tadatodo.models import ConfigFormat, SavedFile
from tadatodo.scripts.common import require_config
from tadatodo.stores.manifest import load_config, save_config
from tadatodo.workspace.scanner import TodoScanner

logger = logging.getLogger(__name__)


def _parse_selection(answer: str, count: int) -> list[int]:
    """Turn '1,3' or 'all' into zero-based indexes; invalid entries are ignored."""
    answer = answer.strip().lower()
    if answer in ("a", "all"):
        return list(range(count))
    selected: list[int] = []
    for part in answer.split(","):
        part = part.strip()
        if part.isdigit() and 1 <= int(part) <= count and int(part) - 1 not in selected:
            selected.append(int(part) - 1)
    return selected


def _select_files(missing: list[SavedFile]) -> list[SavedFile]:
    for number, saved in enumerate(missing, start=1):
        print(f"  {number}. {saved.name} in {saved.dir_relative_to_conf} (missing from filesystem)")
    answer = input("Select files to remove from configuration (e.g. 1,3 or 'all'): ")
    return [missing[i] for i in _parse_selection(answer, len(missing))]


def _confirm(selected: list[SavedFile]) -> bool:
    print("\nWARNING: This will permanently remove the selected files from your configuration!")
    for saved in selected:
        print(f"  - {saved.name} in {saved.dir_relative_to_conf}")
    answer = input("Are you sure you want to remove these files from the configuration? [y/N]: ")
    return answer.strip().lower() in ("y", "yes")


def prune_command(
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    assume_yes: bool = False,
) -> list[str]:
    """Remove saved entries missing on disk. assume_yes removes all of them without prompting."""
    location = require_config(cwd, config_path, fmt)
    config = load_config(location.path, location.format)

    if not config.save_in_config or not config.saved_files:
        return ["No saved files found in configuration.", "Nothing to prune."]

    scanner = TodoScanner(location.directory)
    missing = [saved for saved in config.saved_files if not scanner.exists(saved)]
    if not missing:
        return ["All saved files exist on filesystem.", "Nothing to prune."]

    print(f"Found {len(missing)} saved file(s) that no longer exist on filesystem:")
    if assume_yes:
        selected = missing
    else:
        selected = _select_files(missing)
        if not selected:
            return ["No files selected.", "Prune cancelled."]
        if not _confirm(selected):
            return ["Prune cancelled."]

    remove = {saved.key() for saved in selected}
    config.saved_files = [saved for saved in config.saved_files if saved.key() not in remove]
    save_config(config, location.path, location.format)
    logger.info("Pruned %d entries from %s", len(selected), location.path)

    return [f"Removed {len(selected)} file(s) from configuration.", "Prune completed successfully."]
