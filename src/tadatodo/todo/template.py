"""Starter content for new TODO files."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from tadatodo.models import SavedFile, TodoConfig
from tadatodo.stores.fingerprint import generate_hash
from tadatodo.stores.sync import relative_dir, upsert_saved_file

logger = logging.getLogger(__name__)


def readable_date(day: date | None = None) -> str:
    """Format a date as e.g. 'October 18, 2026'."""
    day = day or date.today()
    return f"{day:%B} {day.day}, {day.year}"


def generate_todo_content(heading_date: str | None = None) -> str:
    """Build the text of a fresh TODO file."""
    heading_date = heading_date or readable_date()
    return f"""## {heading_date}

- [ ] This is a task that needs done.
- [x] This task is finished.

---

Add new items to the top of the file.
Generated on {heading_date} by tada-todo CLI.
"""


def create_todo_file(
    config: TodoConfig,
    current_dir: Path,
    config_dir: Path,
) -> tuple[bool, list[str]]:
    """Create the configured TODO file in current_dir.

    When the manifest saves files, the new file is also recorded in
    config.saved_files; the caller is responsible for saving the manifest.
    Returns whether a file was created plus action descriptions.
    """
    todo_path = current_dir / config.new_file_name
    if todo_path.exists():
        return False, [f"SKIP: {config.new_file_name} already exists in {current_dir}"]

    content = generate_todo_content()
    todo_path.write_text(content, encoding="utf-8")
    logger.info("Created %s", todo_path)
    actions = [f"CREATED: {config.new_file_name} in {current_dir}"]

    if config.save_in_config:
        saved = SavedFile(
            name=config.new_file_name,
            dir_relative_to_conf=relative_dir(config_dir, current_dir),
            content=content,
            hash=generate_hash(content),
        )
        upsert_saved_file(config, saved)
        actions.append(f"TRACKED: {saved.name} in {saved.dir_relative_to_conf}")

    return True, actions
