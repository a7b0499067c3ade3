"""`tada-todo manage`: add date headings, add tasks, move unresolved tasks.

Each command edits every resolved TODO file on its own. A failure on one
file is reported and the remaining files are still processed, so a batch
can end with some files already updated. After each successful edit the
manifest entry for that file is refreshed.

Usage:
    tada-todo manage add-date ["March 5, 2024"] [--global]
    tada-todo manage add-task "Write the report" ["March 5, 2024"] [--no-auto-create-date]
    tada-todo manage move-tasks ["March 5, 2024"] [--global]
"""

from __future__ import annotations

import logging
from pathlib import Path

from tadatodo.models import ConfigFormat
from tadatodo.scripts.common import find_todo_files, locate_config
from tadatodo.stores.sync import update_file_in_config
from tadatodo.todo.editor import add_date_heading, add_task_to_date, move_unresolved_tasks
from tadatodo.todo.template import readable_date

logger = logging.getLogger(__name__)


def _sync_after_edit(
    todo_file: Path,
    cwd: Path,
    config_path: Path | None,
    fmt: ConfigFormat | str | None,
) -> None:
    location = locate_config(cwd, config_path, fmt)
    if location is None:
        return
    update_file_in_config(todo_file, location.path, location.format)


def add_date_command(
    date: str | None = None,
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    global_: bool = False,
) -> list[str]:
    """Add a date heading to the TODO file in cwd, or to every saved file with global_."""
    target_date = (date or readable_date()).strip()
    todo_files = find_todo_files(cwd, config_path, fmt, use_saved=global_)

    if not todo_files:
        where = "in configuration" if global_ else "in current directory"
        return [f"No TODO file found {where}. Run `tada-todo new` to create one first."]

    actions: list[str] = []
    updated = 0
    failed = 0
    for todo_file in todo_files:
        try:
            inserted = add_date_heading(todo_file, target_date)
        except (OSError, ValueError) as e:
            logger.error("Failed to add heading to %s: %s", todo_file, e)
            actions.append(f"ERROR: {todo_file}: {e}")
            failed += 1
            continue

        if inserted:
            updated += 1
            actions.append(f"ADDED: {todo_file}")
            _sync_after_edit(todo_file, cwd, config_path, fmt)
        else:
            actions.append(f"SKIP (already exists): {todo_file}")

    if updated:
        actions.append(f'Added date heading "{target_date}" to {updated} TODO file(s).')
    elif not failed:
        actions.append(f'Date heading "{target_date}" already exists in all TODO files.')
    if failed:
        actions.append(f"{failed} TODO file(s) could not be updated.")
    return actions


def add_task_command(
    task: str,
    date: str | None = None,
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    auto_create_date: bool = True,
) -> list[str]:
    """Add an unresolved task under a date heading in every tracked TODO file."""
    task = task.strip()
    if not task:
        raise ValueError("Task text must be non-empty")
    target_date = (date or readable_date()).strip()
    todo_files = find_todo_files(cwd, config_path, fmt, use_saved=True)

    if not todo_files:
        return ["No TODO files found. Run `tada-todo new` to create one first."]

    actions: list[str] = []
    updated = 0
    for todo_file in todo_files:
        try:
            result = add_task_to_date(todo_file, task, target_date, auto_create=auto_create_date)
        except (OSError, ValueError, RuntimeError) as e:
            logger.error("Failed to add task to %s: %s", todo_file, e)
            actions.append(f"ERROR: {todo_file}: {e}")
            continue

        if not result.inserted:
            actions.append(f'NOT FOUND: date "{target_date}" in {todo_file}')
            if result.suggestion:
                actions.append(f'  Did you mean "{result.suggestion}"?')
            continue

        updated += 1
        if result.created_heading:
            actions.append(f'CREATED HEADING: "{target_date}" in {todo_file}')
        actions.append(f"ADDED: {todo_file}")
        _sync_after_edit(todo_file, cwd, config_path, fmt)

    if updated:
        actions.append(
            f'Added task "{task}" to {updated} TODO file(s) under date "{target_date}".'
        )
    else:
        actions.append(
            f'Could not add task to any TODO files. Date "{target_date}" may not exist.'
        )
    return actions


def move_tasks_command(
    date: str | None = None,
    *,
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    global_: bool = False,
) -> list[str]:
    """Move unresolved tasks from every other date into the target date."""
    target_date = (date or readable_date()).strip()
    todo_files = find_todo_files(cwd, config_path, fmt, use_saved=global_)

    if not todo_files:
        where = "in configuration" if global_ else "in current directory"
        return [f"No TODO file found {where}. Run `tada-todo new` to create one first."]

    actions: list[str] = []
    total_moved = 0
    updated = 0
    for todo_file in todo_files:
        try:
            moved = move_unresolved_tasks(todo_file, target_date)
        except (OSError, ValueError) as e:
            logger.error("Failed to move tasks in %s: %s", todo_file, e)
            actions.append(f"ERROR: {todo_file}: {e}")
            continue

        if moved:
            total_moved += moved
            updated += 1
            actions.append(f"MOVED {moved}: {todo_file}")
            _sync_after_edit(todo_file, cwd, config_path, fmt)
        else:
            actions.append(f"SKIP (nothing to move): {todo_file}")

    if total_moved:
        actions.append(
            f'Moved {total_moved} unresolved task(s) to "{target_date}" in {updated} TODO file(s).'
        )
    else:
        actions.append("No unresolved tasks found to move.")
    return actions
