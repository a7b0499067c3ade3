"""Keep manifest entries in step with the TODO files on disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from tadatodo.models import ConfigFormat, SavedFile, TodoConfig
from tadatodo.stores.fingerprint import generate_hash, hashes_match
from tadatodo.stores.manifest import find_config_file, load_config, resolve_format, save_config
from tadatodo.workspace.scanner import TodoScanner

logger = logging.getLogger(__name__)


def relative_dir(config_dir: Path, file_dir: Path) -> str:
    """Directory of a file relative to the manifest, '.' for the manifest's own directory."""
    relative = os.path.relpath(file_dir.resolve(), config_dir.resolve())
    return Path(relative).as_posix() if relative != "." else "."


def upsert_saved_file(config: TodoConfig, saved_file: SavedFile) -> bool:
    """Replace the entry with the same name and directory, or append it.

    Returns True if the entry was new.
    """
    if config.saved_files is None:
        config.saved_files = []
    for i, existing in enumerate(config.saved_files):
        if existing.key() == saved_file.key():
            config.saved_files[i] = saved_file
            return False
    config.saved_files.append(saved_file)
    return True


def sync_saved_file(config: TodoConfig, config_dir: Path, file_path: Path) -> str | None:
    """Record file_path's current content in config if it changed.

    Returns an action description, or None when nothing changed.
    """
    if not file_path.exists():
        logger.warning("File not found: %s", file_path)
        return None

    content = file_path.read_text(encoding="utf-8")
    content_hash = generate_hash(content)
    saved = SavedFile(
        name=file_path.name,
        dir_relative_to_conf=relative_dir(config_dir, file_path.parent),
        content=content,
        hash=content_hash,
    )

    for existing in config.saved_files or []:
        if existing.key() == saved.key() and hashes_match(existing.hash, content_hash):
            return None

    if upsert_saved_file(config, saved):
        return f"Added to config: {saved.name}"
    return f"Updated in config: {saved.name}"


def update_file_in_config(
    file_path: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    cwd: Path | None = None,
) -> bool:
    """Refresh the manifest entry for a TODO file after it was edited.

    Does nothing when no manifest is found or the manifest does not save
    files. Failures are logged, never raised, so an edit that already
    succeeded is not reported as failed. Returns True if the manifest was saved.
    """
    if config_path is not None:
        resolved = resolve_format(config_path, fmt)
    else:
        location = find_config_file(cwd or Path.cwd())
        if location is None:
            return False
        config_path, resolved = location.path, location.format

    try:
        config = load_config(config_path, resolved)
        if not config.save_in_config:
            return False

        action = sync_saved_file(config, config_path.parent, file_path)
        if action is None:
            return False

        save_config(config, config_path, resolved)
        logger.info("%s (%s)", action, config_path)
        return True
    except (OSError, ValueError) as e:
        logger.error("Error updating configuration %s: %s", config_path, e)
        return False


def refresh_saved_files(config: TodoConfig, config_dir: Path) -> tuple[bool, list[str]]:
    """Re-read every saved file from disk and update entries whose hash changed."""
    scanner = TodoScanner(config_dir)
    actions: list[str] = []
    changed = False

    saved_files = config.saved_files or []
    for i, saved in enumerate(saved_files):
        content = scanner.read_content(saved)
        if content is None:
            actions.append(f"File not found: {saved.name} in {saved.dir_relative_to_conf}")
            continue

        content_hash = generate_hash(content)
        if hashes_match(saved.hash, content_hash):
            continue

        saved_files[i] = saved.model_copy(update={"content": content, "hash": content_hash})
        actions.append(f"Updated: {saved.name} in {saved.dir_relative_to_conf}")
        changed = True

    return changed, actions


def add_scanned_files(config: TodoConfig, config_dir: Path) -> tuple[bool, list[str]]:
    """Track TODO files under config_dir that the manifest does not know about yet."""
    scanner = TodoScanner(config_dir)
    known = {saved.key() for saved in config.saved_files or []}
    actions: list[str] = []
    changed = False

    for found in scanner.scan(config.new_file_name):
        if found.key() in known:
            continue
        upsert_saved_file(config, found)
        actions.append(f"Added from scan: {found.name} in {found.dir_relative_to_conf}")
        changed = True

    if not changed:
        actions.append("No new files found during scan.")
    return changed, actions
