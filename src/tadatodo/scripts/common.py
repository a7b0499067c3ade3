"""Manifest resolution and TODO file discovery shared by the commands."""

from __future__ import annotations

import logging
from pathlib import Path

from tadatodo.config import get_settings
from tadatodo.models import ConfigFormat
from tadatodo.stores.manifest import ConfigLocation, find_config_file, load_config, resolve_format
from tadatodo.workspace.scanner import TodoScanner

logger = logging.getLogger(__name__)

NO_CONFIG_MESSAGE = "No configuration file found. Run `tada-todo init` first."


def locate_config(
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
) -> ConfigLocation | None:
    """Use the explicit --config path if given, otherwise search upwards from cwd."""
    if config_path is not None:
        return ConfigLocation(config_path, resolve_format(config_path, fmt))
    return find_config_file(cwd)


def require_config(
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
) -> ConfigLocation:
    location = locate_config(cwd, config_path, fmt)
    if location is None:
        raise FileNotFoundError(NO_CONFIG_MESSAGE)
    return location


def find_todo_files(
    cwd: Path,
    config_path: Path | None = None,
    fmt: ConfigFormat | str | None = None,
    *,
    use_saved: bool = False,
) -> list[Path]:
    """Resolve which TODO files a command should edit.

    With use_saved, every saved file from the manifest that still exists on
    disk is returned. Otherwise, or when nothing is saved, only the
    configured TODO file in cwd is used. Without any manifest the default
    TODO file in cwd is the fallback.
    """
    settings = get_settings()
    location = locate_config(cwd, config_path, fmt)

    if location is None:
        default_path = cwd / settings.default_file_name
        if default_path.exists():
            return [default_path]
        raise FileNotFoundError(
            f"No configuration file found and no {settings.default_file_name} in "
            "current directory. Run `tada-todo init` first."
        )

    config = load_config(location.path, location.format)

    if use_saved and config.saved_files:
        scanner = TodoScanner(location.directory)
        paths = []
        for saved in config.saved_files:
            path = scanner.path_for(saved)
            if path.exists():
                paths.append(path)
            else:
                logger.warning("Saved file missing on disk: %s", path)
        return paths

    default_path = cwd / (config.new_file_name or settings.default_file_name)
    return [default_path] if default_path.exists() else []
