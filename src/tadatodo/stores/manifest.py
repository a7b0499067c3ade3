"""Manifest file stored as tada-todo.json (JSON) or tada-todo.b (msgpack)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import msgpack
from pydantic import ValidationError

from tadatodo.config import get_settings
from tadatodo.fileio import atomic_write_bytes
from tadatodo.models import ConfigFormat, TodoConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigLocation:
    """Where a manifest lives and how it is encoded."""

    path: Path
    format: ConfigFormat

    @property
    def directory(self) -> Path:
        return self.path.parent


def config_filename(human_readable: bool) -> str:
    """Manifest file name for the chosen encoding."""
    settings = get_settings()
    return settings.json_config_name if human_readable else settings.binary_config_name


def resolve_format(path: Path, requested: ConfigFormat | str | None = None) -> ConfigFormat:
    """Resolve 'auto' (or nothing) from the file suffix: .json is JSON, anything else msgpack."""
    if requested is None or ConfigFormat(requested) == ConfigFormat.AUTO:
        return ConfigFormat.JSON if path.suffix == ".json" else ConfigFormat.MSGPACK
    return ConfigFormat(requested)


def find_config_file(start_dir: Path, max_depth: int | None = None) -> ConfigLocation | None:
    """Walk up from start_dir looking for a manifest.

    At each level the binary manifest is preferred over the JSON one.
    """
    settings = get_settings()
    if max_depth is None:
        max_depth = settings.config_search_depth

    current = start_dir.resolve()
    for _ in range(max_depth):
        binary_path = current / settings.binary_config_name
        if binary_path.exists():
            return ConfigLocation(binary_path, ConfigFormat.MSGPACK)

        json_path = current / settings.json_config_name
        if json_path.exists():
            return ConfigLocation(json_path, ConfigFormat.JSON)

        if current.parent == current:
            break
        current = current.parent

    return None


def load_config(path: Path, fmt: ConfigFormat | str | None = None) -> TodoConfig:
    """Read and validate a manifest.

    Raises FileNotFoundError when the file is missing and ValueError when it
    cannot be decoded.
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    resolved = resolve_format(path, fmt)
    try:
        raw = path.read_bytes()
        if resolved == ConfigFormat.JSON:
            data = json.loads(raw.decode("utf-8"))
        else:
            data = msgpack.unpackb(raw, raw=False)
        return TodoConfig.model_validate(data)
    except (
        json.JSONDecodeError,
        UnicodeDecodeError,
        msgpack.UnpackException,
        ValueError,
        ValidationError,
    ) as e:
        raise ValueError(f"Failed to parse configuration file: {e}") from e


def save_config(config: TodoConfig, path: Path, fmt: ConfigFormat | str | None = None) -> None:
    """Write a manifest using atomic write."""
    resolved = resolve_format(path, fmt)
    document = config.to_document()
    if resolved == ConfigFormat.JSON:
        payload = (json.dumps(document, indent=2) + "\n").encode("utf-8")
    else:
        payload = msgpack.packb(document, use_bin_type=True)

    atomic_write_bytes(path, payload)
    logger.debug("Saved %s manifest to %s", resolved, path)
