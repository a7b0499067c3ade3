"""Filesystem access for TODO files tracked by a manifest."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from tadatodo.config import get_settings
from tadatodo.models import SavedFile
from tadatodo.stores.fingerprint import generate_hash

logger = logging.getLogger(__name__)


class TodoScanner:
    """Finds and reads TODO files below a manifest directory."""

    def __init__(
        self,
        root: Path,
        max_depth: int | None = None,
        exclude_dirs: list[str] | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            root: Directory holding the manifest; saved paths are relative to it.
            max_depth: How many directory levels below root to descend.
            exclude_dirs: Directory names never descended into.
        """
        settings = get_settings()
        self.root = root
        self.max_depth = settings.scan_max_depth if max_depth is None else max_depth
        self.exclude_dirs = set(exclude_dirs or settings.scan_exclude_dirs)

    def path_for(self, saved_file: SavedFile) -> Path:
        """Absolute location of a saved file."""
        return self.root / saved_file.dir_relative_to_conf / saved_file.name

    def exists(self, saved_file: SavedFile) -> bool:
        return self.path_for(saved_file).exists()

    def read_content(self, saved_file: SavedFile) -> str | None:
        """Read a saved file's current text, or None if it is missing or unreadable."""
        path = self.path_for(saved_file)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def scan(self, file_name: str) -> list[SavedFile]:
        """Find every file called file_name below root.

        Returns:
            SavedFile entries with current content and hash, in walk order.
        """
        found: list[SavedFile] = []
        self._scan_dir(self.root, 0, file_name, found)
        return found

    def _scan_dir(
        self, directory: Path, depth: int, file_name: str, found: list[SavedFile]
    ) -> None:
        if depth > self.max_depth:
            return
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return

        for entry in entries:
            try:
                if entry.is_dir():
                    if entry.name not in self.exclude_dirs:
                        self._scan_dir(Path(entry.path), depth + 1, file_name, found)
                elif entry.is_file() and entry.name == file_name:
                    content = Path(entry.path).read_text(encoding="utf-8")
                    relative = Path(os.path.relpath(directory, self.root)).as_posix()
                    found.append(
                        SavedFile(
                            name=file_name,
                            dir_relative_to_conf=relative,
                            content=content,
                            hash=generate_hash(content),
                        )
                    )
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Skipping %s: %s", entry.path, e)
