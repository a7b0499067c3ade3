"""Filesystem scanning for TODO files."""

from tadatodo.workspace.scanner import TodoScanner

__all__ = ["TodoScanner"]
