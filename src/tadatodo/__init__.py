"""tada-todo: manage dated TODO files in a repo."""

__version__ = "1.0.0"
