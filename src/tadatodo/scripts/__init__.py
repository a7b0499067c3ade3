"""Command implementations for the tada-todo CLI."""
