"""Parsing and structural editing of dated TODO files."""

from tadatodo.todo.editor import (
    add_date_heading,
    add_task_to_date,
    insert_heading,
    insert_task,
    migrate_unresolved,
    move_unresolved_tasks,
)
from tadatodo.todo.parser import is_date_heading, parse_sections

__all__ = [
    "add_date_heading",
    "add_task_to_date",
    "insert_heading",
    "insert_task",
    "is_date_heading",
    "migrate_unresolved",
    "move_unresolved_tasks",
    "parse_sections",
]
