"""Structural edits on dated TODO files.

Every edit has a pure form working on a list of lines and a file form that
reads the whole file, applies the pure edit and writes the result back once.
Edits that need a heading first (adding a task, moving tasks) insert it in
memory and keep working on the returned lines, so nothing is written until
the final content is known.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tadatodo.fileio import atomic_write_text
from tadatodo.todo.parser import (
    HEADING_PREFIX,
    OPEN_TASK_PREFIX,
    DateSection,
    find_heading_index,
    is_date_heading,
    is_date_text,
    is_done_task,
    is_open_task,
    is_separator,
    iter_sections,
    list_date_headings,
    parse_sections,
)

logger = logging.getLogger(__name__)

# A suggestion must share more than this fraction of words with the requested date
SUGGESTION_THRESHOLD = 0.3


@dataclass
class TaskInsertion:
    """Outcome of adding a task under a date heading."""

    lines: list[str]
    inserted: bool
    created_heading: bool = False
    suggestion: str | None = None  # nearest existing date when the heading was missing


@dataclass
class Migration:
    """Outcome of moving unresolved tasks into a target date section."""

    lines: list[str]
    moved: int
    created_heading: bool = False


def read_lines(path: Path) -> list[str]:
    """Read a TODO file as a list of lines without terminators."""
    return path.read_text(encoding="utf-8").split("\n")


def write_lines(path: Path, lines: list[str]) -> None:
    atomic_write_text(path, "\n".join(lines))


# --- Heading insertion ---


def insert_heading(lines: list[str], date: str) -> tuple[list[str], bool]:
    """Insert ``## <date>`` above the first date heading or separator.

    Returns the new lines and whether a heading was inserted. The input list
    is never modified.
    """
    if find_heading_index(lines, date) is not None:
        return lines, False

    insert_at = 0
    for i, line in enumerate(lines):
        if is_date_heading(line) or is_separator(line):
            insert_at = i
            break

    new_lines = [*lines[:insert_at], f"{HEADING_PREFIX}{date}", "", "", *lines[insert_at:]]
    return new_lines, True


def add_date_heading(path: Path, date: str) -> bool:
    """Add a date heading to a TODO file. Returns True if the file was written."""
    lines = read_lines(path)
    new_lines, inserted = insert_heading(lines, date)
    if not inserted:
        logger.debug("Heading %r already present in %s", date, path)
        return False
    write_lines(path, new_lines)
    logger.info("Added heading %r to %s", date, path)
    return True


# --- Task insertion ---


def find_closest_date(target: str, candidates: list[str]) -> str | None:
    """Pick the candidate sharing the most words with target.

    Score is common words over the longer word count; only a best score above
    SUGGESTION_THRESHOLD yields a suggestion.
    """
    target_words = target.lower().split()
    if not target_words:
        return None

    best_match: str | None = None
    best_score = 0.0
    for candidate in candidates:
        candidate_words = candidate.lower().split()
        common = [word for word in target_words if word in candidate_words]
        score = len(common) / max(len(target_words), len(candidate_words))
        if score > best_score:
            best_score = score
            best_match = candidate

    return best_match if best_score > SUGGESTION_THRESHOLD else None


def insert_task(
    lines: list[str],
    task: str,
    date: str,
    *,
    auto_create: bool = True,
) -> TaskInsertion:
    """Insert ``- [ ] <task>`` as the first task under ``## <date>``."""
    heading_idx = find_heading_index(lines, date)
    created = False

    if heading_idx is None:
        if not auto_create:
            suggestion = find_closest_date(date, list_date_headings(lines))
            return TaskInsertion(lines=lines, inserted=False, suggestion=suggestion)

        lines, created = insert_heading(lines, date)
        heading_idx = find_heading_index(lines, date)
        if heading_idx is None:
            raise RuntimeError(f"Failed to create date heading {date!r}")

    new_lines = list(lines)
    insert_at = heading_idx + 1

    # Keep one blank line between the heading and its first task
    if insert_at < len(new_lines) and new_lines[insert_at].strip() != "":
        new_lines.insert(insert_at, "")
        insert_at += 1
    elif insert_at < len(new_lines):
        insert_at += 1
    else:
        new_lines.append("")
        insert_at += 1

    new_lines.insert(insert_at, f"{OPEN_TASK_PREFIX} {task}")
    return TaskInsertion(lines=new_lines, inserted=True, created_heading=created)


def add_task_to_date(
    path: Path,
    task: str,
    date: str,
    *,
    auto_create: bool = True,
) -> TaskInsertion:
    """Add a task to a TODO file, writing it only when the task was inserted."""
    result = insert_task(read_lines(path), task, date, auto_create=auto_create)
    if not result.inserted:
        logger.info("Date %r not found in %s (suggestion: %s)", date, path, result.suggestion)
        return result
    write_lines(path, result.lines)
    if result.created_heading:
        logger.info("Created heading %r in %s", date, path)
    logger.info("Added task %r under %r in %s", task, date, path)
    return result


# --- Unresolved task migration ---


def _drop_trailing_blanks(lines: list[str]) -> None:
    while lines and lines[-1].strip() == "":
        lines.pop()


def _collect_open_tasks(lines: list[str], target_date: str) -> tuple[list[str], set[int]]:
    """Return unresolved tasks outside the target and the start lines of their sections.

    Only the first section of each heading takes part; later duplicates are
    left as they are.
    """
    tasks: list[str] = []
    starts: set[int] = set()
    for section in parse_sections(lines).values():
        if section.heading == target_date:
            continue
        open_tasks = section.open_tasks
        if open_tasks:
            tasks.extend(open_tasks)
            starts.add(section.start_line)
    return tasks, starts


def _first_section(sections: list[DateSection], heading: str) -> DateSection | None:
    for section in sections:
        if section.heading == heading:
            return section
    return None


def migrate_unresolved(lines: list[str], target_date: str) -> Migration:
    """Move every unresolved task from other date sections into target_date.

    Moved tasks keep file order and go above the target's existing lines.
    Resolved tasks stay where they are; a section left without any resolved
    task is removed along with its heading. Later duplicates of a heading are
    copied through unchanged.
    """
    if not is_date_text(target_date):
        raise ValueError(f"{target_date!r} is not recognised as a date heading")

    tasks_to_move, to_clean = _collect_open_tasks(lines, target_date)
    if not tasks_to_move:
        return Migration(lines=lines, moved=0)

    created = False
    sections = iter_sections(lines)
    target = _first_section(sections, target_date)
    if target is None:
        lines, created = insert_heading(lines, target_date)
        # Line offsets changed, so section state must be rebuilt from the new lines
        sections = iter_sections(lines)
        tasks_to_move, to_clean = _collect_open_tasks(lines, target_date)
        target = _first_section(sections, target_date)
    if target is None:
        raise ValueError(f"Could not place heading {target_date!r} above the separator")

    new_lines: list[str] = list(lines[: sections[0].start_line])
    for section in sections:
        heading_line = lines[section.start_line]
        body = lines[section.start_line + 1 : section.end_line]

        if section.start_line == target.start_line:
            new_lines.append(heading_line)
            if body and body[0].strip() == "":
                new_lines.append(body[0])
                body = body[1:]
            else:
                new_lines.append("")
            new_lines.extend(tasks_to_move)
            if body:
                new_lines.extend(body)
            else:
                # Keep the moved block apart from whatever follows
                new_lines.append("")
            continue

        if section.start_line not in to_clean:
            new_lines.extend(lines[section.start_line : section.end_line])
            continue

        kept = [heading_line]
        if body and body[0].strip() == "":
            kept.append(body[0])
            body = body[1:]
        has_done = False
        for line in body:
            if is_open_task(line):
                continue
            kept.append(line)
            if is_done_task(line):
                has_done = True

        if has_done:
            new_lines.extend(kept)
        else:
            logger.debug("Removing emptied section %r", section.heading)
            _drop_trailing_blanks(new_lines)
            if new_lines:
                new_lines.append("")

    new_lines.extend(lines[sections[-1].end_line :])
    return Migration(lines=new_lines, moved=len(tasks_to_move), created_heading=created)


def move_unresolved_tasks(path: Path, target_date: str) -> int:
    """Move unresolved tasks in a TODO file to target_date. Returns the number moved."""
    result = migrate_unresolved(read_lines(path), target_date)
    if result.moved == 0:
        logger.debug("No unresolved tasks to move in %s", path)
        return 0
    write_lines(path, result.lines)
    logger.info("Moved %d unresolved task(s) to %r in %s", result.moved, target_date, path)
    return result.moved
