"""Line-oriented parser for dated TODO files.

A TODO file is an optional preamble, a run of ``## <date>`` sections holding
checklist items, then an optional ``---`` separator followed by footer text::

    ## March 5, 2024

    - [ ] open task
    - [x] finished task

    ---

    Footer text, never part of a section.

Only ``## `` headings whose text looks like a date open a section. Any other
``## `` heading is ordinary content of whichever section it sits in.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

HEADING_PREFIX = "## "

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DATE_PATTERNS = [
    # "March 5, 2024", "5 march"
    re.compile(rf"\b({'|'.join(MONTH_NAMES)})\b", re.IGNORECASE),
    # "5, 2024", "5 2024"
    re.compile(r"\b\d{1,2}[,\s]+\d{4}\b"),
    # "2024-03-05", "2024/3/5"
    re.compile(r"\b\d{4}[-/]\d{1,2}[-/]\d{1,2}\b"),
    # "03-05-2024", "3/5/2024"
    re.compile(r"\b\d{1,2}[-/]\d{1,2}[-/]\d{4}\b"),
]

OPEN_TASK_PREFIX = "- [ ]"
DONE_TASK_PREFIXES = ("- [x]", "- [X]")


@dataclass
class DateSection:
    """A date heading and the lines it owns."""

    heading: str  # heading text without the "## " marker
    start_line: int  # index of the heading line
    end_line: int  # exclusive: next date heading, separator, or end of file
    task_lines: list[str] = field(default_factory=list)

    @property
    def open_tasks(self) -> list[str]:
        return [line for line in self.task_lines if is_open_task(line)]

    @property
    def done_tasks(self) -> list[str]:
        return [line for line in self.task_lines if is_done_task(line)]


def heading_text(line: str) -> str:
    """Return the text of a ``## `` heading line, stripped of the marker and whitespace."""
    return line[len(HEADING_PREFIX) :].strip()


def is_date_text(text: str) -> bool:
    """Check whether heading text looks like a date."""
    return any(pattern.search(text) for pattern in DATE_PATTERNS)


def is_date_heading(line: str) -> bool:
    """Check whether a line is a ``## `` heading whose text looks like a date."""
    if not line.startswith(HEADING_PREFIX):
        return False
    return is_date_text(heading_text(line))


def is_separator(line: str) -> bool:
    """A line of three or more hyphens ends the dated part of the file."""
    return line.strip().startswith("---")


def is_open_task(line: str) -> bool:
    return line.strip().startswith(OPEN_TASK_PREFIX)


def is_done_task(line: str) -> bool:
    return line.strip().startswith(DONE_TASK_PREFIXES)


def is_task(line: str) -> bool:
    return is_open_task(line) or is_done_task(line)


def heading_pattern(date: str) -> re.Pattern[str]:
    """Pattern matching exactly ``## <date>``, ignoring trailing whitespace."""
    return re.compile(rf"^## {re.escape(date)}\s*$")


def dated_part_end(lines: list[str]) -> int:
    """Index of the first separator line, or len(lines) when there is none."""
    for i, line in enumerate(lines):
        if is_separator(line):
            return i
    return len(lines)


def find_heading_index(lines: list[str], date: str) -> int | None:
    """Return the index of the ``## <date>`` heading line, or None if absent.

    Only the dated part above the separator is searched; a matching line in
    the footer does not count.
    """
    pattern = heading_pattern(date)
    for i, line in enumerate(lines[: dated_part_end(lines)]):
        if pattern.match(line):
            return i
    return None


def list_date_headings(lines: list[str]) -> list[str]:
    """Return the text of every date heading above the separator, in file order."""
    return [heading_text(line) for line in lines[: dated_part_end(lines)] if is_date_heading(line)]


def iter_sections(lines: list[str]) -> list[DateSection]:
    """Split lines into date sections in file order.

    Scanning stops at the first separator line; everything after it is footer.
    """
    sections: list[DateSection] = []
    current: DateSection | None = None

    for i, line in enumerate(lines):
        if is_date_heading(line):
            if current is not None:
                current.end_line = i
                sections.append(current)
            current = DateSection(heading=heading_text(line), start_line=i, end_line=len(lines))
        elif current is not None and is_task(line):
            current.task_lines.append(line)
        elif is_separator(line):
            if current is not None:
                current.end_line = i
                sections.append(current)
                current = None
            break

    if current is not None:
        sections.append(current)

    return sections


def parse_sections(lines: list[str]) -> dict[str, DateSection]:
    """Map heading text to its section.

    When the same heading appears more than once the first occurrence wins;
    later duplicates are logged and otherwise ignored.
    """
    sections: dict[str, DateSection] = {}
    for section in iter_sections(lines):
        if section.heading in sections:
            logger.warning(
                "Duplicate date heading %r at line %d ignored (first seen at line %d)",
                section.heading,
                section.start_line + 1,
                sections[section.heading].start_line + 1,
            )
            continue
        sections[section.heading] = section
    return sections
