"""Tests for structural TODO file edits."""

from unittest.mock import patch

import pytest

from tadatodo.todo.editor import (
    add_date_heading,
    add_task_to_date,
    find_closest_date,
    insert_heading,
    insert_task,
    migrate_unresolved,
    move_unresolved_tasks,
)

JAN_1 = "January 1, 2024"
JAN_2 = "January 2, 2024"
JAN_3 = "January 3, 2024"


def _write(tmp_path, text, name="TODO.md"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


# --- Heading insertion ---


class TestInsertHeading:
    def test_inserts_before_first_date_heading(self):
        lines = ["## March 1, 2024", "", "- [ ] x"]
        new_lines, inserted = insert_heading(lines, "March 5, 2024")
        assert inserted is True
        assert new_lines == ["## March 5, 2024", "", "", "## March 1, 2024", "", "- [ ] x"]

    def test_inserts_after_preamble(self):
        lines = ["# My TODO", "", "## March 1, 2024", "- [ ] x"]
        new_lines, _ = insert_heading(lines, "March 5, 2024")
        assert new_lines[2:5] == ["## March 5, 2024", "", ""]
        assert new_lines[5] == "## March 1, 2024"

    def test_inserts_before_separator_when_no_dates(self):
        lines = ["# My TODO", "", "---", "footer"]
        new_lines, _ = insert_heading(lines, "March 5, 2024")
        assert new_lines == ["# My TODO", "", "## March 5, 2024", "", "", "---", "footer"]

    def test_skips_non_date_headings(self):
        lines = ["## Notes", "text", "## March 1, 2024"]
        new_lines, _ = insert_heading(lines, "March 5, 2024")
        assert new_lines.index("## March 5, 2024") == 2

    def test_top_of_file_when_nothing_found(self):
        new_lines, _ = insert_heading(["just text"], "March 5, 2024")
        assert new_lines == ["## March 5, 2024", "", "", "just text"]

    def test_existing_heading_unchanged(self):
        lines = ["## March 5, 2024  ", "", "- [ ] x"]
        new_lines, inserted = insert_heading(lines, "March 5, 2024")
        assert inserted is False
        assert new_lines == lines

    def test_idempotent(self):
        lines = ["## March 1, 2024", "", "- [ ] x"]
        once, _ = insert_heading(lines, "March 5, 2024")
        twice, inserted = insert_heading(once, "March 5, 2024")
        assert inserted is False
        assert twice == once

    def test_input_not_mutated(self):
        lines = ["## March 1, 2024"]
        insert_heading(lines, "March 5, 2024")
        assert lines == ["## March 1, 2024"]

    def test_heading_in_footer_does_not_count(self):
        lines = ["## March 1, 2024", "---", "## March 5, 2024"]
        new_lines, inserted = insert_heading(lines, "March 5, 2024")
        assert inserted is True
        assert new_lines[:3] == ["## March 5, 2024", "", ""]
        assert new_lines[-2:] == ["---", "## March 5, 2024"]


class TestAddDateHeading:
    def test_writes_file(self, tmp_path):
        path = _write(tmp_path, "## March 1, 2024\n\n- [ ] x\n")
        assert add_date_heading(path, "March 5, 2024") is True
        assert path.read_text() == "## March 5, 2024\n\n\n## March 1, 2024\n\n- [ ] x\n"

    def test_no_write_when_present(self, tmp_path):
        path = _write(tmp_path, "## March 1, 2024\n")
        mtime = path.stat().st_mtime_ns
        assert add_date_heading(path, "March 1, 2024") is False
        assert path.stat().st_mtime_ns == mtime

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            add_date_heading(tmp_path / "nope.md", "March 1, 2024")


# --- Task insertion ---


class TestFindClosestDate:
    def test_best_overlap(self):
        candidates = ["March 1, 2024", "March 5, 2024", "April 5, 2023"]
        assert find_closest_date("March 5, 2025", candidates) == "March 5, 2024"

    def test_below_threshold(self):
        assert find_closest_date("March 5, 2024", ["April 1, 2023"]) is None

    def test_case_insensitive(self):
        assert find_closest_date("march 5, 2024", ["March 5, 2024"]) == "March 5, 2024"

    def test_no_candidates(self):
        assert find_closest_date("March 5, 2024", []) is None

    def test_empty_target(self):
        assert find_closest_date("", ["March 5, 2024"]) is None

    def test_first_of_equal_scores_wins(self):
        assert find_closest_date("March 9, 2024", ["March 1, 2024", "March 2, 2024"]) == (
            "March 1, 2024"
        )


class TestInsertTask:
    def test_new_task_goes_first(self):
        lines = ["## March 1, 2024", "", "- [ ] old"]
        result = insert_task(lines, "new", "March 1, 2024")
        assert result.inserted is True
        assert result.lines == ["## March 1, 2024", "", "- [ ] new", "- [ ] old"]

    def test_adds_blank_line_when_heading_touches_content(self):
        lines = ["## March 1, 2024", "- [ ] old"]
        result = insert_task(lines, "new", "March 1, 2024")
        assert result.lines == ["## March 1, 2024", "", "- [ ] new", "- [ ] old"]

    def test_heading_on_last_line(self):
        result = insert_task(["## March 1, 2024"], "new", "March 1, 2024")
        assert result.lines == ["## March 1, 2024", "", "- [ ] new"]

    def test_auto_creates_heading(self):
        lines = ["## March 1, 2024", "", "- [ ] old"]
        result = insert_task(lines, "new", "March 5, 2024")
        assert result.inserted is True
        assert result.created_heading is True
        assert result.lines == [
            "## March 5, 2024",
            "",
            "- [ ] new",
            "",
            "## March 1, 2024",
            "",
            "- [ ] old",
        ]

    def test_missing_date_without_auto_create_suggests(self):
        lines = ["## March 1, 2024", "", "- [ ] old"]
        result = insert_task(lines, "new", "March 1, 2025", auto_create=False)
        assert result.inserted is False
        assert result.suggestion == "March 1, 2024"
        assert result.lines == lines

    def test_missing_date_without_suggestion(self):
        result = insert_task(["## March 1, 2024"], "new", "October 9, 1999", auto_create=False)
        assert result.inserted is False
        assert result.suggestion is None

    def test_other_sections_untouched(self):
        lines = ["## March 5, 2024", "", "- [ ] a", "", "## March 1, 2024", "", "- [ ] b"]
        result = insert_task(lines, "new", "March 1, 2024")
        assert result.lines[:5] == lines[:5]
        assert result.lines[6] == "- [ ] new"


class TestAddTaskToDate:
    def test_writes_file(self, tmp_path):
        path = _write(tmp_path, "## March 1, 2024\n\n- [ ] old\n")
        result = add_task_to_date(path, "new", "March 1, 2024")
        assert result.inserted
        assert path.read_text() == "## March 1, 2024\n\n- [ ] new\n- [ ] old\n"

    def test_no_write_when_date_missing(self, tmp_path):
        original = "## March 1, 2024\n\n- [ ] old\n"
        path = _write(tmp_path, original)
        result = add_task_to_date(path, "new", "March 2, 2024", auto_create=False)
        assert not result.inserted
        assert path.read_text() == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            add_task_to_date(tmp_path / "nope.md", "new", "March 1, 2024")


# --- Unresolved task migration ---


class TestMigrateUnresolved:
    def test_preserves_resolved_tasks(self):
        lines = [
            f"## {JAN_2}",
            "",
            f"## {JAN_1}",
            "",
            "- [x] done",
            "- [ ] pending",
            "",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] pending",
            "",
            f"## {JAN_1}",
            "",
            "- [x] done",
            "",
        ]

    def test_removes_emptied_section(self):
        lines = [
            f"## {JAN_2}",
            "",
            "- [ ] today",
            "",
            f"## {JAN_1}",
            "",
            "- [ ] pending",
            "",
            "---",
            "",
            "footer",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert f"## {JAN_1}" not in result.lines
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] pending",
            "- [ ] today",
            "",
            "---",
            "",
            "footer",
        ]

    def test_no_op_when_nothing_to_move(self):
        lines = [f"## {JAN_2}", "", "- [ ] today", "", f"## {JAN_1}", "", "- [x] done", ""]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 0
        assert result.lines == lines

    def test_idempotent(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "", "- [ ] a", "- [x] b", ""]
        first = migrate_unresolved(lines, JAN_2)
        second = migrate_unresolved(first.lines, JAN_2)
        assert first.moved == 1
        assert second.moved == 0
        assert second.lines == first.lines

    def test_collects_in_file_order_across_sections(self):
        lines = [
            f"## {JAN_3}",
            "",
            "- [ ] c1",
            "- [ ] c2",
            "",
            f"## {JAN_2}",
            "",
            "- [ ] b1",
            "",
            f"## {JAN_1}",
            "",
            "- [ ] a1",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 3
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] c1",
            "- [ ] c2",
            "- [ ] a1",
            "- [ ] b1",
            "",
        ]

    def test_creates_target_heading(self):
        lines = [f"## {JAN_1}", "", "- [x] done", "- [ ] pending", "", "---", "footer"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.created_heading is True
        assert result.moved == 1
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] pending",
            "",
            f"## {JAN_1}",
            "",
            "- [x] done",
            "",
            "---",
            "footer",
        ]

    def test_target_without_blank_line_gets_one(self):
        lines = [f"## {JAN_2}", "- [ ] today", f"## {JAN_1}", "- [x] done", "- [ ] pending"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] pending",
            "- [ ] today",
            f"## {JAN_1}",
            "- [x] done",
        ]

    def test_keeps_notes_in_cleaned_section_with_resolved_tasks(self):
        lines = [
            f"## {JAN_2}",
            "",
            f"## {JAN_1}",
            "",
            "Meeting notes",
            "- [ ] pending",
            "- [x] done",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.lines[-3:] == ["", "Meeting notes", "- [x] done"]

    def test_emptied_section_collapses_blank_lines(self):
        lines = [
            "# TODO",
            "",
            f"## {JAN_2}",
            "",
            "- [x] finished",
            "",
            "",
            f"## {JAN_1}",
            "",
            "- [ ] pending",
            "",
            f"## {JAN_3}",
            "",
            "- [x] kept",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.lines == [
            "# TODO",
            "",
            f"## {JAN_2}",
            "",
            "- [ ] pending",
            "- [x] finished",
            "",
            f"## {JAN_3}",
            "",
            "- [x] kept",
        ]

    def test_footer_tasks_untouched(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "- [ ] a", "---", "- [ ] footer task"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert result.lines[-2:] == ["---", "- [ ] footer task"]

    def test_non_date_subheading_stays_in_section(self):
        lines = [
            f"## {JAN_2}",
            "",
            f"## {JAN_1}",
            "",
            "- [x] done",
            "## Notes",
            "- [ ] under notes",
        ]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert result.lines.count("- [ ] under notes") == 1
        assert result.lines[2] == "- [ ] under notes"

    def test_target_heading_only_in_footer(self):
        lines = [f"## {JAN_1}", "- [ ] a", "---", f"## {JAN_2}"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert result.created_heading is True
        assert result.lines == [f"## {JAN_2}", "", "- [ ] a", "", "---", f"## {JAN_2}"]

    def test_later_duplicate_heading_left_alone(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "- [x] d", "", f"## {JAN_1}", "- [ ] dup"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 0
        assert result.lines == lines

    def test_only_first_duplicate_is_cleaned(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "- [ ] a", "", f"## {JAN_1}", "- [ ] dup"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.moved == 1
        assert result.lines == [
            f"## {JAN_2}",
            "",
            "- [ ] a",
            "",
            f"## {JAN_1}",
            "- [ ] dup",
        ]

    def test_moved_tasks_separated_from_next_heading(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "", "- [ ] a", "- [x] b"]
        result = migrate_unresolved(lines, JAN_2)
        assert result.lines[:5] == [f"## {JAN_2}", "", "- [ ] a", "", f"## {JAN_1}"]

    def test_target_must_look_like_a_date(self):
        with pytest.raises(ValueError):
            migrate_unresolved([f"## {JAN_1}", "- [ ] a"], "Backlog")

    def test_input_not_mutated(self):
        lines = [f"## {JAN_2}", "", f"## {JAN_1}", "- [ ] a"]
        snapshot = list(lines)
        migrate_unresolved(lines, JAN_2)
        assert lines == snapshot


class TestMoveUnresolvedTasks:
    def test_writes_file(self, tmp_path):
        path = _write(tmp_path, f"## {JAN_2}\n\n## {JAN_1}\n\n- [ ] pending\n")
        assert move_unresolved_tasks(path, JAN_2) == 1
        assert path.read_text() == f"## {JAN_2}\n\n- [ ] pending\n"

    def test_second_run_leaves_file_unchanged(self, tmp_path):
        path = _write(tmp_path, f"## {JAN_2}\n\n## {JAN_1}\n\n- [ ] pending\n- [x] done\n")
        move_unresolved_tasks(path, JAN_2)
        after_first = path.read_text()
        assert move_unresolved_tasks(path, JAN_2) == 0
        assert path.read_text() == after_first

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            move_unresolved_tasks(tmp_path / "nope.md", JAN_2)

    def test_failed_write_keeps_prior_content(self, tmp_path):
        original = f"## {JAN_2}\n\n## {JAN_1}\n\n- [ ] pending\n"
        path = _write(tmp_path, original)
        with patch("tadatodo.fileio.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                move_unresolved_tasks(path, JAN_2)
        assert path.read_text() == original
        assert list(tmp_path.glob("*.tmp")) == []
