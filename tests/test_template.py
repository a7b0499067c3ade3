"""Tests for new TODO file content."""

from datetime import date

from tadatodo.models import TodoConfig
from tadatodo.todo.parser import is_date_heading, parse_sections
from tadatodo.todo.template import create_todo_file, generate_todo_content, readable_date


class TestReadableDate:
    def test_format(self):
        assert readable_date(date(2026, 10, 18)) == "October 18, 2026"

    def test_single_digit_day(self):
        assert readable_date(date(2024, 3, 5)) == "March 5, 2024"

    def test_defaults_to_today(self):
        assert is_date_heading(f"## {readable_date()}")


class TestGenerateTodoContent:
    def test_structure(self):
        content = generate_todo_content("March 5, 2024")
        lines = content.split("\n")
        assert lines[0] == "## March 5, 2024"
        assert "---" in lines
        assert content.endswith("Generated on March 5, 2024 by tada-todo CLI.\n")

    def test_sample_tasks_belong_to_heading(self):
        sections = parse_sections(generate_todo_content("March 5, 2024").split("\n"))
        assert sections["March 5, 2024"].open_tasks == ["- [ ] This is a task that needs done."]
        assert sections["March 5, 2024"].done_tasks == ["- [x] This task is finished."]


class TestCreateTodoFile:
    def test_creates_file(self, tmp_path):
        created, actions = create_todo_file(TodoConfig(), tmp_path, tmp_path)
        assert created is True
        assert (tmp_path / "TODO.md").read_text().startswith("## ")
        assert actions == [f"CREATED: TODO.md in {tmp_path}"]

    def test_existing_file_untouched(self, tmp_path):
        (tmp_path / "TODO.md").write_text("mine")
        created, actions = create_todo_file(TodoConfig(), tmp_path, tmp_path)
        assert created is False
        assert (tmp_path / "TODO.md").read_text() == "mine"
        assert actions[0].startswith("SKIP")

    def test_tracks_file_when_saving(self, tmp_path):
        sub = tmp_path / "service"
        sub.mkdir()
        config = TodoConfig(new_file_name="TASKS.md", save_in_config=True)

        create_todo_file(config, sub, tmp_path)

        (saved,) = config.saved_files
        assert (saved.name, saved.dir_relative_to_conf) == ("TASKS.md", "service")
        assert saved.content == (sub / "TASKS.md").read_text()

    def test_not_tracked_without_saving(self, tmp_path):
        config = TodoConfig()
        create_todo_file(config, tmp_path, tmp_path)
        assert config.saved_files is None
