"""CLI entry point: python -m tadatodo (installed as `tada-todo`)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tadatodo import __version__
from tadatodo.config import get_settings
from tadatodo.models import ConfigFormat
from tadatodo.scripts.generate import generate_command
from tadatodo.scripts.init_config import init_command
from tadatodo.scripts.manage import add_date_command, add_task_command, move_tasks_command
from tadatodo.scripts.new_todo import new_command
from tadatodo.scripts.prune import prune_command
from tadatodo.scripts.update import update_command

logger = logging.getLogger("tadatodo")


def _add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=Path, default=None, help="Path to the configuration file")
    parser.add_argument(
        "--type",
        dest="fmt",
        choices=[f.value for f in ConfigFormat],
        default=ConfigFormat.AUTO.value,
        help="Configuration file type (default: auto)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tada-todo", description="A simple CLI to manage tasks in a repo"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Initialize a TODO configuration in this directory")
    init.add_argument(
        "--non-interactive", action="store_true", help="Use defaults without prompting"
    )
    init.add_argument("--options", help="Comma-separated key=value pairs for configuration")

    new = commands.add_parser("new", help="Create a new TODO file in the current directory")
    _add_config_options(new)

    generate = commands.add_parser(
        "generate", help="Generate all TODO files from the configuration"
    )
    _add_config_options(generate)

    update = commands.add_parser("update", help="Update saved files in configuration from disk")
    update.add_argument("file", nargs="?", help="Specific file to update")
    update.add_argument("--scan", action="store_true", help="Scan for TODO files not yet saved")
    _add_config_options(update)

    prune = commands.add_parser("prune", help="Remove saved files that no longer exist on disk")
    prune.add_argument(
        "--yes", "-y", action="store_true", help="Remove all missing files without prompting"
    )
    _add_config_options(prune)

    manage = commands.add_parser("manage", help="Manage TODO files and tasks")
    manage_commands = manage.add_subparsers(dest="manage_command", required=True)

    add_date = manage_commands.add_parser("add-date", help="Add a date heading (default: today)")
    add_date.add_argument("date", nargs="?")
    add_date.add_argument(
        "--global", dest="global_", action="store_true", help="Apply to all saved TODO files"
    )
    _add_config_options(add_date)

    add_task = manage_commands.add_parser(
        "add-task", help="Add a task under a date (default: today)"
    )
    add_task.add_argument("task")
    add_task.add_argument("date", nargs="?")
    add_task.add_argument(
        "--no-auto-create-date",
        dest="auto_create_date",
        action="store_false",
        help="Do not create the date heading if it is missing",
    )
    _add_config_options(add_task)

    move_tasks = manage_commands.add_parser(
        "move-tasks", help="Move unresolved tasks from other dates to one date (default: today)"
    )
    move_tasks.add_argument("date", nargs="?")
    move_tasks.add_argument(
        "--global", dest="global_", action="store_true", help="Apply to all saved TODO files"
    )
    _add_config_options(move_tasks)

    return parser


def run(args: argparse.Namespace, cwd: Path) -> list[str]:
    """Dispatch parsed arguments to a command and return its action lines."""
    if args.command == "init":
        return init_command(cwd=cwd, non_interactive=args.non_interactive, options=args.options)

    common = {"cwd": cwd, "config_path": args.config, "fmt": args.fmt}
    if args.command == "new":
        return new_command(**common)
    if args.command == "generate":
        return generate_command(**common)
    if args.command == "update":
        return update_command(args.file, scan=args.scan, **common)
    if args.command == "prune":
        return prune_command(assume_yes=args.yes, **common)

    if args.manage_command == "add-date":
        return add_date_command(args.date, global_=args.global_, **common)
    if args.manage_command == "add-task":
        return add_task_command(
            args.task, args.date, auto_create_date=args.auto_create_date, **common
        )
    return move_tasks_command(args.date, global_=args.global_, **common)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_settings().log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        actions = run(args, Path.cwd())
    except (OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    for action in actions:
        print(action)


if __name__ == "__main__":
    main()
