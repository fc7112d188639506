from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .app import AideApp
from .commands import aides as cmd_aides
from .commands import configs as cmd_configs
from .commands import doctor as cmd_doctor
from .commands import maintenance as cmd_maintenance
from .commands import search as cmd_search
from .commands import tasks as cmd_tasks
from .config import Settings, find_config

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        self.roots = [str(root) for root in roots if root]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for root in self.roots:
            message = message.replace(f"{root}/", "")
        return message


class ColorFormatter(ShortPathFormatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Personal task and note manager")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="Create a new aide")
    create_parser.add_argument("name")
    create_parser.add_argument("--type", dest="aide_type", choices=cmd_aides.AIDE_TYPES, default="text")

    add_parser = subparsers.add_parser("add", help="Add data to an aide")
    add_parser.add_argument("name")
    add_parser.add_argument("data", nargs="?", default=None)
    add_parser.add_argument(
        "-p", "--path", type=Path, default=None,
        help="Read content from file path instead of using data argument",
    )

    write_parser = subparsers.add_parser("write", help="Open a file aide in an editor")
    write_parser.add_argument("name")
    aide_delete_parser = subparsers.add_parser("aide-delete", help="Delete an aide and its data")
    aide_delete_parser.add_argument("name")
    subparsers.add_parser("aide-list", help="List all aides")

    set_parser = subparsers.add_parser("set", help="Set a configuration value")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    get_parser = subparsers.add_parser("get", help="Get a configuration value")
    get_parser.add_argument("key")
    config_delete_parser = subparsers.add_parser("config-delete", help="Delete a configuration key")
    config_delete_parser.add_argument("key")
    subparsers.add_parser("config-list", help="List all configuration keys and values")

    search_parser = subparsers.add_parser("search", help="Search stored data by input text")
    search_parser.add_argument("text")
    command_parser = subparsers.add_parser("command", help="Search stored data by aide name and input text")
    command_parser.add_argument("text")

    task_parser = subparsers.add_parser("task", help="Create or open a task")
    task_parser.add_argument("name")
    task_parser.add_argument("--no-edit", action="store_true", help="Do not open the task log in an editor")
    status_parser = subparsers.add_parser("task-status", help="Change task status")
    status_parser.add_argument("name")
    status_parser.add_argument("status")
    priority_parser = subparsers.add_parser("task-priority", help="Change task priority")
    priority_parser.add_argument("name")
    priority_parser.add_argument("priority", type=int)
    log_parser = subparsers.add_parser("task-log", help="Add a log entry to a task")
    log_parser.add_argument("name")
    log_parser.add_argument("text")
    edit_parser = subparsers.add_parser("task-edit", help="Open a task log in an editor")
    edit_parser.add_argument("name")
    task_delete_parser = subparsers.add_parser("task-delete", help="Delete a task")
    task_delete_parser.add_argument("name")
    subparsers.add_parser("task-list", help="List all tasks")

    clear_parser = subparsers.add_parser("clear", help="Delete all stored data")
    clear_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    reset_parser = subparsers.add_parser("reset", help="Delete all stored data (same as clear)")
    reset_parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    subparsers.add_parser("doctor", help="Check storage and index consistency")
    return parser


def configure_logging(level_name: str, settings: Settings) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    display_roots = [settings.storage.data_dir]

    color_handler = logging.StreamHandler()
    color_handler.setFormatter(ColorFormatter(LOG_FORMAT, display_roots))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(ShortPathFormatter(LOG_FORMAT, display_roots))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.load(find_config(args.config))
    warn_buffer = configure_logging(args.log_level, settings)

    app = AideApp.create(settings)
    try:
        match args.command:
            case "create":
                cmd_aides.create(app, args.name, args.aide_type)
            case "add":
                cmd_aides.add(app, args.name, data=args.data, path=args.path)
            case "write":
                cmd_aides.write(app, args.name)
            case "aide-delete":
                cmd_aides.delete(app, args.name)
            case "aide-list":
                cmd_aides.list_aides(app)
            case "set":
                cmd_configs.set_value(app, args.key, args.value)
            case "get":
                cmd_configs.get_value(app, args.key)
            case "config-delete":
                cmd_configs.delete(app, args.key)
            case "config-list":
                cmd_configs.list_values(app)
            case "search":
                cmd_search.run(app, args.text)
            case "task":
                cmd_tasks.create(app, args.name, edit=not args.no_edit)
            case "task-status":
                cmd_tasks.set_status(app, args.name, args.status)
            case "task-priority":
                cmd_tasks.set_priority(app, args.name, args.priority)
            case "task-log":
                cmd_tasks.add_log(app, args.name, args.text)
            case "task-edit":
                cmd_tasks.edit(app, args.name)
            case "task-delete":
                cmd_tasks.delete(app, args.name)
            case "task-list":
                cmd_tasks.list_tasks(app)
            case "command":
                cmd_search.run_command(app, args.text)
            case "clear" | "reset":
                cmd_maintenance.clear(app, assume_yes=args.yes)
            case "doctor":
                report = cmd_doctor.run(app)
                for line in report.checks:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    finally:
        app.close()
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m")
            for line in warn_buffer.records:
                print(f" - {line}")
