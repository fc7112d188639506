from __future__ import annotations

import logging
from typing import Optional

from ..app import AideApp
from ..core.resolution import CreateNew, Proceed
from ..editor import open_in_editor
from ..files import append_task_log, remove_file, task_log_path, write_task_log_header
from .lookup import existing_name

logger = logging.getLogger(__name__)


def create(app: AideApp, name: str, *, edit: bool = True) -> Optional[str]:
    decision = app.tasks.for_creation(name, app.confirmer)
    if isinstance(decision, Proceed):
        if decision.name == name:
            app.prompt_io.print(f"Task '{name}' already exists. Opening task log file...")
        else:
            app.prompt_io.print(f"Opening existing task '{decision.name}'...")
        target = decision.name
    elif isinstance(decision, CreateNew):
        target = decision.name
        priority = app.settings.tasks.default_priority
        status = app.settings.tasks.statuses[0]
        log_path = task_log_path(app.settings.storage.tasks_dir, target)
        if app.store.create_task(target, priority, status, log_path):
            app.tasks.record_created(target)
            write_task_log_header(log_path, target, status, priority)
            app.prompt_io.print(f"Task '{target}' created successfully!")
        else:
            logger.warning("Task %r already stored; refreshing index", target)
            app.tasks.record_created(target)
    else:
        return None

    if edit:
        record = app.store.get_task(target)
        if record is not None:
            open_in_editor(record.log_path, app.settings.editor.candidates)
    return target


def set_status(app: AideApp, name: str, status: str) -> Optional[str]:
    statuses = app.settings.tasks.statuses
    if status not in statuses:
        app.prompt_io.print(f"Invalid status. Valid statuses are: {', '.join(statuses)}")
        return None
    target = existing_name(app, app.tasks, name, "Task")
    if target is None:
        return None
    if not app.store.set_task_status(target, status):
        app.prompt_io.print(f"Task '{target}' not found in database")
        return None
    app.prompt_io.print(f"Task '{target}' status updated to '{status}'")
    return target


def set_priority(app: AideApp, name: str, priority: int) -> Optional[str]:
    if priority < 1 or priority > 5:
        app.prompt_io.print("Invalid priority. Priority must be between 1 (highest) and 5 (lowest)")
        return None
    target = existing_name(app, app.tasks, name, "Task")
    if target is None:
        return None
    if not app.store.set_task_priority(target, priority):
        app.prompt_io.print(f"Task '{target}' not found in database")
        return None
    app.prompt_io.print(f"Task '{target}' priority updated to {priority}")
    return target


def add_log(app: AideApp, name: str, text: str) -> Optional[str]:
    target = existing_name(app, app.tasks, name, "Task")
    if target is None:
        return None
    record = app.store.get_task(target)
    if record is None:
        app.prompt_io.print(f"Task '{target}' not found in database")
        return None
    append_task_log(record.log_path, target, text)
    app.prompt_io.print(f"Log entry added to task '{target}'")
    return target


def edit(app: AideApp, name: str) -> Optional[str]:
    target = existing_name(app, app.tasks, name, "Task")
    if target is None:
        return None
    record = app.store.get_task(target)
    if record is None:
        app.prompt_io.print(f"Task '{target}' not found in database")
        return None
    if not open_in_editor(record.log_path, app.settings.editor.candidates):
        app.prompt_io.print(f"Task log file is at: {record.log_path}")
    return target


def delete(app: AideApp, name: str) -> Optional[str]:
    target = existing_name(app, app.tasks, name, "Task")
    if target is None:
        return None
    record = app.store.get_task(target)
    if not app.store.delete_task(target):
        app.prompt_io.print(f"Task '{target}' not found in database")
        return None
    app.tasks.record_removed(target)
    if record is not None:
        remove_file(record.log_path)
    app.prompt_io.print(f"Task '{target}' deleted")
    return target


def list_tasks(app: AideApp) -> None:
    app.prompt_io.print("Tasks:")
    app.prompt_io.print("------")
    for task in app.store.list_tasks():
        app.prompt_io.print(
            f"{task.name} | Priority: {task.priority} | Status: {task.status} | Created: {task.created_at}"
        )
