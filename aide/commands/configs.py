from __future__ import annotations

from typing import Optional

from ..app import AideApp
from ..core.resolution import CreateNew, Proceed
from .lookup import existing_name


def set_value(app: AideApp, key: str, value: str) -> Optional[str]:
    decision = app.configs.for_creation(key, app.confirmer)
    if isinstance(decision, Proceed):
        app.store.set_config(decision.name, value)
        app.prompt_io.print(f"Config '{decision.name}' updated to '{value}'")
        return decision.name
    if isinstance(decision, CreateNew):
        app.store.set_config(decision.name, value)
        app.configs.record_created(decision.name)
        app.prompt_io.print(f"Config '{decision.name}' set to '{value}'")
        return decision.name
    return None


def get_value(app: AideApp, key: str) -> Optional[str]:
    target = existing_name(app, app.configs, key, "Config key")
    if target is None:
        return None
    value = app.store.get_config(target)
    if value is None:
        app.prompt_io.print(f"Config key '{target}' not found in database")
        return None
    app.prompt_io.print(f"{target} = {value}")
    return value


def delete(app: AideApp, key: str) -> Optional[str]:
    target = existing_name(app, app.configs, key, "Config key")
    if target is None:
        return None
    if not app.store.delete_config(target):
        app.prompt_io.print(f"Config key '{target}' not found in database")
        return None
    app.configs.record_removed(target)
    app.prompt_io.print(f"Config key '{target}' deleted")
    return target


def list_values(app: AideApp) -> None:
    entries = app.store.list_config()
    if not entries:
        app.prompt_io.print("No configuration values set.")
        return
    app.prompt_io.print("Configuration:")
    app.prompt_io.print("--------------")
    for key, value in entries:
        app.prompt_io.print(f"{key} = {value}")
