from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..app import AideApp
from ..core.resolution import CreateNew, Proceed
from ..editor import open_in_editor
from ..files import aide_document_path, append_aide_entry, ensure_aide_document, remove_file, timestamp
from .lookup import existing_name

logger = logging.getLogger(__name__)

AIDE_TYPES = ("text", "file")


def create(app: AideApp, name: str, aide_type: str = "text") -> Optional[str]:
    if aide_type not in AIDE_TYPES:
        app.prompt_io.print("Error: aide_type must be 'text' or 'file'")
        return None
    decision = app.aides.for_creation(name, app.confirmer)
    if isinstance(decision, Proceed):
        if decision.name == name:
            app.prompt_io.print(f"Aide '{name}' already exists")
        else:
            app.prompt_io.print(f"Using existing aide '{decision.name}'")
        return decision.name
    if not isinstance(decision, CreateNew):
        return None
    if not app.store.create_aide(decision.name, aide_type):
        logger.warning("Aide %r already stored; refreshing index", decision.name)
        app.aides.record_created(decision.name)
        app.prompt_io.print(f"Aide '{decision.name}' already exists")
        return decision.name
    app.aides.record_created(decision.name)
    app.prompt_io.print(f"Aide '{decision.name}' of type '{aide_type}' created successfully")
    return decision.name


def add(
    app: AideApp,
    name: str,
    data: Optional[str] = None,
    path: Optional[Path] = None,
) -> Optional[str]:
    if data is not None and path is not None:
        app.prompt_io.print("Error: Cannot specify both data and path. Use either content or -p flag.")
        return None
    if data is None and path is None:
        app.prompt_io.print("Error: Must provide either content data or -p flag with file path.")
        return None

    target = existing_name(app, app.aides, name, "Aide")
    if target is None:
        return None

    if path is not None:
        try:
            content = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            app.prompt_io.print(f"Error reading file '{path}': {exc}")
            return None
        app.prompt_io.print(f"Reading content from file: {path}")
    else:
        content = data or ""

    record = app.store.get_aide(target)
    if record is None:
        app.prompt_io.print(f"Aide '{target}' not found in database")
        return None

    stamp = timestamp()
    if record.aide_type == "file":
        document = aide_document_path(app.settings.storage.data_dir, target)
        append_aide_entry(document, target, content, stamp)
        app.prompt_io.print(f"Data appended to file: {document}")

    app.store.add_data(record.id, content, f"[{stamp}] {content}")
    if path is not None:
        app.prompt_io.print(f"File content added successfully to aide '{target}'")
    else:
        app.prompt_io.print(f"Data added successfully to aide '{target}'")
    return target


def write(app: AideApp, name: str) -> Optional[str]:
    target = existing_name(app, app.aides, name, "Aide")
    if target is None:
        return None
    record = app.store.get_aide(target)
    if record is None:
        app.prompt_io.print(f"Aide '{target}' not found in database")
        return None
    if record.aide_type != "file":
        app.prompt_io.print(
            f"Error: 'write' command only works with file type aides. "
            f"'{target}' is a {record.aide_type} type aide."
        )
        app.prompt_io.print(f"Use 'aide add {target}' to add content to text aides.")
        return None
    document = aide_document_path(app.settings.storage.data_dir, target)
    if ensure_aide_document(document, target):
        app.prompt_io.print(f"Created new file: {document}")
    if not open_in_editor(document, app.settings.editor.candidates):
        app.prompt_io.print(f"File is located at: {document}")
    return target


def delete(app: AideApp, name: str) -> Optional[str]:
    target = existing_name(app, app.aides, name, "Aide")
    if target is None:
        return None
    record = app.store.get_aide(target)
    if not app.store.delete_aide(target):
        app.prompt_io.print(f"Aide '{target}' not found in database")
        return None
    app.aides.record_removed(target)
    if record is not None and record.aide_type == "file":
        remove_file(aide_document_path(app.settings.storage.data_dir, target))
    app.prompt_io.print(f"Aide '{target}' deleted")
    return target


def list_aides(app: AideApp) -> None:
    app.prompt_io.print("Aides:")
    app.prompt_io.print("------")
    for aide in app.store.list_aides():
        app.prompt_io.print(f"{aide.name} | Type: {aide.aide_type} | Data entries: {aide.data_count}")
