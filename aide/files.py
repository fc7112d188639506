from __future__ import annotations

import hashlib
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

MAX_BASENAME_BYTES = 255
DIGEST_LENGTH = 8
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)


def entity_filename(name: str, suffix: str = ".txt") -> str:
    """
    File name for an entity, with path separators replaced and the UTF-8 length capped.

    Whenever the name had to be altered, a short digest of the raw name is
    appended so two distinct names never share a file.
    """
    cleaned = name.replace(os.sep, "_")
    if os.altsep:
        cleaned = cleaned.replace(os.altsep, "_")
    cleaned = cleaned.strip() or "unnamed"
    if cleaned in {".", ".."}:
        cleaned = cleaned.replace(".", "_")
    allowed = MAX_BASENAME_BYTES - len(suffix.encode("utf-8"))
    encoded = cleaned.encode("utf-8")
    if cleaned == name and len(encoded) <= allowed:
        return f"{cleaned}{suffix}"

    tag = "-" + hashlib.sha1(name.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]
    allowed -= len(tag)
    if len(encoded) > allowed:
        cleaned = encoded[:allowed].decode("utf-8", errors="ignore")
    return f"{cleaned}{tag}{suffix}"


def task_log_path(tasks_dir: Path, name: str) -> Path:
    return tasks_dir / entity_filename(name)


def aide_document_path(data_dir: Path, name: str) -> Path:
    return data_dir / entity_filename(name)


def write_task_log_header(path: Path, name: str, status: str, priority: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"Task: {name}\nStatus: {status}\nPriority: {priority}\n"
        f"Created: {timestamp()}\n\n--- Task Log ---\n",
        encoding="utf-8",
    )


def append_task_log(path: Path, name: str, text: str) -> None:
    if path.exists():
        content = path.read_text(encoding="utf-8")
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        content = f"Task: {name}\n\n--- Task Log ---\n"
    content += f"\n[{timestamp()}] {text}"
    path.write_text(content, encoding="utf-8")


def ensure_aide_document(path: Path, name: str) -> bool:
    """Create the document with its header; returns True when it did not exist."""
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"# {name}\n\nCreated: {timestamp()}\n\n", encoding="utf-8")
    return True


def append_aide_entry(path: Path, name: str, content: str, stamp: str) -> None:
    ensure_aide_document(path, name)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{stamp}\n* {content}\n")


def remove_file(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
