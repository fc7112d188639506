from __future__ import annotations

import logging

from ..app import AideApp

logger = logging.getLogger(__name__)


def clear(app: AideApp, *, assume_yes: bool = False) -> bool:
    if not assume_yes:
        choice = app.prompt_io.input(
            "This deletes all tasks, aides, data and config values. Continue? [y/N]: "
        )
        if choice.strip().lower() not in {"y", "yes"}:
            app.prompt_io.print("Operation cancelled.")
            return False
    app.store.clear_all()
    app.rebuild_indexes()
    logger.info("Cleared all stored data")
    app.prompt_io.print("All data cleared successfully!")
    return True
