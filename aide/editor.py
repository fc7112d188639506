from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


def find_editor(candidates: Sequence[str]) -> Optional[str]:
    """First available editor from ``candidates``, then ``$EDITOR``."""
    for candidate in candidates:
        if shutil.which(candidate):
            return candidate
    return os.environ.get("EDITOR") or None


def open_in_editor(path: Path, candidates: Sequence[str]) -> bool:
    editor = find_editor(candidates)
    if not editor:
        logger.warning(
            "No suitable editor found (tried %s and $EDITOR); file is at %s",
            ", ".join(candidates),
            path,
        )
        return False
    logger.info("Opening %s with %s", path, editor)
    try:
        result = subprocess.run([editor, str(path)], check=False)
    except OSError as exc:
        logger.warning("Failed to start %s: %s; file is at %s", editor, exc, path)
        return False
    if result.returncode != 0:
        logger.warning("Editor %s exited with status %d", editor, result.returncode)
        return False
    return True
