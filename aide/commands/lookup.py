from __future__ import annotations

from typing import Optional

from ..app import AideApp
from ..catalog import EntityCatalog
from ..core.resolution import Abort, AbortReason, Proceed


def existing_name(app: AideApp, catalog: EntityCatalog, name: str, label: str) -> Optional[str]:
    """Resolve ``name`` to an existing entity, reporting why when it cannot."""
    decision = catalog.for_lookup(name, app.confirmer)
    if isinstance(decision, Proceed):
        return decision.name
    if isinstance(decision, Abort) and decision.reason is AbortReason.DECLINED:
        app.prompt_io.print("Operation cancelled.")
    else:
        app.prompt_io.print(f"{label} '{name}' not found.")
    return None
