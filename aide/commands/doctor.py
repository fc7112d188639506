from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ..app import AideApp
from ..catalog import EntityCatalog
from ..core.resolution import IndexInvariantError, tokenize
from .output import error, ok as ok_line, warning


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def _document_frequency_mismatches(catalog: EntityCatalog) -> list[str]:
    index = catalog.index
    expected: Counter = Counter()
    for name in index.names:
        expected.update(set(tokenize(name)))
    mismatched = []
    for token, word_id in index.vocabulary.items():
        if index.document_frequencies[word_id] != expected.get(token, 0):
            mismatched.append(token)
    return mismatched


def _catalog_lines(catalog: EntityCatalog, stored: list[str]) -> tuple[bool, list[str]]:
    label = f"{catalog.kind.capitalize()} index"
    try:
        catalog.index.check_aligned()
    except IndexInvariantError as exc:
        return False, [error(label, str(exc))]

    indexed = catalog.names()
    stored_set = set(stored)
    missing = [name for name in stored if name not in catalog.index]
    extra = [name for name in indexed if name not in stored_set]
    if missing or extra:
        detail = f"{len(missing)} missing, {len(extra)} stale; restart to rebuild"
        return False, [error(label, detail)]

    bad_tokens = _document_frequency_mismatches(catalog)
    if bad_tokens:
        return False, [error(label, f"document frequency off for {', '.join(sorted(bad_tokens))}")]
    return True, [ok_line(label, f"{len(indexed)} name(s), {len(catalog.index.vocabulary)} token(s)")]


def run(app: AideApp) -> DoctorReport:
    checks: list[str] = []
    ok = True

    storage = app.settings.storage
    checks.append(ok_line("Database", str(storage.database_path)))
    if storage.data_dir.exists():
        checks.append(ok_line("Data directory", str(storage.data_dir)))
    else:
        checks.append(warning("Data directory", f"{storage.data_dir} missing; created on first write"))

    for catalog, stored in (
        (app.tasks, app.store.task_names()),
        (app.aides, app.store.aide_names()),
        (app.configs, app.store.config_keys()),
    ):
        healthy, lines = _catalog_lines(catalog, stored)
        ok = ok and healthy
        checks.extend(lines)

    return DoctorReport(ok=ok, checks=checks)
