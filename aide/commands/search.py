from __future__ import annotations

import re
import unicodedata
from difflib import SequenceMatcher
from typing import Callable, Optional

from ..app import AideApp
from ..store import DataEntry

MIN_SEARCH_RATIO = 0.3


def normalize_search_text(value: str) -> str:
    cleaned = unicodedata.normalize("NFKD", value)
    cleaned = cleaned.encode("ascii", "ignore").decode("ascii")
    cleaned = cleaned.lower()
    cleaned = re.sub(r"[^a-z0-9]+", " ", cleaned)
    return cleaned.strip()


def entry_similarity(query: str, text: str) -> Optional[float]:
    norm_query = normalize_search_text(query)
    norm_text = normalize_search_text(text)
    if not norm_query or not norm_text:
        return None
    if norm_query in norm_text:
        return 1.0
    return SequenceMatcher(None, norm_query, norm_text).ratio()


def input_text(entry: DataEntry) -> str:
    return entry.input_text


def command_text(entry: DataEntry) -> str:
    return f"{entry.aide_name} {entry.input_text}"


def best_entry(
    entries: list[DataEntry],
    query: str,
    text_of: Callable[[DataEntry], str] = input_text,
) -> Optional[tuple[float, DataEntry]]:
    best: Optional[tuple[float, DataEntry]] = None
    for entry in entries:
        score = entry_similarity(query, text_of(entry))
        if score is None or score < MIN_SEARCH_RATIO:
            continue
        if best is None or score > best[0]:
            best = (score, entry)
    return best


def _report(app: AideApp, query: str, match: Optional[tuple[float, DataEntry]]) -> Optional[DataEntry]:
    if match is None:
        app.prompt_io.print(f"No matches found for '{query}'")
        return None
    _score, entry = match
    app.prompt_io.print(f"Found match in aide '{entry.aide_name}': {entry.input_text}")
    app.prompt_io.print(f"Output: {entry.command_output}")
    return entry


def run(app: AideApp, query: str) -> Optional[DataEntry]:
    return _report(app, query, best_entry(app.store.list_data(), query))


def run_command(app: AideApp, query: str) -> Optional[DataEntry]:
    """Like ``run`` but matches against the aide name followed by the entry text."""
    return _report(app, query, best_entry(app.store.list_data(), query, command_text))
