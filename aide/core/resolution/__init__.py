"""
Fuzzy entity-name resolution.

This module handles:
- Name tokenization
- Incremental TF-IDF indexing of entity names
- String similarity scoring
- Resolving typed names to exact matches or suggestions
- Deciding whether to proceed, create or abort

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .models import (
    Abort,
    AbortReason,
    CreateNew,
    Decision,
    ExactMatch,
    MatchOutcome,
    NoMatch,
    Proceed,
    Suggestion,
)
from .protocol import Confirmer, decide_creation, decide_lookup
from .resolver import FUZZY_MATCH_THRESHOLD, resolve
from .similarity import string_similarity
from .tfidf import IndexInvariantError, TfIdfIndex, cosine_similarity
from .tokenizer import tokenize

__all__ = [
    "Abort",
    "AbortReason",
    "Confirmer",
    "CreateNew",
    "Decision",
    "ExactMatch",
    "FUZZY_MATCH_THRESHOLD",
    "IndexInvariantError",
    "MatchOutcome",
    "NoMatch",
    "Proceed",
    "Suggestion",
    "TfIdfIndex",
    "cosine_similarity",
    "decide_creation",
    "decide_lookup",
    "resolve",
    "string_similarity",
    "tokenize",
]
