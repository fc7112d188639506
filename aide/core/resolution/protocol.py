"""
Turn a match outcome into a decision for the caller.

Two intents are supported:

- lookup: the operation needs an entity that already exists (update,
  delete, edit, add data, get). A declined suggestion aborts.
- creation: the operation may create the entity (new task, new aide, set
  a new config key). A declined suggestion creates a new entity under the
  typed name instead of touching the suggested one.

Confirmation goes through a ``Confirmer`` so the flow can run without a
terminal.
"""

from __future__ import annotations

from typing import Protocol

from .models import (
    Abort,
    AbortReason,
    CreateNew,
    Decision,
    ExactMatch,
    MatchOutcome,
    Proceed,
    Suggestion,
)
from .resolver import FUZZY_MATCH_THRESHOLD


class Confirmer(Protocol):
    def confirm(self, original: str, suggested: str) -> bool: ...


def _confirmable(outcome: MatchOutcome, threshold: float) -> bool:
    return isinstance(outcome, Suggestion) and outcome.score >= threshold


def decide_lookup(
    requested: str,
    outcome: MatchOutcome,
    confirmer: Confirmer,
    *,
    threshold: float = FUZZY_MATCH_THRESHOLD,
) -> Decision:
    if isinstance(outcome, ExactMatch):
        return Proceed(outcome.name)
    if _confirmable(outcome, threshold):
        if confirmer.confirm(requested, outcome.name):
            return Proceed(outcome.name)
        return Abort(requested, AbortReason.DECLINED)
    return Abort(requested, AbortReason.NOT_FOUND)


def decide_creation(
    requested: str,
    outcome: MatchOutcome,
    confirmer: Confirmer,
    *,
    threshold: float = FUZZY_MATCH_THRESHOLD,
) -> Decision:
    if isinstance(outcome, ExactMatch):
        return Proceed(outcome.name)
    if _confirmable(outcome, threshold) and confirmer.confirm(requested, outcome.name):
        return Proceed(outcome.name)
    return CreateNew(requested)
