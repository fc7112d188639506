"""
Outcomes of name resolution.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True, slots=True)
class ExactMatch:
    """The typed name is indexed verbatim."""

    name: str


@dataclass(frozen=True, slots=True)
class Suggestion:
    """Best-scoring indexed name that is not an exact match."""

    name: str
    score: float


@dataclass(frozen=True, slots=True)
class NoMatch:
    """Nothing in the index reached the threshold."""


MatchOutcome = Union[ExactMatch, Suggestion, NoMatch]


class AbortReason(str, Enum):
    NOT_FOUND = "not_found"
    DECLINED = "declined"


@dataclass(frozen=True, slots=True)
class Proceed:
    """Continue with an existing entity."""

    name: str


@dataclass(frozen=True, slots=True)
class CreateNew:
    """Create a new entity under this name."""

    name: str


@dataclass(frozen=True, slots=True)
class Abort:
    """Stop the operation; ``requested`` is what the user typed."""

    requested: str
    reason: AbortReason


Decision = Union[Proceed, CreateNew, Abort]
