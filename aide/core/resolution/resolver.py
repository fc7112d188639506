"""
Resolve a typed name against one TF-IDF index.

Each candidate is scored with a weighted mix of the string heuristic and
the TF-IDF cosine similarity:

    score = 0.7 * string_similarity + 0.3 * cosine(query, candidate)

Only candidates scoring at least ``FUZZY_MATCH_THRESHOLD`` are eligible.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .models import ExactMatch, MatchOutcome, NoMatch, Suggestion
from .similarity import string_similarity
from .tfidf import TfIdfIndex, cosine_similarity

FUZZY_MATCH_THRESHOLD = 0.3
STRING_WEIGHT = 0.7
TFIDF_WEIGHT = 0.3


def combined_score(
    string_score: float,
    tfidf_score: float,
    *,
    string_weight: float = STRING_WEIGHT,
    tfidf_weight: float = TFIDF_WEIGHT,
) -> float:
    return string_score * string_weight + tfidf_score * tfidf_weight


def pick_suggestion(
    scored: Iterable[tuple[str, float]],
    threshold: float = FUZZY_MATCH_THRESHOLD,
) -> Optional[Suggestion]:
    """
    Highest-scoring candidate at or above ``threshold``.

    Candidates are visited in index order and only a strictly higher score
    replaces the current best, so the earliest candidate wins a tie.
    """
    best: Optional[Suggestion] = None
    for name, score in scored:
        if score < threshold:
            continue
        if best is None or score > best.score:
            best = Suggestion(name=name, score=score)
    return best


def score_candidates(
    value: str,
    index: TfIdfIndex,
    *,
    string_weight: float = STRING_WEIGHT,
    tfidf_weight: float = TFIDF_WEIGHT,
) -> list[tuple[str, float]]:
    """Combined score for every indexed name, in index order."""
    index.check_aligned()
    query = index.vector_for(value)
    scored = []
    for position, name in enumerate(index.names):
        tfidf_score = cosine_similarity(query, index.vector_at(position)) if query else 0.0
        scored.append(
            (
                name,
                combined_score(
                    string_similarity(value, name),
                    tfidf_score,
                    string_weight=string_weight,
                    tfidf_weight=tfidf_weight,
                ),
            )
        )
    return scored


def resolve(
    value: str,
    index: TfIdfIndex,
    *,
    threshold: float = FUZZY_MATCH_THRESHOLD,
    string_weight: float = STRING_WEIGHT,
    tfidf_weight: float = TFIDF_WEIGHT,
) -> MatchOutcome:
    """
    Map user input to an exact match, a suggestion or nothing.

    Exact matching is case-sensitive and unnormalized. The query vector is
    computed on the fly and never added to the index.
    """
    if value in index:
        return ExactMatch(name=value)
    if not len(index):
        return NoMatch()

    scored = score_candidates(
        value,
        index,
        string_weight=string_weight,
        tfidf_weight=tfidf_weight,
    )
    suggestion = pick_suggestion(scored, threshold)
    if suggestion is None:
        return NoMatch()
    return suggestion
