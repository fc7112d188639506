"""
Incremental TF-IDF index over entity names.

One index holds a single entity class (tasks, aides or config keys). It is
built once from the current name list and then kept in step with the store
through ``add_entity`` and ``remove_entity`` without a full rebuild.

Weights use normalized term frequency and a Laplace-smoothed IDF:

    weight(w) = tf(w) * ln(total_docs / (df(w) + 1))

The IDF may be negative for tokens that appear in nearly every name; that
is intended, such tokens are pushed down rather than ignored.

All functions are pure apart from the index's own state.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from .tokenizer import tokenize

logger = logging.getLogger(__name__)

SparseVector = dict[int, float]


class IndexInvariantError(RuntimeError):
    """Raised when the name list and vector list of an index disagree."""


def term_frequencies(tokens: Sequence[str], vocabulary: Mapping[str, int]) -> SparseVector:
    """
    Count vocabulary tokens and normalize by the full token sequence length.

    Tokens missing from the vocabulary still count towards the length. An
    empty sequence gives an empty mapping.
    """
    if not tokens:
        return {}
    counts: SparseVector = {}
    for token in tokens:
        word_id = vocabulary.get(token)
        if word_id is not None:
            counts[word_id] = counts.get(word_id, 0.0) + 1.0
    length = float(len(tokens))
    return {word_id: count / length for word_id, count in counts.items()}


def inverse_document_frequency(document_frequency: int, total_docs: int) -> float:
    if total_docs <= 0:
        return 0.0
    return math.log(total_docs / (document_frequency + 1))


def cosine_similarity(first: Mapping[int, float], second: Mapping[int, float]) -> float:
    """Normalized dot product of two sparse vectors, 0.0 when either norm is zero."""
    dot = 0.0
    norm_first = 0.0
    for key, value in first.items():
        dot += value * second.get(key, 0.0)
        norm_first += value * value
    norm_second = sum(value * value for value in second.values())
    if norm_first == 0.0 or norm_second == 0.0:
        return 0.0
    return dot / (math.sqrt(norm_first) * math.sqrt(norm_second))


@dataclass
class TfIdfIndex:
    """
    Vocabulary, document frequencies and per-name TF-IDF vectors.

    ``names`` and ``vectors`` are index-aligned: ``vectors[i]`` belongs to
    ``names[i]``. Vocabulary ids are assigned in first-seen order and are
    never reused, even after every name holding a token is removed.

    Usage:
        index = TfIdfIndex.build(["deploy staging", "deploy prod"])
        index.add_entity("fix login bug")
        vector = index.vector_for("deploy stagng")
    """

    vocabulary: dict[str, int] = field(default_factory=dict)
    """Token to dense id"""

    document_frequencies: list[int] = field(default_factory=list)
    """Number of names containing each vocabulary id"""

    vectors: list[SparseVector] = field(default_factory=list)
    """TF-IDF weights per name"""

    names: list[str] = field(default_factory=list)
    """Indexed names, in insertion order"""

    total_docs: int = 0
    """Corpus size used for IDF"""

    @classmethod
    def build(cls, names: Iterable[str]) -> "TfIdfIndex":
        """
        Build an index from scratch.

        Args:
            names: Entity names, unique, in the order they should be kept

        Returns:
            A populated index; an empty one when ``names`` is empty
        """
        index = cls()
        ordered = list(names)
        if not ordered:
            return index

        tokenized = [tokenize(name) for name in ordered]
        for tokens in tokenized:
            for token in tokens:
                if token not in index.vocabulary:
                    index.vocabulary[token] = len(index.vocabulary)

        index.document_frequencies = [0] * len(index.vocabulary)
        for tokens in tokenized:
            for token in set(tokens):
                index.document_frequencies[index.vocabulary[token]] += 1

        index.total_docs = len(ordered)
        index.names = ordered
        index.vectors = [index._weigh(tokens) for tokens in tokenized]
        logger.debug(
            "Built TF-IDF index: %d name(s), %d token(s)",
            index.total_docs,
            len(index.vocabulary),
        )
        return index

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def vector_for(self, text: str) -> SparseVector:
        """
        TF-IDF vector for arbitrary text against the current vocabulary.

        Tokens the index has never seen carry no weight. The index is not
        modified.
        """
        if not self.vocabulary:
            return {}
        return self._weigh(tokenize(text))

    def vector_at(self, position: int) -> SparseVector:
        self.check_aligned()
        return self.vectors[position]

    def add_entity(self, name: str) -> None:
        """
        Append one name without rebuilding.

        Weights for vocabulary ids created by this call are multiplied by
        their fresh IDF once more after the new vector is stored, leaving
        them at ``tf * idf ** 2``. Every other stored weight keeps the IDF it
        was computed with, so weights drift from a full rebuild as
        ``total_docs`` grows; exact lookups are unaffected. ``remove_entity``
        recomputes every vector and clears both effects.
        """
        if name in self.names:
            return

        tokens = tokenize(name)
        new_ids: list[int] = []
        for token in tokens:
            if token not in self.vocabulary:
                word_id = len(self.vocabulary)
                self.vocabulary[token] = word_id
                self.document_frequencies.append(0)
                new_ids.append(word_id)

        for token in set(tokens):
            self.document_frequencies[self.vocabulary[token]] += 1

        self.total_docs += 1
        self.vectors.append(self._weigh(tokens))
        self.names.append(name)

        if new_ids:
            self._refresh_ids(new_ids)
        self.check_aligned()
        logger.debug("Indexed %r (%d new token(s))", name, len(new_ids))

    def remove_entity(self, name: str) -> bool:
        """
        Drop one name and recompute every remaining vector.

        Returns:
            True if the name was indexed, False otherwise
        """
        try:
            position = self.names.index(name)
        except ValueError:
            return False

        for token in set(tokenize(name)):
            word_id = self.vocabulary.get(token)
            if word_id is not None:
                self.document_frequencies[word_id] -= 1

        del self.names[position]
        del self.vectors[position]
        self.total_docs -= 1
        self._recompute_all()
        self.check_aligned()
        logger.debug("Removed %r from index (%d left)", name, self.total_docs)
        return True

    def check_aligned(self) -> None:
        if len(self.names) != len(self.vectors):
            raise IndexInvariantError(
                f"index holds {len(self.names)} name(s) but {len(self.vectors)} vector(s)"
            )

    def _idf(self, word_id: int) -> float:
        return inverse_document_frequency(self.document_frequencies[word_id], self.total_docs)

    def _weigh(self, tokens: Sequence[str]) -> SparseVector:
        tf = term_frequencies(tokens, self.vocabulary)
        return {word_id: value * self._idf(word_id) for word_id, value in tf.items()}

    def _refresh_ids(self, word_ids: Sequence[int]) -> None:
        # Stored weights are scaled by the fresh IDF in place, so a new token
        # ends up weighted tf * idf ** 2 until the next full recompute.
        for vector in self.vectors:
            for word_id in word_ids:
                if word_id in vector:
                    vector[word_id] *= self._idf(word_id)

    def _recompute_all(self) -> None:
        self.vectors = [self._weigh(tokenize(name)) for name in self.names]

