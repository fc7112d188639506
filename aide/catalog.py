from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .config import ResolutionSettings
from .core.resolution import (
    Abort,
    Confirmer,
    Decision,
    MatchOutcome,
    TfIdfIndex,
    decide_creation,
    decide_lookup,
    resolve,
)

logger = logging.getLogger(__name__)


@dataclass
class EntityCatalog:
    """
    Resolution index for one entity kind (tasks, aides or config keys).

    The store stays the source of truth: callers write there first and then
    report the change with ``record_created``/``record_removed`` so the
    index never lags behind a mutation made in this session.
    """

    kind: str
    settings: ResolutionSettings = field(default_factory=ResolutionSettings)
    index: TfIdfIndex = field(default_factory=TfIdfIndex)

    def rebuild(self, names: Iterable[str]) -> None:
        self.index = TfIdfIndex.build(names)
        logger.debug("Rebuilt %s index with %d name(s)", self.kind, len(self.index))

    def names(self) -> list[str]:
        return list(self.index.names)

    def resolve(self, name: str) -> MatchOutcome:
        return resolve(
            name,
            self.index,
            threshold=self.settings.threshold,
            string_weight=self.settings.string_weight,
            tfidf_weight=self.settings.tfidf_weight,
        )

    def for_lookup(self, name: str, confirmer: Confirmer) -> Decision:
        decision = decide_lookup(
            name, self.resolve(name), confirmer, threshold=self.settings.threshold
        )
        if isinstance(decision, Abort):
            logger.info("No %s resolved for %r (%s)", self.kind, name, decision.reason.value)
        return decision

    def for_creation(self, name: str, confirmer: Confirmer) -> Decision:
        return decide_creation(
            name, self.resolve(name), confirmer, threshold=self.settings.threshold
        )

    def record_created(self, name: str) -> None:
        self.index.add_entity(name)

    def record_removed(self, name: str) -> bool:
        removed = self.index.remove_entity(name)
        if not removed:
            logger.warning("%s %r was not indexed; index may be stale", self.kind.capitalize(), name)
        return removed
