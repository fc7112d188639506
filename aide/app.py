from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .catalog import EntityCatalog
from .config import Settings
from .prompt_io import ConsolePromptIO, PromptConfirmer, PromptIO
from .store import AideStore

logger = logging.getLogger(__name__)


@dataclass
class AideApp:
    settings: Settings
    store: AideStore
    tasks: EntityCatalog
    aides: EntityCatalog
    configs: EntityCatalog
    prompt_io: PromptIO = field(default_factory=ConsolePromptIO)

    @classmethod
    def create(cls, settings: Settings, *, prompt_io: PromptIO | None = None) -> "AideApp":
        store = AideStore(settings.storage.database_path)
        resolution = settings.resolution
        app = cls(
            settings=settings,
            store=store,
            tasks=EntityCatalog("task", resolution),
            aides=EntityCatalog("aide", resolution),
            configs=EntityCatalog("config key", resolution),
            prompt_io=prompt_io or ConsolePromptIO(),
        )
        app.rebuild_indexes()
        return app

    @property
    def confirmer(self) -> PromptConfirmer:
        return PromptConfirmer(self.prompt_io)

    def rebuild_indexes(self) -> None:
        self.tasks.rebuild(self.store.task_names())
        self.aides.rebuild(self.store.aide_names())
        self.configs.rebuild(self.store.config_keys())
        logger.debug(
            "Indexes ready: %d task(s), %d aide(s), %d config key(s)",
            len(self.tasks.index),
            len(self.aides.index),
            len(self.configs.index),
        )

    def close(self) -> None:
        self.store.close()
