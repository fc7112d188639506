from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .core.resolution.resolver import FUZZY_MATCH_THRESHOLD, STRING_WEIGHT, TFIDF_WEIGHT


class StorageSettings(BaseModel):
    database_path: Path = Field(default=Path("~/.aide.db"), validate_default=True)
    data_dir: Path = Field(default=Path("~/.aide"), validate_default=True)

    @field_validator("database_path", "data_dir", mode="before")
    @classmethod
    def _expand(cls, value: str | Path) -> Path:
        return Path(value).expanduser().resolve()

    @property
    def tasks_dir(self) -> Path:
        return self.data_dir / "tasks"


class ResolutionSettings(BaseModel):
    threshold: float = Field(default=FUZZY_MATCH_THRESHOLD, ge=0.0, le=1.0)
    string_weight: float = Field(default=STRING_WEIGHT, ge=0.0, le=1.0)
    tfidf_weight: float = Field(default=TFIDF_WEIGHT, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "ResolutionSettings":
        if abs(self.string_weight + self.tfidf_weight - 1.0) > 1e-9:
            raise ValueError("string_weight and tfidf_weight must sum to 1.0")
        return self


class TaskSettings(BaseModel):
    default_priority: int = Field(default=3, ge=1, le=5)
    statuses: List[str] = Field(default_factory=lambda: ["created", "in_progress", "completed"])


class EditorSettings(BaseModel):
    candidates: List[str] = Field(default_factory=lambda: ["vim", "vi", "nano"])


class Settings(BaseModel):
    storage: StorageSettings = StorageSettings()
    resolution: ResolutionSettings = ResolutionSettings()
    tasks: TaskSettings = TaskSettings()
    editor: EditorSettings = EditorSettings()

    @classmethod
    def load(cls, path: Optional[Path]) -> "Settings":
        if path is None:
            return cls()
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (
        cwd / "config.yaml",
        cwd / "config.yml",
        Path("~/.config/aide/config.yaml").expanduser(),
    ):
        if candidate.exists():
            return candidate
    return None
