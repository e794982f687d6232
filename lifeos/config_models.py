from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from lifeos import CONFIG_PATH

logger = logging.getLogger(__name__)


# =============================================================================
# LifeOSConfig (args/lifeos.yaml)
# =============================================================================

class AIConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    api_base: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    model: str = Field(default="gemini-2.0-flash")
    api_key_env: str = Field(default="GEMINI_API_KEY")
    timeout_seconds: float = Field(default=60.0, gt=0)

    def resolve_api_key(self) -> str:
        return os.environ.get(self.api_key_env, "")


class StoreConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    backend: str = Field(default="sqlite")
    database_path: str = Field(default="data/lifeos.db")
    app_id: str = Field(default="life-os-default")
    user_id: str = Field(default="local")


class GamificationConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    level_width: int = Field(default=100, ge=1)


class PriorityLimitsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    high: int = Field(default=1, ge=0)
    medium: int = Field(default=3, ge=0)
    low: int = Field(default=5, ge=0)


class TasksConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    default_points: int = Field(default=10, ge=0)
    suggestion_points: int = Field(default=15, ge=0)
    suggestion_pillar: str = Field(default="Mind")
    min_subtasks: int = Field(default=3, ge=1)
    max_subtasks: int = Field(default=5, ge=1)
    priority_limits: PriorityLimitsConfig = Field(default_factory=PriorityLimitsConfig)
    reject_stale_priorities: bool = Field(default=False)


class LifeOSConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    ai: AIConfig = Field(default_factory=AIConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    gamification: GamificationConfig = Field(default_factory=GamificationConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)


def load_and_validate(path: Optional[Path] = None) -> LifeOSConfig:
    yaml_path = path or CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return LifeOSConfig.model_validate(raw)
    except Exception as e:
        logger.warning(f"Config validation failed for {yaml_path}: {e}, using defaults")
        return LifeOSConfig()
