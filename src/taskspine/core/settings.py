"""Settings for taskspine entry points.

Library calls take their options as arguments; the CLI fills the defaults for
those arguments from ``TaskSpineSettings``, which reads ``TASKSPINE_*``
environment variables and an optional ``.env`` file.

Examples:
    >>> import os
    >>> os.environ["TASKSPINE_TREE_DEPTH"] = "2"
    >>> TaskSpineSettings().tree_depth
    2

Tags:
    settings, configuration, pydantic, environment, taskspine

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TaskSpineSettings(BaseSettings):
    """Settings shared by the taskspine CLI.

    Fields
    ──────
    log_level      : Structlog log level
    log_format     : ``console`` or ``json``
    tree_depth     : Default depth for ``tasks tree`` (None = unbounded)
    taskfile       : Taskfile loaded when none is given on the command line
    spine_variable : Module attribute holding the ``TaskSpine`` instance
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["console", "json"] = "console"

    # ── Tree rendering ───────────────────────────────────────────
    tree_depth: int | None = Field(default=None, ge=1)

    # ── Taskfile discovery ───────────────────────────────────────
    taskfile: str = "taskfile.py"
    spine_variable: str = "tasks"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> TaskSpineSettings:
    """Return the process-wide settings instance."""
    return TaskSpineSettings()
