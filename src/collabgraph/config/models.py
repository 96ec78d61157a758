"""Configuration models using Pydantic."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from collabgraph.config.paths import get_data_path

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ConfigError(Exception):
    """Configuration error."""

    pass


class ExportConfig(BaseModel):
    """Defaults for diagram export."""

    format: Literal["dot", "mermaid"] = "mermaid"
    output_dir: Path | None = None


class CollabConfig(BaseModel):
    """Root configuration model."""

    data_path: Path = Field(default_factory=get_data_path)
    log_level: LogLevel = "WARNING"
    # Default number of collaborators shown by `collabgraph top`
    top_limit: int = Field(default=5, ge=1)
    # Default time window for filtered exports, in days (None = all time)
    window_days: int | None = Field(default=None, ge=1)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.upper()
        return value

    @field_validator("data_path", mode="after")
    @classmethod
    def _expand_data_path(cls, value: Path) -> Path:
        return value.expanduser()
