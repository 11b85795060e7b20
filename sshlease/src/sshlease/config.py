"""Configuration loading utilities for sshlease."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import default_store_dir, runtime_config_dir
from .utils.validation import resolve_and_check_path


class StorageConfig(BaseModel):
    backend: Literal["file", "memory"] = Field(
        default="file", description="Storage adapter to use: file|memory"
    )
    path: Optional[Path] = Field(
        default=None, description="Root directory of the file storage adapter"
    )

    def resolved_backend(self) -> str:
        return self.backend

    def resolved_path(self) -> Path:
        return self.path or default_store_dir()

    @field_validator("backend", mode="before")
    @classmethod
    def _lower_backend(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        return resolve_and_check_path(value, require_file=False)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")
    json_output: bool = Field(default=True, description="Emit JSON lines instead of key=value text")

    def normalized_level(self) -> str:
        return self.level.upper()


class LeasePolicyConfig(BaseModel):
    require_positive: bool = Field(
        default=True,
        description="Reject zero or negative lease and lease_max values",
    )


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    lease: LeasePolicyConfig = Field(default_factory=LeasePolicyConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".sshlease" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "LeasePolicyConfig",
    "LoggingConfig",
    "StorageConfig",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
