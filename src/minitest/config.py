from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


class ConfigError(ValueError):
    """Raised for an invalid config file or an unresolvable case reference."""


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    cases: list[str]
    seed: int | None = None
    shuffle: bool = True
    junit: str | None = None
    debug_log: str | None = None

    @field_validator("cases")
    @classmethod
    def cases_must_not_be_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("cases must not be empty")
        return v

    @field_validator("junit", "debug_log")
    @classmethod
    def expand_environment(cls, v: str | None) -> str | None:
        """Expand ${VAR} and ${VAR:-default} references in output paths."""
        if v is None:
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"cannot expand '{v}': {e}") from e


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping")

    try:
        config = RunConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}:\n{e}") from e

    # Resolve relative output paths relative to config file location
    for field in ("junit", "debug_log"):
        value = getattr(config, field)
        if value is not None and not Path(value).is_absolute():
            setattr(config, field, str((config_dir / value).resolve()))

    return config


def resolve_case(ref: str) -> Any:
    """Import a case from ``"module"`` or ``"module:attribute"``.

    Classes are instantiated with no arguments; modules and other objects are
    returned as they are.
    """
    module_name, _, attr = ref.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"cannot import case module '{module_name}': {e}") from e

    if not attr:
        return module

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigError(f"'{module_name}' has no attribute '{attr}'") from e

    if isinstance(target, type):
        return target()
    return target
