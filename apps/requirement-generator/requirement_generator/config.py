"""Generator configuration loaded from YAML/JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ValidationError


class ConfigError(ValueError):
    """Raised when a configuration or template file cannot be used."""


class GeneratorConfig(BaseModel):
    """Knobs for test data sampling and negative-case statuses.

    Sampling is deterministic; callers wanting different sample values pass a
    different configuration instead of relying on randomness.
    """

    validation_status: Literal[400, 422] = 400
    not_found_id: int = 999999999
    sample_string: str = "sample"
    sample_integer: int = 1
    sample_number: float = 1.5
    auth_token: str = "sample-token"
    insufficient_scope_token: str = "token-without-required-scope"

    @classmethod
    def from_file(cls, path: Path | None) -> "GeneratorConfig":
        if path is None:
            return cls()
        try:
            return cls.model_validate(load_mapping(path))
        except ValidationError as exc:
            raise ConfigError(f"Invalid generator config {path}: {exc}") from exc


def load_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON file that must contain a mapping."""

    if not path.exists():
        raise ConfigError(f"Config file {path} does not exist")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Config file {path} could not be parsed: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must deserialize into a mapping")
    return payload
