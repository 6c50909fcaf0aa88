"""Deterministic sample values for schemas and parameters."""

from __future__ import annotations

from typing import Any

from spec_normalizer.models import Parameter, Schema
from spec_normalizer.normalizers import UnsupportedSchemaError

from .config import GeneratorConfig

FORMAT_SAMPLES: dict[str, str] = {
    "email": "user@example.com",
    "date": "2024-01-01",
    "date-time": "2024-01-01T00:00:00Z",
    "uuid": "00000000-0000-0000-0000-000000000001",
    "uri": "https://example.com/resource",
    "url": "https://example.com/resource",
    "hostname": "example.com",
    "ipv4": "192.0.2.1",
    "password": "Sample-Passw0rd!",
}


def sample_value(schema: Schema | None, config: GeneratorConfig, name: str | None = None) -> Any:
    """Return one concrete value for ``schema``.

    Preference order: example, default, first enum value, then a placeholder
    per declared type. ``oneOf``/``anyOf``/``not`` raise ``UnsupportedSchemaError``.
    """

    if schema is None:
        return _sample_string(config, name)
    if schema.composition:
        raise UnsupportedSchemaError(f"Cannot sample '{schema.composition}' schema{_suffix(name)}")
    if schema.example is not None:
        return schema.example
    if schema.default is not None:
        return schema.default
    if schema.enum:
        return schema.enum[0]
    if schema.ref:
        return {}

    if schema.is_object:
        return {prop: sample_value(child, config, prop) for prop, child in schema.properties.items()}
    match schema.type:
        case "integer":
            return config.sample_integer
        case "number":
            return config.sample_number
        case "boolean":
            return True
        case "array":
            return [sample_value(schema.items, config, name)] if schema.items is not None else []
        case _:
            if schema.format in FORMAT_SAMPLES:
                return FORMAT_SAMPLES[schema.format]
            return _sample_string(config, name)


def sample_body(schema: Schema | None, config: GeneratorConfig) -> Any:
    if schema is None:
        return None
    return sample_value(schema, config)


def sample_parameter(parameter: Parameter, config: GeneratorConfig) -> Any:
    if parameter.schema_ is not None:
        return sample_value(parameter.schema_, config, parameter.name)
    return sample_value(Schema(type=parameter.type), config, parameter.name)


def _sample_string(config: GeneratorConfig, name: str | None) -> str:
    return f"{config.sample_string}-{name}" if name else config.sample_string


def _suffix(name: str | None) -> str:
    return f" for '{name}'" if name else ""
