"""Helpers for turning OpenAPI/Swagger documents into normalized operations."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import (
    ApiInfo,
    HttpMethod,
    NormalizedSpec,
    Operation,
    Parameter,
    ParameterLocation,
    ResponseSchema,
    Schema,
)

SUPPORTED_SUFFIXES = {".json", ".yaml", ".yml"}
OPERATION_KEYS = {method.value.lower(): method for method in HttpMethod}
COMPOSITION_KEYS = ("oneOf", "anyOf", "not")
LOCATION_ALIASES = {"formData": ParameterLocation.BODY}


class UnsupportedSpecError(RuntimeError):
    """Raised when a file cannot be read as an OpenAPI/Swagger document."""


class MalformedSpecError(ValueError):
    """Raised when a parsed document has no usable ``paths`` mapping."""


class UnsupportedSchemaError(ValueError):
    """Raised when a schema uses a composition construct that cannot be sampled."""


def load_document(spec_path: Path) -> dict[str, Any]:
    """Read a JSON/YAML specification file into a mapping."""

    suffix = spec_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedSpecError(f"Unsupported specification format: {suffix or spec_path.name}")

    try:
        text = spec_path.read_text(encoding="utf-8")
        if suffix == ".json":
            parsed = json.loads(text)
        else:
            parsed = yaml.safe_load(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise UnsupportedSpecError(f"{spec_path.name} could not be parsed: {exc}") from exc
    if not isinstance(parsed, dict):
        raise UnsupportedSpecError("Expected OpenAPI/Swagger document to be an object")
    if "openapi" not in parsed and "swagger" not in parsed:
        raise UnsupportedSpecError(f"{spec_path.name} is not an OpenAPI/Swagger document")
    return parsed


def normalize_spec(spec_path: Path) -> NormalizedSpec:
    """Load and normalize a specification file."""

    return normalize_document(load_document(spec_path))


def normalize_document(document: Any) -> NormalizedSpec:
    """Normalize a parsed OpenAPI 2.0/3.0 document.

    Operations are emitted in path-then-method declaration order. Optional
    fields are defaulted; a missing or malformed ``paths`` mapping aborts the
    whole document.
    """

    if not isinstance(document, Mapping):
        raise MalformedSpecError("Specification document must be a mapping")
    paths = document.get("paths")
    if not isinstance(paths, Mapping):
        raise MalformedSpecError("Specification document has no 'paths' mapping")

    operations: list[Operation] = []
    for raw_path, path_item in paths.items():
        if not isinstance(path_item, Mapping):
            raise MalformedSpecError(f"Path entry {raw_path!r} must be a mapping")
        shared_parameters = _as_list(path_item.get("parameters"))
        for key, entry in path_item.items():
            method = OPERATION_KEYS.get(str(key).lower())
            if method is None:
                continue
            if not isinstance(entry, Mapping):
                raise MalformedSpecError(f"Operation {method.value} {raw_path} must be a mapping")
            operations.append(_normalize_operation(str(raw_path), method, entry, shared_parameters))

    raw_version = document.get("openapi") or document.get("swagger")
    return NormalizedSpec(
        spec_version=str(raw_version) if raw_version is not None else None,
        info=_normalize_info(document.get("info")),
        operations=operations,
    )


def _normalize_info(info: Any) -> ApiInfo:
    if not isinstance(info, Mapping):
        return ApiInfo()
    return ApiInfo(
        title=str(info.get("title") or "Untitled API"),
        version=str(info.get("version", "0")),
        description=_text(info.get("description")),
    )


def _normalize_operation(
    path: str,
    method: HttpMethod,
    entry: Mapping[str, Any],
    shared_parameters: list[Any],
) -> Operation:
    raw_parameters = _merge_parameters(shared_parameters, _as_list(entry.get("parameters")))
    parameters = [_normalize_parameter(raw) for raw in raw_parameters]

    body_schema = _request_body_schema(entry.get("requestBody"))
    if body_schema is None:
        for raw in raw_parameters:
            if raw.get("in") == "body":
                body_schema = normalize_schema(raw.get("schema"))
                break

    responses: dict[str, ResponseSchema] = {}
    raw_responses = entry.get("responses")
    if isinstance(raw_responses, Mapping):
        for code, response in raw_responses.items():
            responses[str(code)] = _normalize_response(response)

    operation_id = entry.get("operationId")
    tags = [str(tag) for tag in _as_list(entry.get("tags"))]
    security = [item for item in _as_list(entry.get("security")) if isinstance(item, Mapping)]
    return Operation(
        path=path,
        method=method,
        operation_id=str(operation_id) if operation_id else None,
        summary=_text(entry.get("summary") or entry.get("description")),
        tags=tags,
        parameters=parameters,
        request_body_schema=body_schema,
        responses=responses,
        security=[dict(item) for item in security],
    )


def _merge_parameters(shared: list[Any], local: list[Any]) -> list[Mapping[str, Any]]:
    # Operation-level parameters replace path-level ones with the same name and location.
    merged: dict[tuple[str, str], Mapping[str, Any]] = {}
    for raw in shared + local:
        if not isinstance(raw, Mapping) or not raw.get("name"):
            continue
        merged[(str(raw["name"]), str(raw.get("in", "query")))] = raw
    return list(merged.values())


def _normalize_parameter(raw: Mapping[str, Any]) -> Parameter:
    raw_location = str(raw.get("in", "query"))
    location = LOCATION_ALIASES.get(raw_location)
    if location is None:
        try:
            location = ParameterLocation(raw_location)
        except ValueError:
            location = ParameterLocation.QUERY

    schema = normalize_schema(raw.get("schema"))
    if location == ParameterLocation.BODY and raw_location == "body":
        param_type = (schema.type if schema else None) or "object"
    elif schema is not None and schema.type:
        param_type = schema.type
    else:
        param_type = str(raw.get("type") or "string")

    if schema is None and raw.get("type"):
        schema = normalize_schema({key: raw[key] for key in ("type", "format", "enum", "default", "items") if key in raw})

    return Parameter(
        name=str(raw["name"]),
        location=location,
        required=location == ParameterLocation.PATH or bool(raw.get("required", False)),
        type=param_type,
        schema_=schema,
    )


def _request_body_schema(request_body: Any) -> Schema | None:
    if not isinstance(request_body, Mapping):
        return None
    content = request_body.get("content")
    if not isinstance(content, Mapping):
        return None
    preferred = content.get("application/json")
    if isinstance(preferred, Mapping) and isinstance(preferred.get("schema"), Mapping):
        return normalize_schema(preferred["schema"])
    for media in content.values():
        if isinstance(media, Mapping) and isinstance(media.get("schema"), Mapping):
            return normalize_schema(media["schema"])
    return None


def _normalize_response(response: Any) -> ResponseSchema:
    if not isinstance(response, Mapping):
        return ResponseSchema()
    schema = response.get("schema")
    if schema is None:
        content = response.get("content")
        if isinstance(content, Mapping):
            for media in content.values():
                if isinstance(media, Mapping) and isinstance(media.get("schema"), Mapping):
                    schema = media["schema"]
                    break
    return ResponseSchema(description=_text(response.get("description")), schema_=normalize_schema(schema))


def normalize_schema(raw: Any) -> Schema | None:
    """Convert an inline JSON schema into a ``Schema``. ``$ref`` is kept unresolved."""

    if not isinstance(raw, Mapping):
        return None
    if "$ref" in raw:
        return Schema(ref=str(raw["$ref"]))

    properties: dict[str, Schema] = {}
    required: list[str] = [str(name) for name in _as_list(raw.get("required"))]
    for member in _as_list(raw.get("allOf")):
        merged = normalize_schema(member)
        if merged is None:
            continue
        properties.update(merged.properties)
        required.extend(name for name in merged.required if name not in required)

    raw_properties = raw.get("properties")
    if isinstance(raw_properties, Mapping):
        for name, value in raw_properties.items():
            prop = normalize_schema(value)
            properties[str(name)] = prop if prop is not None else Schema()

    composition = next((key for key in COMPOSITION_KEYS if key in raw), None)
    schema_type = raw.get("type")
    if isinstance(schema_type, list):
        # OpenAPI 3.1 style ["string", "null"]
        schema_type = next((item for item in schema_type if item != "null"), None)

    return Schema(
        type=str(schema_type) if schema_type else None,
        format=_text(raw.get("format")),
        properties=properties,
        required=required,
        items=normalize_schema(raw.get("items")),
        enum=list(_as_list(raw.get("enum"))),
        example=raw.get("example"),
        default=raw.get("default"),
        composition=composition,
    )


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _text(value: Any) -> str | None:
    # YAML turns unquoted numbers, booleans and dates into non-strings.
    return str(value) if value is not None else None
