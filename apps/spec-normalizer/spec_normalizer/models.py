"""Pydantic models for normalized OpenAPI operations."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HttpMethod(str, Enum):
    """HTTP methods treated as operations."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    COOKIE = "cookie"


class RecordModel(BaseModel):
    """Frozen base model serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def as_serializable(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""

        return self.model_dump(mode="json", by_alias=True)


class Schema(RecordModel):
    """Inline JSON schema subset kept by the normalizer."""

    type: str | None = None
    format: str | None = None
    properties: dict[str, Schema] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)
    items: Schema | None = None
    enum: list[Any] = Field(default_factory=list)
    example: Any = None
    default: Any = None
    composition: str | None = None
    ref: str | None = None

    @property
    def is_object(self) -> bool:
        return self.type == "object" or (self.type is None and bool(self.properties))


class Parameter(RecordModel):
    name: str
    location: ParameterLocation
    required: bool = False
    type: str = "string"
    schema_: Schema | None = Field(default=None, alias="schema")


class ResponseSchema(RecordModel):
    description: str | None = None
    schema_: Schema | None = Field(default=None, alias="schema")


class Operation(RecordModel):
    """Represents a single (path, method) entry extracted from an OpenAPI document."""

    path: str
    method: HttpMethod
    operation_id: str | None = None
    summary: str | None = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body_schema: Schema | None = None
    responses: dict[str, ResponseSchema] = Field(default_factory=dict)
    security: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def path_segments(self) -> list[str]:
        return [segment for segment in self.path.split("/") if segment]

    @property
    def has_path_parameter(self) -> bool:
        return any(_is_template(segment) for segment in self.path_segments)

    @property
    def ends_with_path_parameter(self) -> bool:
        segments = self.path_segments
        return bool(segments) and _is_template(segments[-1])

    @property
    def resource(self) -> str:
        """Last literal path segment, used to name the resource in descriptions."""

        literals = [segment for segment in self.path_segments if not _is_template(segment)]
        return literals[-1] if literals else "resource"

    def declared_statuses(self) -> list[int]:
        statuses: list[int] = []
        for code in self.responses:
            if code.isdigit():
                statuses.append(int(code))
        return sorted(statuses)

    def declares(self, status: int) -> bool:
        return status in self.declared_statuses()

    def parameters_in(self, location: ParameterLocation) -> list[Parameter]:
        return [param for param in self.parameters if param.location == location]


class ApiInfo(RecordModel):
    title: str = "Untitled API"
    version: str = "0"
    description: str | None = None


class NormalizedSpec(RecordModel):
    """Normalized document handed to the synthesizers."""

    spec_version: str | None = None
    info: ApiInfo = Field(default_factory=ApiInfo)
    operations: list[Operation] = Field(default_factory=list)


def _is_template(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")
