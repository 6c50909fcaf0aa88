"""Description templates for requirements and test cases."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from string import Template
from typing import Any

from .config import ConfigError, load_mapping

DEFAULT_TEMPLATES: dict[str, Any] = {
    "requirements": {
        "authenticate": "${method} ${path} should authenticate the caller and reject invalid credentials",
        "create": "${method} ${path} should create a new ${resource} with valid data",
        "read single resource": "${method} ${path} should read a single ${resource} by identifier",
        "list/search": "${method} ${path} should list/search ${resource} with filtering and pagination",
        "update": "${method} ${path} should update an existing ${resource} with valid data",
        "delete": "${method} ${path} should delete an existing ${resource}",
        "bulk update": "${method} ${path} should update the ${resource} collection",
        "bulk delete": "${method} ${path} should delete the ${resource} collection",
        "validate": "${method} ${path} should reject request bodies missing required fields (${fields})",
        "authorize": "${method} ${path} should deny requests without valid credentials or scope",
    },
    "test_cases": {
        "positive": "${method} ${path} - Valid Request",
        "not_found": "${method} ${path} - Not Found",
        "missing_field": "${method} ${path} - Missing ${field}",
        "unauthorized": "${method} ${path} - Unauthorized",
        "forbidden": "${method} ${path} - Forbidden",
    },
    "fallback": "${method} ${path} should behave as documented",
}


class DescriptionTemplates:
    """Resolves ``string.Template`` descriptions per requirement action and case kind."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        payload = deepcopy(DEFAULT_TEMPLATES)
        if data:
            if not isinstance(data, dict):
                raise ConfigError("Template library root must be a mapping")
            for section in ("requirements", "test_cases"):
                overrides = data.get(section) or {}
                if not isinstance(overrides, dict):
                    raise ConfigError(f"Template section '{section}' must be a mapping")
                payload[section].update({str(k): str(v) for k, v in overrides.items()})
            if data.get("fallback"):
                payload["fallback"] = str(data["fallback"])
        self._requirements: dict[str, str] = payload["requirements"]
        self._test_cases: dict[str, str] = payload["test_cases"]
        self._fallback: str = payload["fallback"]

    @classmethod
    def from_file(cls, path: Path | None) -> "DescriptionTemplates":
        if path is None:
            return cls()
        return cls(load_mapping(path))

    def requirement(self, action: str, replacements: dict[str, str]) -> str:
        template = self._requirements.get(action, self._fallback)
        return _render(template, replacements)

    def test_case(self, kind: str, replacements: dict[str, str]) -> str:
        template = self._test_cases.get(kind, "${method} ${path}")
        return _render(template, replacements)


def _render(template: str, replacements: dict[str, str]) -> str:
    return Template(template).safe_substitute(replacements)
