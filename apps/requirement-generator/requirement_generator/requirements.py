"""Requirement synthesis from normalized operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from spec_normalizer.models import HttpMethod, Operation, ParameterLocation

from .models import Priority, Requirement, RequirementCategory
from .templates import DescriptionTemplates

AUTH_KEYWORDS = ("auth", "login", "logout", "token")


@dataclass(frozen=True)
class RequirementSource:
    """A synthesized requirement and the operation it was derived from."""

    requirement: Requirement
    operation: Operation


@dataclass(frozen=True)
class _Rule:
    category: RequirementCategory
    priority: Priority
    action: str


class RequirementSynthesizer:
    """Classifies operations into requirement records."""

    def __init__(self, templates: DescriptionTemplates | None = None) -> None:
        self._templates = templates or DescriptionTemplates()

    def synthesize(self, operations: Iterable[Operation]) -> list[RequirementSource]:
        """Emit requirements in operation order with run-wide ``REQ-`` numbering."""

        sources: list[RequirementSource] = []
        for operation in operations:
            for rule in self.classify(operation):
                requirement = self._build(operation, rule, len(sources) + 1)
                sources.append(RequirementSource(requirement=requirement, operation=operation))
        return sources

    def classify(self, operation: Operation) -> list[_Rule]:
        rules = [_primary_rule(operation)]
        body = operation.request_body_schema
        if body is not None and body.required:
            rules.append(_Rule(RequirementCategory.VALIDATION, Priority.MEDIUM, "validate"))
        if operation.declares(401) or operation.declares(403):
            rules.append(_Rule(RequirementCategory.SECURITY, Priority.HIGH, "authorize"))
        return rules

    def _build(self, operation: Operation, rule: _Rule, sequence: int) -> Requirement:
        body = operation.request_body_schema
        replacements = {
            "method": operation.method.value,
            "path": operation.path,
            "resource": operation.resource,
            "summary": operation.summary or "",
            "operation_id": operation.operation_id or "",
            "fields": ", ".join(body.required) if body is not None else "",
        }
        return Requirement(
            id=format_id("REQ", sequence),
            category=rule.category,
            priority=rule.priority,
            action=rule.action,
            description=self._templates.requirement(rule.action, replacements),
            endpoint=operation.path,
            method=operation.method,
            operation_id=operation.operation_id,
            acceptance_criteria=acceptance_criteria(operation),
        )


def is_auth_path(path: str) -> bool:
    """True when the lower-cased path contains an authentication keyword."""

    lowered = path.lower()
    return any(keyword in lowered for keyword in AUTH_KEYWORDS)


def acceptance_criteria(operation: Operation) -> list[str]:
    """Checklist lines derived from declared responses, parameters and security."""

    criteria = []
    for code, response in operation.responses.items():
        line = f"Return {code} status code"
        criteria.append(f"{line}: {response.description}" if response.description else line)

    parameters = [param for param in operation.parameters if param.location != ParameterLocation.BODY]
    required = [param.name for param in parameters if param.required]
    optional = [param.name for param in parameters if not param.required]
    if required:
        criteria.append(f"Validate required parameters: {', '.join(required)}")
    if optional:
        criteria.append(f"Support optional parameters: {', '.join(optional)}")

    schemes = [name for item in operation.security for name in item]
    if schemes:
        criteria.append(f"Require authentication: {', '.join(schemes)}")
    return criteria


def format_id(prefix: str, sequence: int) -> str:
    return f"{prefix}-{sequence:03d}"


def _primary_rule(operation: Operation) -> _Rule:
    method = operation.method
    item = operation.ends_with_path_parameter

    if is_auth_path(operation.path):
        return _Rule(RequirementCategory.AUTHENTICATION, Priority.HIGH, "authenticate")
    if method == HttpMethod.POST and not item:
        return _Rule(RequirementCategory.CRUD, Priority.HIGH, "create")
    if method == HttpMethod.GET and item:
        return _Rule(RequirementCategory.CRUD, Priority.MEDIUM, "read single resource")
    if method == HttpMethod.GET:
        return _Rule(RequirementCategory.CRUD, Priority.MEDIUM, "list/search")
    if method in (HttpMethod.PUT, HttpMethod.PATCH) and item:
        return _Rule(RequirementCategory.CRUD, Priority.HIGH, "update")
    if method == HttpMethod.DELETE and item:
        return _Rule(RequirementCategory.CRUD, Priority.HIGH, "delete")

    # Shapes the table above does not name still get a CRUD requirement.
    if method == HttpMethod.POST:
        return _Rule(RequirementCategory.CRUD, Priority.HIGH, "update")
    if method == HttpMethod.DELETE:
        return _Rule(RequirementCategory.CRUD, Priority.HIGH, "bulk delete")
    return _Rule(RequirementCategory.CRUD, Priority.HIGH, "bulk update")
