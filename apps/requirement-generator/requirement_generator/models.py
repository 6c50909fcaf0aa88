"""Pydantic models for generated requirements, test cases and metrics."""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import Field

from spec_normalizer.models import ApiInfo, HttpMethod, RecordModel


class RequirementCategory(str, Enum):
    CRUD = "CRUD"
    AUTHENTICATION = "Authentication"
    VALIDATION = "Validation"
    SECURITY = "Security"
    ERROR_HANDLING = "ErrorHandling"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Requirement(RecordModel):
    """Testing obligation derived from one operation."""

    id: str
    category: RequirementCategory
    priority: Priority
    action: str
    description: str
    endpoint: str
    method: HttpMethod
    operation_id: str | None = None
    acceptance_criteria: list[str] = Field(default_factory=list)
    test_case_ids: list[str] = Field(default_factory=list)


class TestData(RecordModel):
    """Request inputs for a test case. Unset parts are omitted when serialized."""

    __test__: ClassVar[bool] = False

    body: Any = None
    headers: dict[str, str] | None = None
    path_params: dict[str, Any] | None = None
    query_params: dict[str, Any] | None = None

    def as_serializable(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TestCase(RecordModel):
    """Concrete scenario (inputs + expected status) for a requirement."""

    __test__: ClassVar[bool] = False

    id: str
    requirement_id: str
    name: str
    description: str
    method: HttpMethod
    endpoint: str
    expected_status: int
    category: RequirementCategory
    priority: Priority
    test_data: TestData = Field(default_factory=TestData)

    def as_serializable(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True, exclude={"test_data"})
        payload["testData"] = self.test_data.as_serializable()
        return payload


class Metrics(RecordModel):
    """Projection over a generation run, recomputed on demand."""

    total_endpoints: int = 0
    total_requirements: int = 0
    total_test_cases: int = 0
    endpoints_by_method: dict[str, int] = Field(default_factory=dict)
    requirements_by_category: dict[str, int] = Field(default_factory=dict)
    test_cases_by_priority: dict[str, int] = Field(default_factory=dict)
    coverage_percentage: int = 0


class GenerationResult(RecordModel):
    api_info: ApiInfo
    requirements: list[Requirement] = Field(default_factory=list)
    test_cases: list[TestCase] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)

    def as_serializable(self) -> dict[str, Any]:
        return {
            "apiInfo": self.api_info.as_serializable(),
            "requirements": [req.as_serializable() for req in self.requirements],
            "testCases": [case.as_serializable() for case in self.test_cases],
            "metrics": self.metrics.as_serializable(),
        }


class ProcessingResult(RecordModel):
    """Outcome of one spec file in a batch run."""

    success: bool
    api_name: str
    file_name: str
    requirements: int = 0
    test_cases: int = 0
    error: str | None = None


class BatchResult(RecordModel):
    total_apis: int
    successful_apis: int
    failed_apis: int
    total_requirements: int
    total_test_cases: int
    results: list[ProcessingResult] = Field(default_factory=list)
    processed_at: str
