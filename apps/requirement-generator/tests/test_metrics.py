from __future__ import annotations

from requirement_generator.metrics import aggregate_metrics
from requirement_generator.models import Priority, Requirement, RequirementCategory
from spec_normalizer.models import HttpMethod, Operation


def _requirement(number: int, method: str, path: str, test_case_ids: list[str]) -> Requirement:
    return Requirement(
        id=f"REQ-{number:03d}",
        category=RequirementCategory.CRUD,
        priority=Priority.MEDIUM,
        action="list/search",
        description="",
        endpoint=path,
        method=HttpMethod(method),
        test_case_ids=test_case_ids,
    )


def test_zero_endpoints_means_zero_coverage() -> None:
    metrics = aggregate_metrics([], [], [])

    assert metrics.total_endpoints == 0
    assert metrics.coverage_percentage == 0
    assert metrics.endpoints_by_method == {}


def test_coverage_rounds_half_up() -> None:
    operations = [
        Operation(path="/a", method=HttpMethod.GET),
        Operation(path="/b", method=HttpMethod.GET),
        Operation(path="/c", method=HttpMethod.POST),
    ]
    requirements = [
        _requirement(1, "GET", "/a", ["TC-001"]),
        _requirement(2, "GET", "/b", ["TC-002"]),
        _requirement(3, "POST", "/c", []),
    ]

    metrics = aggregate_metrics(operations, requirements, [])

    assert metrics.coverage_percentage == 67
    assert metrics.endpoints_by_method == {"GET": 2, "POST": 1}
    assert metrics.requirements_by_category == {"CRUD": 3}


def test_coverage_never_exceeds_one_hundred() -> None:
    operations = [Operation(path="/a", method=HttpMethod.GET)]
    requirements = [
        _requirement(1, "GET", "/a", ["TC-001"]),
        _requirement(2, "GET", "/a", ["TC-002"]),
    ]

    metrics = aggregate_metrics(operations, requirements, [])

    assert metrics.total_requirements == 2
    assert metrics.coverage_percentage == 100


def test_half_coverage_rounds_up() -> None:
    operations = [Operation(path=f"/r{n}", method=HttpMethod.GET) for n in range(8)]
    requirements = [_requirement(n + 1, "GET", f"/r{n}", ["TC-001"] if n < 1 else []) for n in range(8)]

    # 100 * 1 / 8 = 12.5
    assert aggregate_metrics(operations, requirements, []).coverage_percentage == 13
