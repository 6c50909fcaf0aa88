"""Metrics projection over a generation run."""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from spec_normalizer.models import Operation

from .models import Metrics, Requirement, TestCase


def aggregate_metrics(
    operations: Sequence[Operation],
    requirements: Sequence[Requirement],
    test_cases: Sequence[TestCase],
) -> Metrics:
    """Tally endpoints, requirements and test cases and compute coverage.

    Coverage counts distinct (method, endpoint) pairs that own at least one
    requirement with a test case, so it stays within 0..100. It is 0 when the
    document has no endpoints.
    """

    total_endpoints = len(operations)
    covered = {
        (requirement.method, requirement.endpoint)
        for requirement in requirements
        if requirement.test_case_ids
    }
    coverage = _round_half_up(100 * len(covered) / total_endpoints) if total_endpoints else 0

    return Metrics(
        total_endpoints=total_endpoints,
        total_requirements=len(requirements),
        total_test_cases=len(test_cases),
        endpoints_by_method=dict(Counter(op.method.value for op in operations)),
        requirements_by_category=dict(Counter(req.category.value for req in requirements)),
        test_cases_by_priority=dict(Counter(case.priority.value for case in test_cases)),
        coverage_percentage=min(100, coverage),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
