"""Requirement and test case generation pipeline."""

from __future__ import annotations

from typing import Any

import structlog

from spec_normalizer.normalizers import normalize_document

from .config import GeneratorConfig
from .metrics import aggregate_metrics
from .models import GenerationResult, Requirement, TestCase
from .requirements import RequirementSynthesizer
from .templates import DescriptionTemplates
from .test_cases import TestCaseSynthesizer

LOGGER = structlog.get_logger("requirement_generator")


class RequirementGenerator:
    """Runs normalizer, synthesizers and metrics over one parsed document.

    Each ``generate`` call owns its collections; instances can be shared
    between threads.
    """

    def __init__(
        self,
        *,
        templates: DescriptionTemplates | None = None,
        config: GeneratorConfig | None = None,
    ) -> None:
        templates = templates or DescriptionTemplates()
        self.config = config or GeneratorConfig()
        self._requirements = RequirementSynthesizer(templates)
        self._test_cases = TestCaseSynthesizer(self.config, templates)

    def generate(self, document: Any) -> GenerationResult:
        normalized = normalize_document(document)
        sources = self._requirements.synthesize(normalized.operations)

        requirements: list[Requirement] = []
        test_cases: list[TestCase] = []
        for source in sources:
            cases = self._test_cases.synthesize(source.requirement, source.operation, start=len(test_cases) + 1)
            test_cases.extend(cases)
            requirements.append(
                source.requirement.model_copy(update={"test_case_ids": [case.id for case in cases]})
            )

        metrics = aggregate_metrics(normalized.operations, requirements, test_cases)
        LOGGER.info(
            "requirements_generated",
            api=normalized.info.title,
            endpoints=metrics.total_endpoints,
            requirements=metrics.total_requirements,
            test_cases=metrics.total_test_cases,
            coverage=metrics.coverage_percentage,
        )
        return GenerationResult(
            api_info=normalized.info,
            requirements=requirements,
            test_cases=test_cases,
            metrics=metrics,
        )


def generate_requirements(
    document: Any,
    *,
    templates: DescriptionTemplates | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Shorthand for ``RequirementGenerator(...).generate(document)``."""

    return RequirementGenerator(templates=templates, config=config).generate(document)
