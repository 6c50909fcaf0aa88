"""Batch processing of a directory of OpenAPI specifications."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import structlog
from pydantic import ValidationError

from spec_normalizer.normalizers import (
    SUPPORTED_SUFFIXES,
    MalformedSpecError,
    UnsupportedSpecError,
    load_document,
)

from .generator import RequirementGenerator
from .models import BatchResult, ProcessingResult
from .writer import save_results

LOGGER = structlog.get_logger("requirement_generator")

SUMMARY_FILE = "batch-processing-summary.json"


class BatchProcessor:
    """Generates requirement files for every spec found in ``input_dir``."""

    def __init__(
        self,
        input_dir: Path,
        output_dir: Path,
        generator: RequirementGenerator | None = None,
    ) -> None:
        self.input_dir = input_dir
        self.output_dir = output_dir
        self._generator = generator or RequirementGenerator()

    def find_spec_files(self) -> list[Path]:
        return sorted(
            path
            for path in self.input_dir.iterdir()
            if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
        )

    def process(self) -> BatchResult:
        if not self.input_dir.is_dir():
            raise FileNotFoundError(f"OpenAPI specs directory not found: {self.input_dir}")
        self.output_dir.mkdir(parents=True, exist_ok=True)

        spec_files = self.find_spec_files()
        LOGGER.info("batch_started", input_dir=str(self.input_dir), specs=len(spec_files))

        results = [self._process_file(spec_path) for spec_path in spec_files]
        successful = [item for item in results if item.success]
        batch = BatchResult(
            total_apis=len(results),
            successful_apis=len(successful),
            failed_apis=len(results) - len(successful),
            total_requirements=sum(item.requirements for item in successful),
            total_test_cases=sum(item.test_cases for item in successful),
            results=results,
            processed_at=datetime.now(timezone.utc).isoformat(),
        )
        summary_path = self.output_dir / SUMMARY_FILE
        summary_path.write_text(json.dumps(batch.as_serializable(), indent=2), encoding="utf-8")
        LOGGER.info(
            "batch_finished",
            successful=batch.successful_apis,
            failed=batch.failed_apis,
            summary=str(summary_path),
        )
        return batch

    def _process_file(self, spec_path: Path) -> ProcessingResult:
        try:
            result = self._generator.generate(load_document(spec_path))
        except (UnsupportedSpecError, MalformedSpecError, ValidationError, OSError) as exc:
            LOGGER.error("spec_failed", file=spec_path.name, error=str(exc))
            return ProcessingResult(
                success=False,
                api_name=spec_path.stem,
                file_name=spec_path.name,
                error=str(exc),
            )

        files = save_results(result, self.output_dir)
        LOGGER.info("spec_processed", file=spec_path.name, requirements_file=str(files.requirements_file))
        return ProcessingResult(
            success=True,
            api_name=result.api_info.title,
            file_name=spec_path.name,
            requirements=len(result.requirements),
            test_cases=len(result.test_cases),
        )
