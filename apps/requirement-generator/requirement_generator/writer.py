"""Persist generation results as JSON files."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .models import GenerationResult


@dataclass
class GeneratedFiles:
    requirements_file: Path
    test_cases_file: Path


def api_id(title: str) -> str:
    """Lower-cased title with runs of non-alphanumerics collapsed to ``-``."""

    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-") or "api"


def save_results(result: GenerationResult, output_dir: Path) -> GeneratedFiles:
    """Write ``<api-id>-generated-requirements.json`` and ``<api-id>-generated-test-cases.json``."""

    output_dir.mkdir(parents=True, exist_ok=True)
    generated_at = datetime.now(timezone.utc).isoformat()
    info = result.api_info
    prefix = api_id(info.title)

    requirements_file = output_dir / f"{prefix}-generated-requirements.json"
    _write_json(
        requirements_file,
        {
            "apiInfo": info.as_serializable(),
            "requirements": [req.as_serializable() for req in result.requirements],
            "metrics": result.metrics.as_serializable(),
            "generatedAt": generated_at,
        },
    )

    test_cases_file = output_dir / f"{prefix}-generated-test-cases.json"
    _write_json(
        test_cases_file,
        {
            "apiInfo": {"title": info.title, "version": info.version},
            "testCases": [case.as_serializable() for case in result.test_cases],
            "generatedAt": generated_at,
        },
    )
    return GeneratedFiles(requirements_file=requirements_file, test_cases_file=test_cases_file)


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    with path.open("w", encoding="utf-8") as fp:
        json.dump(payload, fp, indent=2, ensure_ascii=False)
