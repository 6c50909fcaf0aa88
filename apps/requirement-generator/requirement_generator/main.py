"""CLI entrypoint for requirement-generator."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

if __package__ in {None, ""}:
    current_file = Path(__file__).resolve()
    package_root = current_file.parents[1]
    apps_dir = current_file.parents[2]
    for candidate in (package_root, apps_dir / "spec-normalizer"):
        candidate_str = str(candidate)
        if candidate_str not in sys.path and candidate.exists():
            sys.path.insert(0, candidate_str)
    __package__ = "requirement_generator"

from spec_normalizer.normalizers import MalformedSpecError, UnsupportedSpecError, load_document

from .batch import BatchProcessor
from .config import ConfigError, GeneratorConfig
from .console_reporter import ConsoleReporter
from .generator import RequirementGenerator
from .logging_utils import configure_logging
from .output_config import get_log_format, get_output_format
from .templates import DescriptionTemplates
from .writer import save_results

app = typer.Typer(help="Generate requirements, test cases and coverage metrics from OpenAPI specifications.")

DEFAULT_OUTPUT_DIR = Path("requirements")


def _build_generator(templates: Optional[Path], config: Optional[Path]) -> RequirementGenerator:
    try:
        return RequirementGenerator(
            templates=DescriptionTemplates.from_file(templates),
            config=GeneratorConfig.from_file(config),
        )
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def generate(
    spec: list[Path] = typer.Argument(..., exists=True, readable=True, help="OpenAPI specification file(s)."),
    output_dir: Path = typer.Option(DEFAULT_OUTPUT_DIR, "--output-dir", "-o", help="Directory for generated files."),
    templates: Optional[Path] = typer.Option(None, help="Optional YAML overriding description templates."),
    config: Optional[Path] = typer.Option(None, help="Optional YAML/JSON generator configuration."),
    log_level: str = typer.Option("INFO", help="Log level."),
    log_format: Optional[str] = typer.Option(None, help="Log format: console, plain or json."),
    output_format: Optional[str] = typer.Option(None, help="Console output: auto, rich, plain or json."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-method/category/priority histograms."),
) -> None:
    """Generate requirement and test case files for each specification."""

    configure_logging(log_level, get_log_format(log_format))
    reporter = ConsoleReporter(get_output_format(output_format))
    generator = _build_generator(templates, config)

    for spec_path in spec:
        try:
            result = generator.generate(load_document(spec_path))
        except (UnsupportedSpecError, MalformedSpecError, ValidationError) as exc:
            raise typer.BadParameter(f"{spec_path}: {exc}") from exc

        files = save_results(result, output_dir)
        reporter.report_generation(
            result.api_info.title,
            result.metrics,
            [str(files.requirements_file), str(files.test_cases_file)],
            verbose=verbose,
        )


@app.command()
def batch(
    input_dir: Path = typer.Argument(..., help="Directory containing OpenAPI specifications."),
    output_dir: Path = typer.Option(DEFAULT_OUTPUT_DIR, "--output-dir", "-o", help="Directory for generated files."),
    templates: Optional[Path] = typer.Option(None, help="Optional YAML overriding description templates."),
    config: Optional[Path] = typer.Option(None, help="Optional YAML/JSON generator configuration."),
    log_level: str = typer.Option("INFO", help="Log level."),
    log_format: Optional[str] = typer.Option(None, help="Log format: console, plain or json."),
    output_format: Optional[str] = typer.Option(None, help="Console output: auto, rich, plain or json."),
) -> None:
    """Process every .json/.yaml/.yml specification in a directory."""

    configure_logging(log_level, get_log_format(log_format))
    reporter = ConsoleReporter(get_output_format(output_format))
    processor = BatchProcessor(input_dir, output_dir, generator=_build_generator(templates, config))

    try:
        result = processor.process()
    except FileNotFoundError as exc:
        reporter.print_error(str(exc))
        raise typer.Exit(code=2) from exc

    reporter.report_batch(result)
    if result.failed_apis:
        raise typer.Exit(code=1)


def run() -> None:
    """Console_scripts hook."""

    app()


if __name__ == "__main__":  # pragma: no cover
    run()
