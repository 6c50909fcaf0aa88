"""Console reporter with environment detection for generation summaries."""

import json
import os
import sys
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import BatchResult, Metrics
from .output_config import OutputFormat


class ConsoleReporter:
    """
    Console reporter that adapts to the environment.

    Uses rich tables in interactive terminals, plain text in CI or when output
    is piped, and one JSON document per report in json mode.
    """

    def __init__(self, output_format: OutputFormat = OutputFormat.AUTO):
        self.output_format = output_format
        self._detect_environment()
        self.console = Console() if self.use_rich else None

    def _detect_environment(self) -> None:
        if self.output_format == OutputFormat.RICH:
            self.use_rich = True
        elif self.output_format in (OutputFormat.PLAIN, OutputFormat.JSON):
            self.use_rich = False
        else:  # AUTO
            is_terminal = sys.stdout.isatty()
            is_ci = any(
                name in os.environ for name in ("CI", "JENKINS_HOME", "GITLAB_CI", "TRAVIS", "GITHUB_ACTIONS")
            )
            self.use_rich = is_terminal and not is_ci

    def report_generation(self, api_name: str, metrics: Metrics, files: list[str], verbose: bool = False) -> None:
        """Display the outcome of one spec."""
        if self.output_format == OutputFormat.JSON:
            self._print_json({"api": api_name, "files": files, "metrics": metrics.as_serializable()})
            return

        if self.use_rich:
            table = Table(title=api_name, show_header=True, header_style="bold cyan")
            table.add_column("Metric", style="dim", width=28)
            table.add_column("Value", justify="right")
            table.add_row("Endpoints", str(metrics.total_endpoints))
            table.add_row("Requirements", str(metrics.total_requirements))
            table.add_row("Test cases", str(metrics.total_test_cases))
            table.add_row("Coverage", f"{metrics.coverage_percentage}%")
            if verbose:
                for label, histogram in _histograms(metrics):
                    for key, count in histogram.items():
                        table.add_row(f"{label}: {key}", str(count))
            self.console.print(table)
            for path in files:
                self.console.print(f"[green]Saved[/] {path}")
            return

        print(f"API: {api_name}")
        print(
            f"Endpoints: {metrics.total_endpoints} | Requirements: {metrics.total_requirements} | "
            f"Test cases: {metrics.total_test_cases} | Coverage: {metrics.coverage_percentage}%"
        )
        if verbose:
            for label, histogram in _histograms(metrics):
                print(f"  {label}: " + ", ".join(f"{key}={count}" for key, count in histogram.items()))
        for path in files:
            print(f"Saved {path}")

    def report_batch(self, batch: BatchResult) -> None:
        """Display the batch summary."""
        if self.output_format == OutputFormat.JSON:
            self._print_json(batch.as_serializable())
            return

        status = "✓ ALL SPECS PROCESSED" if batch.failed_apis == 0 else "✗ SOME SPECS FAILED"
        if self.use_rich:
            table = Table(show_header=True, header_style="bold cyan")
            table.add_column("File", width=40)
            table.add_column("API", width=30)
            table.add_column("Requirements", justify="right")
            table.add_column("Test cases", justify="right")
            table.add_column("Status", width=10)
            for item in batch.results:
                table.add_row(
                    item.file_name,
                    item.api_name,
                    str(item.requirements),
                    str(item.test_cases),
                    Text("✓ OK", style="green") if item.success else Text("✗ FAIL", style="red"),
                )
            summary = Text()
            summary.append(f"Total: {batch.total_apis}  ", style="bold")
            summary.append(f"Successful: {batch.successful_apis}  ", style="bold green")
            summary.append(f"Failed: {batch.failed_apis}  ", style="bold red" if batch.failed_apis else "bold green")
            summary.append(f"Requirements: {batch.total_requirements}  ", style="bold cyan")
            summary.append(f"Test cases: {batch.total_test_cases}", style="bold cyan")
            self.console.print(table)
            self.console.print(
                Panel(
                    summary,
                    title=Text(status, style="bold green" if batch.failed_apis == 0 else "bold red"),
                    border_style="green" if batch.failed_apis == 0 else "red",
                )
            )
            return

        print("-" * 80)
        for item in batch.results:
            marker = "✓" if item.success else "✗"
            line = f"{marker} {item.file_name}: {item.requirements} requirements, {item.test_cases} test cases"
            if item.error:
                line += f" ({item.error})"
            print(line)
        print("-" * 80)
        print(
            f"Total: {batch.total_apis} | Successful: {batch.successful_apis} | Failed: {batch.failed_apis} | "
            f"Requirements: {batch.total_requirements} | Test cases: {batch.total_test_cases}"
        )
        print(status)

    def print_error(self, message: str) -> None:
        """Print an error message."""
        if self.use_rich:
            self.console.print(f"[bold red]Error:[/] {message}")
        else:
            print(f"Error: {message}", file=sys.stderr)

    @staticmethod
    def _print_json(payload: Any) -> None:
        print(json.dumps(payload, indent=2))


def _histograms(metrics: Metrics) -> list[tuple[str, dict[str, int]]]:
    return [
        ("Endpoints by method", metrics.endpoints_by_method),
        ("Requirements by category", metrics.requirements_by_category),
        ("Test cases by priority", metrics.test_cases_by_priority),
    ]
