"""Entry point for the spec-normalizer application."""

from __future__ import annotations

import json
import re
import sys
from pathlib import Path

import typer
from pydantic import ValidationError

if __package__ in {None, ""}:
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    __package__ = "spec_normalizer"

from .models import NormalizedSpec
from .normalizers import MalformedSpecError, UnsupportedSpecError, normalize_spec

app = typer.Typer(help="Normalize OpenAPI/Swagger specifications into operation snapshots.")

DEFAULT_OUTPUT = Path("workspace/catalog")


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-") or "api"


def _persist_snapshot(normalized: NormalizedSpec, output_dir: Path) -> Path:
    destination_dir = output_dir / _slug(normalized.info.title)
    destination_dir.mkdir(parents=True, exist_ok=True)
    destination_file = destination_dir / f"{normalized.info.version.replace('/', '-')}.json"
    with destination_file.open("w", encoding="utf-8") as fp:
        json.dump(normalized.as_serializable(), fp, indent=2, ensure_ascii=False)
    return destination_file


@app.command()
def intake(
    spec: list[Path] = typer.Option(..., exists=True, help="Path to one or more API specifications."),
    output_dir: Path = typer.Option(DEFAULT_OUTPUT, help="Directory for normalized operation snapshots."),
) -> None:
    """Normalize provided specifications into operation snapshots."""

    for spec_path in spec:
        try:
            normalized = normalize_spec(spec_path)
        except (UnsupportedSpecError, MalformedSpecError, ValidationError) as exc:
            raise typer.BadParameter(f"{spec_path}: {exc}") from exc

        snapshot_path = _persist_snapshot(normalized, output_dir)
        typer.secho(
            f"Saved {len(normalized.operations)} operations -> {snapshot_path}",
            fg=typer.colors.GREEN,
        )


def run() -> None:
    """CLI entry point for console_scripts."""

    app()


if __name__ == "__main__":  # pragma: no cover
    run()
