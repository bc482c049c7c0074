"""Typer CLI entrypoint for scorecard aggregation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .logging import configure_logging
from .schemas.config import load_config

app = typer.Typer(help="Recruiting scorecard aggregation CLI.")


@app.command()
def run(
    config: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Scorecard configuration (JSON or YAML)."),
    submissions: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Submissions JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    settings: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML settings path."),
    ascending: bool = typer.Option(False, "--ascending", help="Rank lowest-rated applications first."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Aggregate scorecards per application and rank them."""
    overrides: dict[str, Any] = {}
    if settings:
        with settings.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise typer.BadParameter("Settings file must be a YAML object", param_name="settings")
        try:
            overrides = load_config(loaded).to_settings()
        except ValidationError as exc:
            raise typer.BadParameter(str(exc), param_name="settings") from exc

    configure_logging(log_level)

    container = create_container(settings=overrides)
    pipeline = container.pipeline()

    results = pipeline.run(
        config_path=config,
        submissions_path=submissions,
        output_path=output,
        descending=False if ascending else None,
    )
    typer.echo(f"Aggregated {len(results)} applications. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
