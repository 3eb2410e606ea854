"""Command line entry point for building the sample directory report."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from amdstats.config import Settings, get_settings
from amdstats.errors import AmdStatsError
from amdstats.report import build_report, load_sample_lists, summarize
from amdstats.summary.categories import active_categories

app = typer.Typer(help="Summarize the ancient metagenome sample lists into charts and a report")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")


@app.command()
def run(
    data_dir: Optional[Path] = typer.Option(None, help="Directory with one sample list TSV per category"),
    output_dir: Optional[Path] = typer.Option(None, help="Where charts, tables and report.md are written"),
    max_age: Optional[float] = typer.Option(
        None, min=0, help="Only chart samples younger than this (years BP); must be positive"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Load the sample lists, aggregate them and export every chart."""
    configure_logging(verbose)
    overrides = {
        key: value
        for key, value in {"data_dir": data_dir, "output_dir": output_dir, "max_sample_age": max_age}.items()
        if value is not None
    }
    try:
        settings = Settings(**{**get_settings().model_dump(), **overrides})
    except ValidationError as exc:
        typer.secho(f"Invalid settings: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    categories = active_categories(settings.include_anthropogenic)

    try:
        tables = load_sample_lists(settings.data_dir, categories)
        artifacts = build_report(tables, categories, settings)
    except AmdStatsError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    summary = artifacts.summary
    if summary.issues:
        typer.secho(f"{len(summary.issues)} rows failed validation; see report.md", fg=typer.colors.YELLOW)
    typer.secho(
        f"{summary.total_samples} samples from {summary.distinct_publications} publications "
        f"in {summary.distinct_locations} countries.",
        fg=typer.colors.GREEN,
    )
    typer.secho(f"Report written to {artifacts.markdown_path}", fg=typer.colors.GREEN)


@app.command()
def summary(
    data_dir: Optional[Path] = typer.Option(None, help="Directory with one sample list TSV per category"),
) -> None:
    """Print the headline numbers without rendering charts."""
    settings = get_settings()
    categories = active_categories(settings.include_anthropogenic)
    try:
        tables = load_sample_lists(data_dir or settings.data_dir, categories)
        result = summarize(tables, categories)
    except AmdStatsError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for label, count in result.samples_per_category.items():
        typer.echo(f"{label}: {count}")
    typer.echo(f"Total samples: {result.total_samples}")
    typer.echo(f"Publications: {result.distinct_publications}")
    typer.echo(f"Countries: {result.distinct_locations}")


if __name__ == "__main__":  # pragma: no cover
    app()
