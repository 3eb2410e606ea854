"""Report assembly: load the sample lists, aggregate, render and export."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd
from pydantic import BaseModel, Field

from amdstats.config import Settings
from amdstats.errors import ConfigurationError
from amdstats.ingest.models import inspect_records
from amdstats.ingest.tsv_loader import load
from amdstats.render.charts import export_figure, plot_age, plot_cumulative, plot_geo, plot_pub_timeline
from amdstats.summary.aggregators import (
    YEAR,
    aggregate_age,
    aggregate_cumulative,
    aggregate_geo,
    aggregate_pub_timeline,
    count_distinct_locations,
    count_distinct_publications,
    count_samples,
)
from amdstats.summary.categories import CategorySet

logger = logging.getLogger(__name__)


class ReportSummary(BaseModel):
    """Headline numbers printed at the top of the report."""

    samples_per_category: Dict[str, int]
    total_samples: int
    distinct_publications: int
    distinct_locations: int
    first_year: Optional[int] = None
    last_year: Optional[int] = None
    issues: List[str] = Field(default_factory=list)


class ReportArtifacts(BaseModel):
    summary: ReportSummary
    charts: Dict[str, List[Path]] = Field(default_factory=dict)
    tables: Dict[str, Path] = Field(default_factory=dict)
    summary_path: Optional[Path] = None
    markdown_path: Optional[Path] = None


def load_sample_lists(data_dir: Path, categories: CategorySet) -> List[pd.DataFrame]:
    """Load one table per category from ``data_dir``, in category order."""
    tables = []
    for category in categories:
        if not category.filename:
            raise ConfigurationError(f"No sample list file configured for {category.label}")
        tables.append(load(data_dir / category.filename, category.label))
    return tables


def filter_by_age(table: pd.DataFrame, max_age: float) -> pd.DataFrame:
    """Keep rows strictly younger than ``max_age`` years BP."""
    return table[table["sample_age"] < max_age].reset_index(drop=True)


def summarize(tables: Sequence[pd.DataFrame], categories: CategorySet) -> ReportSummary:
    samples = count_samples(tables, categories)
    years = pd.Series(dtype="Int64")
    if tables:
        years = pd.concat([table[YEAR] for table in tables], ignore_index=True).dropna()
    issues = [issue for table in tables for issue in inspect_records(table)]
    return ReportSummary(
        samples_per_category=samples,
        total_samples=sum(samples.values()),
        distinct_publications=count_distinct_publications(tables),
        distinct_locations=count_distinct_locations(tables),
        first_year=int(years.min()) if not years.empty else None,
        last_year=int(years.max()) if not years.empty else None,
        issues=issues,
    )


def write_summary_tables(tables: Dict[str, pd.DataFrame], output_dir: Path) -> Dict[str, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    for name, table in tables.items():
        path = output_dir / f"{name}.tsv"
        table.to_csv(path, sep="\t", index=False)
        written[name] = path
    return written


def render_markdown(artifacts: ReportArtifacts, output_dir: Path) -> str:
    summary = artifacts.summary
    lines = [
        "# Ancient metagenome sample directory summary",
        "",
        f"- Samples: {summary.total_samples}",
        f"- Publications: {summary.distinct_publications}",
        f"- Countries: {summary.distinct_locations}",
    ]
    if summary.first_year is not None:
        lines.append(f"- Publication years: {summary.first_year}-{summary.last_year}")
    lines += ["", "## Samples per list", ""]
    lines += [f"- {label}: {count}" for label, count in summary.samples_per_category.items()]
    lines += ["", "## Charts", ""]
    for name, paths in artifacts.charts.items():
        links = ", ".join(f"[{path.suffix[1:]}]({path.relative_to(output_dir)})" for path in paths)
        lines.append(f"- {name}: {links}")
    if summary.issues:
        lines += ["", "## Data issues", ""]
        lines += [f"- {issue}" for issue in summary.issues]
    return "\n".join(lines) + "\n"


def build_report(tables: Sequence[pd.DataFrame], categories: CategorySet, settings: Settings) -> ReportArtifacts:
    """Aggregate the loaded lists, export every chart and write the summary files."""
    output_dir = settings.output_dir
    summary_tables = {
        "publication_timeline": aggregate_pub_timeline(tables, categories),
        "cumulative_samples": aggregate_cumulative(tables, categories),
        "sample_locations": aggregate_geo(tables, categories),
        "sample_ages": filter_by_age(aggregate_age(tables, categories), settings.max_sample_age),
    }
    plotters = {
        "publication_timeline": plot_pub_timeline,
        "cumulative_samples": plot_cumulative,
        "sample_locations": plot_geo,
        "sample_ages": plot_age,
    }
    # All figures exist before the first file is written.
    figures = {name: plot(summary_tables[name], categories) for name, plot in plotters.items()}

    artifacts = ReportArtifacts(summary=summarize(tables, categories))
    artifacts.charts = {
        name: export_figure(fig, output_dir / "figures", name, dpi=settings.figure_dpi) for name, fig in figures.items()
    }
    artifacts.tables = write_summary_tables(summary_tables, output_dir / "tables")

    artifacts.summary_path = output_dir / "summary.json"
    artifacts.summary_path.write_text(artifacts.summary.model_dump_json(indent=2) + "\n", encoding="utf-8")
    artifacts.markdown_path = output_dir / "report.md"
    artifacts.markdown_path.write_text(render_markdown(artifacts, output_dir), encoding="utf-8")
    logger.info("Report written to %s", output_dir)
    return artifacts
