"""Chart rendering for the summary tables."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd
from matplotlib.figure import Figure

from amdstats.errors import ConfigurationError, SchemaError
from amdstats.summary.categories import CategorySet

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("png", "svg")


def resolve_colors(
    table: pd.DataFrame, categories: CategorySet, colors: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Return label -> color for the categories present in ``table``, in category order.

    Categories of the set that have no rows are left out. A category that has
    rows but no color is a configuration error.
    """
    palette = dict(colors) if colors is not None else categories.palette()
    present = set(table["list_label"].dropna().astype(str))
    categories.check_labels(present)
    uncolored = [label for label in categories.labels if label in present and not palette.get(label)]
    if uncolored:
        raise ConfigurationError(f"No color configured for: {', '.join(uncolored)}")
    return {label: palette[label] for label in categories.labels if label in present}


def _require(table: pd.DataFrame, columns: Tuple[str, ...]) -> None:
    missing = [column for column in columns if column not in table.columns]
    if missing:
        raise SchemaError(f"Summary table is missing columns: {', '.join(missing)}")


def _facets(count: int, width: float = 8, height: float = 2.2) -> Tuple[Figure, List]:
    fig = Figure(figsize=(width, max(height * count, 3)))
    axes = fig.subplots(nrows=max(count, 1), ncols=1, sharex=True, squeeze=False)
    return fig, [row[0] for row in axes]


def plot_pub_timeline(
    table: pd.DataFrame, categories: CategorySet, colors: Optional[Mapping[str, str]] = None
) -> Figure:
    """Bar chart of publications per year, one facet per category."""
    _require(table, ("list_label", "publication_year", "count"))
    palette = resolve_colors(table, categories, colors)
    fig, axes = _facets(len(palette))
    for ax, (label, color) in zip(axes, palette.items()):
        subset = table[table["list_label"] == label]
        ax.bar(subset["publication_year"], subset["count"], color=color, width=0.8)
        ax.set_title(label, fontsize=10, loc="left")
        ax.set_ylabel("Publications")
        ax.grid(alpha=0.3)
    axes[-1].set_xlabel("Publication year")
    fig.tight_layout()
    return fig


def plot_cumulative(
    table: pd.DataFrame, categories: CategorySet, colors: Optional[Mapping[str, str]] = None
) -> Figure:
    """Cumulative samples over publication years, one line per category."""
    _require(table, ("list_label", "publication_year", "cumulative_sum"))
    palette = resolve_colors(table, categories, colors)
    fig = Figure(figsize=(8, 5))
    ax = fig.subplots()
    for label, color in palette.items():
        subset = table[table["list_label"] == label]
        ax.plot(subset["publication_year"], subset["cumulative_sum"], color=color, label=label, linewidth=2)
    ax.set_xlabel("Publication year")
    ax.set_ylabel("Cumulative number of samples")
    ax.legend(loc="upper left", fontsize=9)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig


def plot_geo(table: pd.DataFrame, categories: CategorySet, colors: Optional[Mapping[str, str]] = None) -> Figure:
    """Scatter of sample locations on a longitude/latitude plane, sized by count."""
    _require(table, ("list_label", "latitude", "longitude", "count"))
    palette = resolve_colors(table, categories, colors)
    fig = Figure(figsize=(10, 5.5))
    ax = fig.subplots()
    located = table.dropna(subset=["latitude", "longitude"])
    for label, color in palette.items():
        subset = located[located["list_label"] == label]
        ax.scatter(
            subset["longitude"],
            subset["latitude"],
            s=12 + subset["count"] * 4,
            color=color,
            alpha=0.6,
            edgecolors="white",
            linewidths=0.5,
            label=label,
        )
    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_aspect("equal")
    ax.legend(loc="lower left", fontsize=8)
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig


def plot_age(
    table: pd.DataFrame,
    categories: CategorySet,
    colors: Optional[Mapping[str, str]] = None,
    bins: int = 50,
) -> Figure:
    """Histogram of sample ages (years BP), one facet per category."""
    _require(table, ("list_label", "sample_age", "count"))
    palette = resolve_colors(table, categories, colors)
    fig, axes = _facets(len(palette))
    for ax, (label, color) in zip(axes, palette.items()):
        subset = table[table["list_label"] == label]
        ax.hist(subset["sample_age"], weights=subset["count"], bins=bins, color=color)
        ax.set_title(label, fontsize=10, loc="left")
        ax.set_ylabel("Samples")
        ax.grid(alpha=0.3)
    axes[-1].set_xlabel("Sample age (years BP)")
    fig.tight_layout()
    return fig


def export_figure(fig: Figure, output_dir: Path, stem: str, dpi: int = 300) -> List[Path]:
    """Write ``fig`` as a raster and a vector image; returns the written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for fmt in EXPORT_FORMATS:
        path = output_dir / f"{stem}.{fmt}"
        fig.savefig(path, format=fmt, dpi=dpi, bbox_inches="tight")
        logger.info("Chart written to %s", path)
        paths.append(path)
    return paths
