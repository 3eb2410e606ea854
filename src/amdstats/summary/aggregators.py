"""Aggregations that reshape loaded sample lists into plot-ready summary tables.

Every aggregator takes the loaded tables (one per source list), projects the
columns it needs, removes exact duplicates so that a publication or sample
listed several times is counted once, and groups by category plus its own
dimensions. The returned frames carry ``list_label`` as an ordered
categorical following the CategorySet and are sorted by it first.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

import pandas as pd

from amdstats.errors import EmptyInputError
from amdstats.summary.categories import DEFAULT_CATEGORIES, CategorySet
from amdstats.summary.projection import project_distinct

logger = logging.getLogger(__name__)

LABEL = "list_label"
YEAR = "publication_year"

PUB_COLUMNS = [LABEL, "publication_doi", YEAR]
CUMULATIVE_COLUMNS = [LABEL, "sample_name", YEAR]
GEO_COLUMNS = [LABEL, "sample_name", "geo_loc_name", "latitude", "longitude", YEAR]
AGE_COLUMNS = [LABEL, "sample_name", "geo_loc_name", "latitude", "longitude", "sample_age", YEAR]
GEO_KEYS = ["geo_loc_name", "latitude", "longitude"]


def _distinct(tables: Sequence[pd.DataFrame], columns: List[str], categories: CategorySet) -> pd.DataFrame:
    deduped = project_distinct(tables, columns)
    categories.check_labels(deduped[LABEL].unique())
    return deduped


def _count(table: pd.DataFrame, keys: List[str]) -> pd.DataFrame:
    return table.groupby(keys, dropna=False, sort=False).size().reset_index(name="count")


def _ordered(table: pd.DataFrame, categories: CategorySet, by: List[str]) -> pd.DataFrame:
    labels = pd.Categorical(table[LABEL], categories=list(categories.labels), ordered=True)
    return table.assign(**{LABEL: labels}).sort_values([LABEL, *by]).reset_index(drop=True)


def aggregate_pub_timeline(
    tables: Sequence[pd.DataFrame], categories: CategorySet = DEFAULT_CATEGORIES
) -> pd.DataFrame:
    """Count distinct publications per category and publication year."""
    deduped = _distinct(tables, PUB_COLUMNS, categories)
    deduped = deduped.dropna(subset=["publication_doi", YEAR]).astype({YEAR: "int64"})
    counts = _count(deduped, [LABEL, YEAR])
    logger.debug("Publication timeline: %d publications in %d groups", len(deduped), len(counts))
    return _ordered(counts, categories, [YEAR])


def build_fill_table(categories: CategorySet, min_year: int, max_year: int) -> pd.DataFrame:
    """Every (category, year) pair in ``[min_year, max_year]`` with a zero count."""
    keys = pd.MultiIndex.from_product(
        [list(categories.labels), range(min_year, max_year + 1)],
        names=[LABEL, YEAR],
    )
    return keys.to_frame(index=False).assign(count=0)


def aggregate_cumulative(
    tables: Sequence[pd.DataFrame], categories: CategorySet = DEFAULT_CATEGORIES
) -> pd.DataFrame:
    """Running total of distinct samples per category over publication years.

    Years without any new samples are present with a zero count, so every
    category has one row per year between the first and last publication
    year observed across all lists.
    """
    deduped = _distinct(tables, CUMULATIVE_COLUMNS, categories)
    deduped = deduped.dropna(subset=[YEAR]).astype({YEAR: "int64"})
    if deduped.empty:
        raise EmptyInputError("No samples with a publication year; cannot derive a year span")

    min_year, max_year = int(deduped[YEAR].min()), int(deduped[YEAR].max())
    fill = build_fill_table(categories, min_year, max_year)
    counts = _count(deduped, [LABEL, YEAR])

    joined = counts.merge(fill, on=[LABEL, YEAR], how="right", suffixes=("", "_fill"))
    joined = joined.assign(count=joined["count"].fillna(joined["count_fill"]).astype("int64"))
    joined = _ordered(joined.drop(columns="count_fill"), categories, [YEAR])

    running = joined.groupby(LABEL, observed=True, sort=False)["count"].cumsum()
    logger.debug("Cumulative timeline: %d-%d across %d categories", min_year, max_year, len(categories))
    return joined.assign(cumulative_sum=running.astype("int64"))


def aggregate_geo(tables: Sequence[pd.DataFrame], categories: CategorySet = DEFAULT_CATEGORIES) -> pd.DataFrame:
    """Count samples per category and location; rows without coordinates are kept."""
    deduped = _distinct(tables, GEO_COLUMNS, categories)
    counts = _count(deduped, [LABEL, *GEO_KEYS])
    logger.debug("Geographic summary: %d locations", len(counts))
    return _ordered(counts, categories, GEO_KEYS)


def aggregate_age(tables: Sequence[pd.DataFrame], categories: CategorySet = DEFAULT_CATEGORIES) -> pd.DataFrame:
    """Count samples per category and age; rows without a non-negative age are left out."""
    deduped = _distinct(tables, AGE_COLUMNS, categories)
    deduped = deduped[deduped["sample_age"].ge(0)]
    counts = _count(deduped, [LABEL, "sample_age"])
    return _ordered(counts, categories, ["sample_age"])


def count_distinct_publications(tables: Sequence[pd.DataFrame]) -> int:
    """Number of distinct DOIs across all lists, ignoring category."""
    return int(project_distinct(tables, ["publication_doi"])["publication_doi"].dropna().nunique())


def count_distinct_locations(tables: Sequence[pd.DataFrame]) -> int:
    """Number of distinct ``geo_loc_name`` values (countries) across all lists."""
    return int(project_distinct(tables, ["geo_loc_name"])["geo_loc_name"].dropna().nunique())


def count_samples(tables: Sequence[pd.DataFrame], categories: CategorySet = DEFAULT_CATEGORIES) -> Dict[str, int]:
    """Distinct sample names per category, in category order (zero for empty lists)."""
    deduped = _distinct(tables, [LABEL, "sample_name"], categories).dropna(subset=["sample_name"])
    sizes = deduped.groupby(LABEL).size()
    return {label: int(sizes.get(label, 0)) for label in categories.labels}
