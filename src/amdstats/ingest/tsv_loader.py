"""TSV ingestion utilities for published sample lists."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from amdstats.errors import DataSourceError
from .models import REQUIRED_COLUMNS

logger = logging.getLogger(__name__)

TEXT_COLUMNS = ("sample_name", "publication_doi", "geo_loc_name")
FLOAT_COLUMNS = ("latitude", "longitude", "sample_age")


def load(path: Union[str, Path], category_label: str) -> pd.DataFrame:
    """Read a tab-separated sample list and tag every row with ``category_label``."""
    path = Path(path)
    if not path.is_file():
        raise DataSourceError(f"Sample list not found: {path}")

    try:
        df = pd.read_csv(path, sep="\t", dtype={column: str for column in TEXT_COLUMNS})
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as exc:
        raise DataSourceError(f"Could not parse {path}: {exc}") from exc

    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise DataSourceError(f"{path} is missing required columns: {', '.join(missing)}")

    year = pd.to_numeric(df["publication_year"], errors="coerce")
    # Fractional years are not rounded; they become missing and show up as issues.
    year = year.where(year.mod(1).eq(0))
    coerced = {
        "publication_year": year.astype("Int64"),
        **{column: pd.to_numeric(df[column], errors="coerce").astype(float) for column in FLOAT_COLUMNS},
    }
    invalid = int((df["publication_year"].notna() & year.isna()).sum())
    if invalid:
        logger.warning("%d rows in %s have an unusable publication_year", invalid, path)
    df = df.assign(list_label=category_label, **coerced)
    logger.info("Loaded %d rows for %s from %s", len(df), category_label, path)
    return df
