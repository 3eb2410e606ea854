from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pandas as pd
import pytest

from amdstats.summary.categories import (
    DEFAULT_CATEGORIES,
    ENVIRONMENTAL_METAGENOME,
    HOST_METAGENOME,
    HOST_SINGLE_GENOME,
)

COLUMNS = [
    "project_name",
    "publication_year",
    "publication_doi",
    "site_name",
    "latitude",
    "longitude",
    "geo_loc_name",
    "sample_name",
    "sample_age",
]


def sample(name: str, doi: str, year: int, country: str, lat=None, lon=None, age=None) -> Dict[str, object]:
    return {
        "project_name": f"{doi}_project",
        "publication_year": year,
        "publication_doi": doi,
        "site_name": f"{country} site",
        "latitude": lat,
        "longitude": lon,
        "geo_loc_name": country,
        "sample_name": name,
        "sample_age": age,
    }


SAMPLE_LISTS: Dict[str, List[Dict[str, object]]] = {
    HOST_METAGENOME.label: [
        sample("s1", "10.1/a", 2010, "Germany", 50.0, 8.0, 1000),
        sample("s2", "10.1/a", 2010, "Germany", 50.0, 8.0, 1000),
        sample("s3", "10.1/b", 2012, "Denmark", 56.0, 10.0, 3000),
        sample("s3", "10.1/b", 2012, "Denmark", 56.0, 10.0, 3000),
        sample("s4", "10.1/b", 2012, "Denmark", None, None, 60000),
    ],
    HOST_SINGLE_GENOME.label: [
        sample("g1", "10.1/c", 2011, "Peru", -12.0, -77.0, 500),
        sample("g2", "10.1/a", 2010, "Germany", 50.0, 8.0, 1200),
    ],
    ENVIRONMENTAL_METAGENOME.label: [
        sample("e1", "10.1/d", 2014, "Canada", 60.0, -135.0, 30000),
    ],
}


def write_tsv(path: Path, rows: List[Dict[str, object]], columns: List[str] = COLUMNS) -> Path:
    pd.DataFrame(rows, columns=columns).to_csv(path, sep="\t", index=False)
    return path


def tagged(rows: List[Dict[str, object]], label: str) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=COLUMNS).assign(list_label=label)
    return df.astype({"publication_year": "Int64", "latitude": float, "longitude": float, "sample_age": float})


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "lists"
    directory.mkdir()
    for category in DEFAULT_CATEGORIES:
        write_tsv(directory / category.filename, SAMPLE_LISTS[category.label])
    return directory


@pytest.fixture
def tables() -> List[pd.DataFrame]:
    return [tagged(SAMPLE_LISTS[label], label) for label in DEFAULT_CATEGORIES.labels]
