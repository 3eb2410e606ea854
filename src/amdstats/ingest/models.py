"""Data models for ingestion layer."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pandas as pd
from pydantic import BaseModel, Field, ValidationError


class SampleRecord(BaseModel):
    """One row of a published sample list."""

    list_label: str
    sample_name: str
    publication_doi: Optional[str] = None
    publication_year: int
    geo_loc_name: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    sample_age: Optional[float] = Field(default=None, ge=0, description="Years before present")


# Columns every sample list must carry; list_label is added by the loader.
REQUIRED_COLUMNS: Tuple[str, ...] = tuple(name for name in SampleRecord.model_fields if name != "list_label")


def _clean(row: Dict[str, object]) -> Dict[str, object]:
    cleaned: Dict[str, object] = {}
    for key, value in row.items():
        if pd.isna(value):
            cleaned[key] = None
        else:
            # numpy scalars -> builtins
            cleaned[key] = value.item() if hasattr(value, "item") else value
    return cleaned


def inspect_records(table: pd.DataFrame) -> List[str]:
    """Validate every row against SampleRecord and describe the ones that fail.

    Failing rows are reported, not removed; each aggregation drops what it
    cannot use on its own.
    """
    issues: List[str] = []
    columns = [name for name in SampleRecord.model_fields if name in table.columns]
    for idx, row in enumerate(table[columns].to_dict(orient="records")):
        try:
            SampleRecord.model_validate(_clean(row))
        except ValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            label = row.get("list_label", "?")
            issues.append(f"{label}: row {idx} ({row.get('sample_name')}) invalid {', '.join(fields)}")
    return issues
