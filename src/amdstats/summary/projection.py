"""Column projection and exact-duplicate removal across sample lists."""
from __future__ import annotations

from typing import AbstractSet, Iterable, List, Sequence, Union

import pandas as pd

from amdstats.errors import SchemaError

Columns = Union[Sequence[str], AbstractSet[str]]


def _ordered_columns(tables: Sequence[pd.DataFrame], columns: Columns) -> List[str]:
    if not isinstance(columns, AbstractSet):
        return list(dict.fromkeys(columns))
    # Sets carry no order; follow the first table so output is stable across runs.
    reference: Iterable[str] = tables[0].columns if tables else ()
    ordered = [column for column in reference if column in columns]
    return ordered + sorted(set(columns) - set(ordered))


def project_distinct(tables: Sequence[pd.DataFrame], columns: Columns) -> pd.DataFrame:
    """Select ``columns`` from every table, stack them and drop exact duplicates.

    Tables are stacked in the order given and rows keep their original order;
    the first occurrence of a duplicated row wins. Missing values compare
    equal to each other when detecting duplicates.
    """
    selected = _ordered_columns(tables, columns)
    projected = []
    for position, table in enumerate(tables):
        missing = [column for column in selected if column not in table.columns]
        if missing:
            raise SchemaError(f"Table {position} is missing columns: {', '.join(missing)}")
        projected.append(table[selected])

    if not projected:
        return pd.DataFrame(columns=selected)

    combined = pd.concat(projected, ignore_index=True)
    return combined.drop_duplicates(keep="first").reset_index(drop=True)
